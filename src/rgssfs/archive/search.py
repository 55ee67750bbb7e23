#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
脚本全文搜索

逐条扫描脚本内容，按行查找字面子串，生成带上下文的纯文本报告:

    001_Main.rb:
     8  def update
     9:   refresh
    10  end
    ...
    40:   refresh

    2 matches in 1 file
"""

import enum
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence, Tuple

from ..core.schema import ScriptRecord
from ..utils import pluralize


class LineKind(str, enum.Enum):
    """报告行类型"""
    TITLE = "title"
    CONTEXT = "context"
    MATCH = "match"
    MESSAGE = "message"


@dataclass(frozen=True)
class SearchLine:
    """
    报告中的一行

    Attributes:
        kind: 行类型
        text: 渲染后的文本
        index: 所属脚本序号，消息行为 -1
        line: 1 起始的行号，标题、省略和消息行为 0
    """
    kind: LineKind
    text: str
    index: int = -1
    line: int = 0


@dataclass
class SearchReport:
    """搜索结果"""
    needle: str
    lines: List[SearchLine] = field(default_factory=list)
    match_count: int = 0
    file_count: int = 0

    def render(self) -> str:
        """渲染为纯文本"""
        return "\n".join(line.text for line in self.lines)

    def matches(self) -> List[SearchLine]:
        """全部匹配行"""
        return [line for line in self.lines if line.kind is LineKind.MATCH]


@dataclass
class _FileHits:
    index: int
    title: str
    lines: List[str]
    hits: Dict[int, int]
    blocks: List[Tuple[int, int]]


def _split_lines(payload: bytes) -> List[str]:
    text = payload.decode("utf-8", errors="replace")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _merge_blocks(hit_lines: Sequence[int], context: int, line_count: int) -> List[Tuple[int, int]]:
    """把每个匹配行前后 context 行合并为不重叠的区间 (闭区间，0 起始)"""
    blocks: List[Tuple[int, int]] = []
    for n in hit_lines:
        start = max(0, n - context)
        end = min(line_count - 1, n + context)
        if blocks and start <= blocks[-1][1] + 1:
            blocks[-1] = (blocks[-1][0], max(blocks[-1][1], end))
        else:
            blocks.append((start, end))
    return blocks


def search_records(
    records: Sequence[ScriptRecord],
    needle: str,
    namer: Callable[[int, str], str],
    context: int = 2
) -> SearchReport:
    """
    在脚本内容中查找字面子串

    每行按从左到右、互不重叠的方式计数。

    Args:
        records: 归档中的记录
        needle: 要查找的字符串，空串视为无匹配
        namer: (序号, 标题) -> 规范文件名
        context: 匹配行前后保留的上下文行数

    Returns:
        SearchReport
    """
    report = SearchReport(needle=needle)
    found: List[_FileHits] = []

    if needle:
        for index, record in enumerate(records):
            if not record.payload:
                continue
            lines = _split_lines(record.payload)
            hits = {}
            for n, line in enumerate(lines):
                count = line.count(needle)
                if count:
                    hits[n] = count
            if not hits:
                continue
            report.match_count += sum(hits.values())
            blocks = _merge_blocks(sorted(hits), context, len(lines))
            found.append(_FileHits(index, record.title, lines, hits, blocks))

    report.file_count = len(found)
    if not found:
        report.lines.append(SearchLine(LineKind.MESSAGE, "0 matches"))
        return report

    width = len(str(max(item.blocks[-1][1] + 1 for item in found)))
    out = report.lines

    for position, item in enumerate(found):
        if position:
            out.append(SearchLine(LineKind.MESSAGE, ""))
        out.append(SearchLine(LineKind.TITLE, f"{namer(item.index, item.title)}:", item.index))
        for block_no, (start, end) in enumerate(item.blocks):
            if block_no:
                out.append(SearchLine(LineKind.CONTEXT, "...".rjust(width), item.index))
            for n in range(start, end + 1):
                number = str(n + 1).rjust(width)
                if n in item.hits:
                    out.append(SearchLine(LineKind.MATCH, f"{number}: {item.lines[n]}", item.index, n + 1))
                else:
                    out.append(SearchLine(LineKind.CONTEXT, f"{number}  {item.lines[n]}", item.index, n + 1))

    out.append(SearchLine(LineKind.MESSAGE, ""))
    out.append(SearchLine(
        LineKind.MESSAGE,
        f"{pluralize(report.match_count, 'match', 'matches')} in "
        f"{pluralize(report.file_count, 'file')}"
    ))
    return report
