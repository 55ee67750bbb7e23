#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
虚拟路径解析

虚拟路径格式:

    {归档绝对路径}                      归档本身 (目录)
    {归档绝对路径}/{序号:03d}_{标题}.rb  归档中的一条脚本

归档路径以标记段 (默认 Scripts.rvdata2) 结尾。
序号超过 MAX_INDEX 的路径无法解析，避免一次写入追加海量占位记录。
"""

import re
from typing import Optional

from .core.schema import MAX_INDEX, ParsedPath, ROOT_INDEX
from .utils import normalize_path, pad_index


SEPARATOR = "/"

_NAME_PATTERN = re.compile(r"^([0-9]+)_(.*)$", re.DOTALL)


class PathResolver:
    """
    虚拟路径 <-> (归档路径, 序号, 标题) 的双向映射

    format() 与 parse() 互为逆运算:
    对任意非负序号和不含分隔符的标题，parse(format(i, t)) 还原 (i, t)。
    """

    def __init__(self, marker: str = "Scripts.rvdata2", suffix: str = ".rb", index_width: int = 3):
        """
        Args:
            marker: 归档文件名，必须作为完整路径段出现
            suffix: 脚本文件名后缀
            index_width: 序号补零宽度
        """
        self._marker = marker
        self._suffix = suffix
        self._index_width = index_width

    @property
    def marker(self) -> str:
        return self._marker

    def _find_marker(self, path: str) -> int:
        """返回标记段结束位置，未找到返回 -1"""
        start = 0
        while True:
            pos = path.find(self._marker, start)
            if pos < 0:
                return -1
            end = pos + len(self._marker)
            at_segment_start = pos == 0 or path[pos - 1] == SEPARATOR
            at_segment_end = end == len(path) or path[end] == SEPARATOR
            if at_segment_start and at_segment_end:
                return end
            start = pos + 1

    def parse(self, path: str) -> Optional[ParsedPath]:
        """
        解析虚拟路径

        Args:
            path: 虚拟路径 (可使用 \\ 分隔符)

        Returns:
            ParsedPath，无法解析时返回 None
        """
        path = normalize_path(path)
        end = self._find_marker(path)
        if end < 0:
            return None

        file = path[:end]
        if end == len(path):
            return ParsedPath(file=file, index=ROOT_INDEX, title="")

        # 标记段之后必须紧跟分隔符 (_find_marker 已保证)
        name = path[end + 1:]
        match = _NAME_PATTERN.match(name)
        if not match:
            return None

        digits, title = match.groups()
        index = int(digits)
        if index > MAX_INDEX:
            return None

        if self._suffix and title.endswith(self._suffix):
            title = title[:-len(self._suffix)]

        # 拒绝嵌套路径
        if SEPARATOR in title:
            return None

        return ParsedPath(file=file, index=index, title=title)

    def format(self, index: int, title: str) -> str:
        """
        生成脚本的规范文件名

        Examples:
            >>> PathResolver().format(7, "Main")
            '007_Main.rb'
        """
        return f"{pad_index(index, self._index_width)}_{title}{self._suffix}"

    def join(self, file: str, index: int, title: str) -> str:
        """生成脚本的完整虚拟路径"""
        return f"{file}{SEPARATOR}{self.format(index, title)}"
