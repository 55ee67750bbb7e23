#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
归档模型

在 ArchiveEntry 上执行所有修改操作。每个操作:

1. 修改内存中的记录列表，同时收集变更事件
2. 裁剪末尾占位记录
3. 写回涉及的归档 (每个归档一次)
4. 将事件交给合并器

没有事务和回滚: 多步操作中途失败时，已完成的步骤不会撤销。
跨归档重命名是两次独立写回，第二次写回失败会使两个归档不一致。
"""

import logging
from typing import List, Tuple

from .cache import ArchiveCache
from .search import SearchReport, search_records
from ..core.schema import (
    MAX_INDEX,
    ROOT_INDEX,
    ArchiveEntry,
    FileChangeEvent,
    FileChangeType,
    ScriptRecord,
    new_tag,
)
from ..exceptions import AlreadyExistsError, NotFoundError
from ..notify import ChangeBatcher
from ..paths import PathResolver

logger = logging.getLogger(__name__)


class ArchiveModel:
    """
    归档修改操作

    记录状态只有三种: 不存在、占位 (标题和内容均为空)、有内容。
    """

    def __init__(self, cache: ArchiveCache, resolver: PathResolver, batcher: ChangeBatcher):
        self._cache = cache
        self._resolver = resolver
        self._batcher = batcher

    @property
    def cache(self) -> ArchiveCache:
        return self._cache

    # ==================== 内部工具 ====================

    def _path(self, entry: ArchiveEntry, index: int, title: str) -> str:
        return self._resolver.join(entry.path, index, title)

    def _event(self, change: FileChangeType, entry: ArchiveEntry, index: int, title: str) -> FileChangeEvent:
        return FileChangeEvent(change, self._path(entry, index, title))

    def _commit(self, entries: List[ArchiveEntry], events: List[FileChangeEvent]) -> None:
        """写回涉及的归档 (同一归档只写一次)，然后发出事件"""
        flushed = set()
        for entry in entries:
            if entry.path in flushed:
                continue
            self._cache.flush(entry)
            flushed.add(entry.path)
        self._batcher.fire_soon(*events)

    def _vacate(self, entry: ArchiveEntry, index: int, events: List[FileChangeEvent]) -> ScriptRecord:
        """
        腾空一个槽位

        最后一个槽位直接移除，其余槽位变为占位记录。
        """
        record = entry.records[index]
        last = index == len(entry.records) - 1
        if not last and record.is_placeholder:
            return record

        events.append(self._event(FileChangeType.DELETED, entry, index, record.title))
        if last:
            entry.records.pop()
        else:
            record.clear()
            events.append(self._event(FileChangeType.CREATED, entry, index, ""))
        return record

    # ==================== 基础操作 ====================

    def ensure(
        self,
        entry: ArchiveEntry,
        index: int,
        events: List[FileChangeEvent],
        title: str = ""
    ) -> ScriptRecord:
        """
        确保槽位存在

        不足时逐个追加占位记录直到长度为 index + 1，每追加一个发出一条 Created。
        新追加的目标槽位直接使用 title。

        Returns:
            index 处的记录
        """
        if not 0 <= index <= MAX_INDEX:
            raise ValueError(f"序号超出范围 0 ~ {MAX_INDEX}: {index}")
        while len(entry.records) <= index:
            slot = len(entry.records)
            record = ScriptRecord(tag=new_tag(), title=title if slot == index else "")
            entry.records.append(record)
            events.append(self._event(FileChangeType.CREATED, entry, slot, record.title))
        return entry.records[index]

    def trim(self, entry: ArchiveEntry, events: List[FileChangeEvent], watched: int = ROOT_INDEX) -> int:
        """
        裁剪末尾的占位记录

        从末尾开始，逐个移除标题和内容均为空的记录并发出 Deleted，
        遇到第一条非空记录即停止。

        若被观察的槽位 (watched >= 0) 也在被移除之列，额外发出一条 Changed:
        调用方的操作本身成功了，但它指向的物理槽位已经不存在。
        watched 为 ROOT_INDEX 时不发出 Changed。

        Returns:
            移除的记录数
        """
        removed = 0
        watched_path = None
        while entry.records and entry.records[-1].is_placeholder:
            index = len(entry.records) - 1
            record = entry.records.pop()
            path = self._path(entry, index, record.title)
            events.append(FileChangeEvent(FileChangeType.DELETED, path))
            if index == watched:
                watched_path = path
            removed += 1

        if watched_path is not None:
            events.append(FileChangeEvent(FileChangeType.CHANGED, watched_path))
        if removed:
            logger.debug("裁剪 %s 末尾 %d 条占位记录", entry.path, removed)
        return removed

    # ==================== 修改操作 ====================

    def write(self, entry: ArchiveEntry, index: int, title: str, payload: bytes) -> ScriptRecord:
        """
        写入脚本

        标题变化时先发出旧名的 Deleted 再发出新名的 Created，最后发出 Changed。
        """
        events: List[FileChangeEvent] = []
        record = self.ensure(entry, index, events, title)

        if record.title != title:
            events.append(self._event(FileChangeType.DELETED, entry, index, record.title))
            record.title = title
            events.append(self._event(FileChangeType.CREATED, entry, index, title))

        record.payload = bytes(payload)
        events.append(self._event(FileChangeType.CHANGED, entry, index, title))

        self.trim(entry, events, watched=index)
        self._commit([entry], events)
        logger.debug("写入 %s #%d %r (%d 字节)", entry.path, index, title, len(record.payload))
        return record

    def rename(
        self,
        source: ArchiveEntry,
        src_index: int,
        target: ArchiveEntry,
        dst_index: int,
        title: str,
        overwrite: bool = False
    ) -> ScriptRecord:
        """
        重命名 / 移动脚本

        同一归档同一序号只修改标题；
        否则把标识和内容移到目标槽位，并腾空源槽位。

        Raises:
            NotFoundError: 源槽位不存在
            AlreadyExistsError: 目标槽位有内容且未指定 overwrite (此时不做任何修改)
        """
        src_record = source.record_at(src_index)
        if src_record is None:
            raise NotFoundError(self._path(source, src_index, ""))

        events: List[FileChangeEvent] = []

        if source is target and src_index == dst_index:
            if src_record.title != title:
                events.append(self._event(FileChangeType.DELETED, source, src_index, src_record.title))
                src_record.title = title
                events.append(self._event(FileChangeType.CREATED, source, src_index, title))
            self.trim(source, events, watched=dst_index)
            self._commit([source], events)
            return src_record

        dst_record = target.record_at(dst_index)
        if dst_record is not None and not dst_record.is_placeholder and not overwrite:
            raise AlreadyExistsError(self._path(target, dst_index, dst_record.title))

        tag, payload = src_record.tag, src_record.payload
        self._vacate(source, src_index, events)
        if src_index < len(source.records):
            # 源槽位保留为占位记录，标识不能与移走的脚本重复
            source.records[src_index].tag = new_tag()

        appended = dst_index >= len(target.records)
        dst_record = self.ensure(target, dst_index, events, title)
        if not appended:
            if dst_record.title != title:
                events.append(self._event(FileChangeType.DELETED, target, dst_index, dst_record.title))
                events.append(self._event(FileChangeType.CREATED, target, dst_index, title))
            else:
                events.append(self._event(FileChangeType.CHANGED, target, dst_index, title))

        dst_record.tag = tag
        dst_record.title = title
        dst_record.payload = payload

        if source is target:
            self.trim(target, events, watched=dst_index)
        else:
            self.trim(source, events)
            self.trim(target, events, watched=dst_index)

        self._commit([source, target], events)
        logger.debug(
            "移动 %s #%d -> %s #%d %r", source.path, src_index, target.path, dst_index, title
        )
        return dst_record

    def delete(self, entry: ArchiveEntry, index: int) -> None:
        """
        删除脚本

        最后一个槽位直接移除，其余槽位变为占位记录，然后裁剪末尾占位记录。

        Raises:
            NotFoundError: 槽位不存在
        """
        if entry.record_at(index) is None:
            raise NotFoundError(self._path(entry, index, ""))

        events: List[FileChangeEvent] = []
        self._vacate(entry, index, events)
        self.trim(entry, events)
        self._commit([entry], events)
        logger.debug("删除 %s #%d", entry.path, index)

    def insert(self, entry: ArchiveEntry, index: int, title: str, payload: bytes = b"") -> ScriptRecord:
        """
        在 index 处插入新脚本，其后的脚本序号依次加一

        index 超出末尾时等同于 write()。
        """
        if index >= len(entry.records):
            return self.write(entry, index, title, payload)
        if index < 0:
            raise ValueError(f"序号不能为负数: {index}")

        events: List[FileChangeEvent] = []
        shifted = entry.records[index:]
        for offset, record in enumerate(shifted):
            events.append(self._event(FileChangeType.DELETED, entry, index + offset, record.title))

        record = ScriptRecord(tag=new_tag(), title=title, payload=bytes(payload))
        entry.records.insert(index, record)

        events.append(self._event(FileChangeType.CREATED, entry, index, title))
        for offset, moved in enumerate(shifted, start=1):
            events.append(self._event(FileChangeType.CREATED, entry, index + offset, moved.title))

        self._commit([entry], events)
        logger.debug("插入 %s #%d %r，后移 %d 条脚本", entry.path, index, title, len(shifted))
        return record

    # ==================== 查询操作 ====================

    def list(self, entry: ArchiveEntry) -> List[str]:
        """按序号排列的标题列表 (占位记录为空字符串)"""
        return [record.title for record in entry.records]

    def find(self, entry: ArchiveEntry, query: str) -> List[Tuple[int, str]]:
        """
        按文件名查找脚本

        查询字符按顺序出现在规范文件名中即视为匹配 (忽略大小写)，
        占位记录不参与匹配。

        Returns:
            [(序号, 标题), ...]
        """
        needle = query.lower()
        result = []
        for index, record in enumerate(entry.records):
            if record.is_placeholder:
                continue
            name = self._resolver.format(index, record.title).lower()
            position = 0
            for char in needle:
                position = name.find(char, position)
                if position < 0:
                    break
                position += 1
            else:
                result.append((index, record.title))
        return result

    def search(self, entry: ArchiveEntry, needle: str, context: int = 2) -> SearchReport:
        """在所有脚本内容中查找字面子串"""
        return search_records(entry.records, needle, self._resolver.format, context)
