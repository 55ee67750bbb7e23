#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
归档缓存

负责归档的加载 (Marshal 解码 + 逐条解压) 与写回 (逐条压缩 + Marshal 编码)，
并按归档路径缓存已打开的 ArchiveEntry。Marshal 编解码由 rubymarshal 完成。

缓存在挂载时创建、卸载时清空，不做淘汰:
同一路径只有一个常驻条目，且打开后不再感知磁盘上的外部修改。
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from rubymarshal.classes import RubyString
from rubymarshal.reader import loads
from rubymarshal.writer import writes

from ..core.schema import ArchiveEntry, ArchiveMetadata, ScriptRecord
from ..exceptions import (
    AlreadyExistsError,
    ArchiveUnreadableError,
    InvalidFormatError,
    NotFoundError,
    UnavailableError,
)
from ..hooks.base import CompressionHook
from ..hooks.compression import ZlibCompressionHook
from ..host import HostFileSystem

logger = logging.getLogger(__name__)


# ==================== 记录表编解码 ====================

def _decode_title(value: Any, position: int) -> str:
    """
    标题字段转为 str

    无编码信息的字符串解码为 bytes，带编码实例变量的解码为 str 或 RubyString。
    """
    if isinstance(value, RubyString):
        value = value.text
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, str):
        return value
    raise InvalidFormatError(f"第 {position} 条记录的标题不是字符串")


def unpack_records(data: bytes, compression: CompressionHook) -> List[ScriptRecord]:
    """
    解析归档字节为脚本记录列表

    Raises:
        InvalidFormatError: 顶层结构不是 [[Integer, String, String], ...]
        UnicodeDecodeError: 标题不是有效的 UTF-8
        zlib.error: 代码解压失败
    """
    try:
        table = loads(data)
    except Exception as e:
        raise InvalidFormatError(f"Marshal 解码失败: {type(e).__name__}: {e}") from e
    if not isinstance(table, list):
        raise InvalidFormatError("归档顶层不是数组", expected="Array", actual=type(table).__name__)

    records = []
    for position, item in enumerate(table):
        if not isinstance(item, list) or len(item) != 3:
            raise InvalidFormatError(f"第 {position} 条记录不是三元数组")
        tag, raw_title, raw_code = item
        if isinstance(tag, bool) or not isinstance(tag, int):
            raise InvalidFormatError(f"第 {position} 条记录的标识不是整数")
        title = _decode_title(raw_title, position)
        # 压缩代码是二进制串，不带编码信息
        if not isinstance(raw_code, bytes):
            raise InvalidFormatError(f"第 {position} 条记录的代码不是二进制字符串")
        payload = compression.decompress(raw_code) if raw_code else b""
        records.append(ScriptRecord(tag=tag, title=title, payload=payload))
    return records


def pack_records(records: List[ScriptRecord], compression: CompressionHook) -> bytes:
    """将脚本记录列表编码为归档字节 (标题和代码均写为二进制串)"""
    table = [
        [record.tag, record.title.encode("utf-8"), compression.compress(record.payload)]
        for record in records
    ]
    return writes(table)


# ==================== 缓存 ====================

class ArchiveCache:
    """
    已打开归档的缓存

    以归档路径为键，每个路径只对应一个常驻 ArchiveEntry。
    """

    def __init__(
        self,
        host: HostFileSystem,
        compression: Optional[CompressionHook] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Args:
            host: 宿主文件系统
            compression: 脚本压缩 Hook，默认 zlib
            clock: 写回时记录修改时间的时钟
        """
        self._host = host
        self._compression = compression or ZlibCompressionHook()
        self._clock = clock
        self._entries: Dict[str, ArchiveEntry] = {}

    @property
    def compression(self) -> CompressionHook:
        return self._compression

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def is_open(self, path: str) -> bool:
        """归档是否已常驻"""
        return path in self._entries

    def paths(self) -> List[str]:
        """所有常驻归档的路径"""
        return list(self._entries)

    # ==================== 打开 / 关闭 ====================

    def open(self, path: str) -> ArchiveEntry:
        """
        打开归档

        已常驻时直接返回缓存条目，不重新读取磁盘。

        Raises:
            NotFoundError: 宿主上不存在该归档
            ArchiveUnreadableError: 读取、解码或解压失败
        """
        entry = self._entries.get(path)
        if entry is not None:
            return entry

        try:
            stat = self._host.stat_file(path)
            data = self._host.read_file(path)
        except FileNotFoundError as e:
            raise NotFoundError(path) from e
        except OSError as e:
            raise ArchiveUnreadableError(path, f"{type(e).__name__}: {e}") from e

        try:
            records = unpack_records(data, self._compression)
        except Exception as e:
            raise ArchiveUnreadableError(path, f"{type(e).__name__}: {e}") from e

        entry = ArchiveEntry(
            path=path,
            records=records,
            metadata=ArchiveMetadata(ctime=stat.ctime, mtime=stat.mtime, size=len(records)),
        )
        self._entries[path] = entry
        logger.info("打开归档 %s (%d 条脚本)", path, len(records))
        return entry

    def get(self, path: str) -> ArchiveEntry:
        """
        获取常驻归档

        Raises:
            UnavailableError: 归档未打开
        """
        entry = self._entries.get(path)
        if entry is None:
            raise UnavailableError(path)
        return entry

    def create(self, path: str) -> ArchiveEntry:
        """
        新建空归档并立即写回

        Raises:
            AlreadyExistsError: 归档已常驻或磁盘上已存在
        """
        if path in self._entries or self._host.exists(path):
            raise AlreadyExistsError(path)

        now = self._clock()
        entry = ArchiveEntry(path=path, metadata=ArchiveMetadata(ctime=now, mtime=now))
        self.flush(entry)
        self._entries[path] = entry
        logger.info("新建归档 %s", path)
        return entry

    def close(self, path: str) -> None:
        """
        卸载归档

        Raises:
            UnavailableError: 归档未打开
        """
        if self._entries.pop(path, None) is None:
            raise UnavailableError(path)
        logger.info("关闭归档 %s", path)

    def clear(self) -> None:
        """卸载全部归档"""
        self._entries.clear()

    # ==================== 写回 ====================

    def flush(self, entry: ArchiveEntry) -> None:
        """
        整体写回归档文件

        调用方需保证末尾占位记录已被裁剪。
        写入失败时异常原样抛出，内存中的模型将领先于磁盘文件。
        """
        data = pack_records(entry.records, self._compression)
        self._host.write_file(entry.path, data)
        entry.metadata.mtime = self._clock()
        entry.metadata.size = len(entry.records)
        logger.debug("写回归档 %s (%d 条脚本, %d 字节)", entry.path, len(entry.records), len(data))
