#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
虚拟文件系统适配层

把编辑器风格的文件系统接口 (stat / readDirectory / readFile / writeFile /
rename / delete / createDirectory / watch) 翻译为对归档模型的操作。
"""

import time
from typing import Callable, List, Optional, Tuple

from .archive.cache import ArchiveCache
from .archive.model import ArchiveModel
from .archive.search import SearchReport
from .config import RgssConfig
from .core.schema import (
    ArchiveEntry,
    Disposable,
    FileStat,
    FileType,
    ParsedPath,
    ScriptRecord,
)
from .exceptions import (
    AlreadyExistsError,
    FileIsADirectoryError,
    FileNotADirectoryError,
    NoPermissionsError,
    NotFoundError,
)
from .hooks.compression import get_compression_hook
from .host import HostFileSystem, LocalHostFileSystem
from .notify import ChangeBatcher, Listener
from .paths import PathResolver


class ScriptFileSystemProvider:
    """
    脚本归档文件系统

    归档本身表现为目录，其中每条脚本表现为 {序号}_{标题}.rb 文件。
    """

    def __init__(
        self,
        cache: ArchiveCache,
        resolver: Optional[PathResolver] = None,
        batcher: Optional[ChangeBatcher] = None
    ):
        self._cache = cache
        self._resolver = resolver or PathResolver()
        self._batcher = batcher or ChangeBatcher()
        self._model = ArchiveModel(self._cache, self._resolver, self._batcher)

    @classmethod
    def from_config(
        cls,
        config: Optional[RgssConfig] = None,
        host: Optional[HostFileSystem] = None,
        clock: Callable[[], float] = time.monotonic
    ) -> "ScriptFileSystemProvider":
        """
        按配置组装文件系统

        Args:
            config: 配置，默认从环境变量读取
            host: 宿主文件系统，默认本地磁盘
            clock: 变更通知合并器使用的时钟
        """
        config = config or RgssConfig.from_env()
        resolver = PathResolver(config.marker, config.suffix, config.index_width)
        compression = get_compression_hook(config.compression, config.compression_level)
        cache = ArchiveCache(host or LocalHostFileSystem(), compression)
        batcher = ChangeBatcher(config.debounce_seconds, clock)
        return cls(cache, resolver, batcher)

    @property
    def cache(self) -> ArchiveCache:
        return self._cache

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    @property
    def batcher(self) -> ChangeBatcher:
        return self._batcher

    @property
    def model(self) -> ArchiveModel:
        return self._model

    # ==================== 内部工具 ====================

    def _parse_or_not_found(self, path: str) -> ParsedPath:
        parsed = self._resolver.parse(path)
        if parsed is None:
            raise NotFoundError(path)
        return parsed

    def _parse_writable(self, path: str) -> ParsedPath:
        parsed = self._resolver.parse(path)
        if parsed is None or parsed.is_root:
            raise NoPermissionsError(path)
        return parsed

    @staticmethod
    def _lookup(entry: ArchiveEntry, parsed: ParsedPath, path: str) -> ScriptRecord:
        """序号和标题都必须匹配，否则视为不存在"""
        record = entry.record_at(parsed.index)
        if record is None or record.title != parsed.title:
            raise NotFoundError(path)
        return record

    # ==================== 查询 ====================

    def stat(self, path: str) -> FileStat:
        """获取归档 (目录) 或脚本 (文件) 的元数据"""
        parsed = self._parse_or_not_found(path)
        entry = self._cache.open(parsed.file)
        metadata = entry.metadata
        if parsed.is_root:
            return FileStat(FileType.DIRECTORY, metadata.ctime, metadata.mtime, metadata.size)
        record = self._lookup(entry, parsed, path)
        return FileStat(FileType.FILE, metadata.ctime, metadata.mtime, len(record.payload))

    def read_directory(self, path: str) -> List[Tuple[str, FileType]]:
        """列出归档中的全部脚本 (含占位记录)"""
        parsed = self._parse_or_not_found(path)
        entry = self._cache.open(parsed.file)
        if not parsed.is_root:
            self._lookup(entry, parsed, path)
            raise FileNotADirectoryError(path)
        return [
            (self._resolver.format(index, title), FileType.FILE)
            for index, title in enumerate(self._model.list(entry))
        ]

    def read_file(self, path: str) -> bytes:
        """读取脚本代码"""
        parsed = self._parse_or_not_found(path)
        entry = self._cache.open(parsed.file)
        if parsed.is_root:
            raise FileIsADirectoryError(path)
        return self._lookup(entry, parsed, path).payload

    # ==================== 修改 ====================

    def write_file(self, path: str, content: bytes, create: bool = True, overwrite: bool = True) -> None:
        """
        写入脚本

        Args:
            path: 脚本虚拟路径
            content: 代码
            create: 允许创建不存在的脚本
            overwrite: 允许覆盖已有内容的槽位
        """
        parsed = self._parse_writable(path)
        entry = self._cache.open(parsed.file)

        slot = entry.record_at(parsed.index)
        matched = slot is not None and slot.title == parsed.title
        if not matched and not create:
            raise NotFoundError(path)
        if slot is not None and not slot.is_placeholder and create and not overwrite:
            raise AlreadyExistsError(path)

        self._model.write(entry, parsed.index, parsed.title, content)

    def rename(self, old_path: str, new_path: str, overwrite: bool = False) -> None:
        """重命名或移动脚本，可跨归档"""
        source = self._resolver.parse(old_path)
        if source is None:
            raise NotFoundError(old_path)
        if source.is_root:
            raise NoPermissionsError(old_path)
        target = self._parse_writable(new_path)

        source_entry = self._cache.open(source.file)
        self._lookup(source_entry, source, old_path)
        target_entry = self._cache.open(target.file)

        self._model.rename(
            source_entry, source.index,
            target_entry, target.index, target.title,
            overwrite=overwrite
        )

    def delete(self, path: str) -> None:
        """删除脚本"""
        parsed = self._parse_writable(path)
        entry = self._cache.open(parsed.file)
        self._lookup(entry, parsed, path)
        self._model.delete(entry, parsed.index)

    def create_directory(self, path: str) -> None:
        """只允许在归档根路径上新建空归档"""
        parsed = self._resolver.parse(path)
        if parsed is None or not parsed.is_root:
            raise NoPermissionsError(path, f"只能新建归档本身: {path}")
        self._cache.create(parsed.file)

    def insert(self, path: str, content: bytes = b"") -> str:
        """
        在路径指定的序号处插入新脚本，原有脚本依次后移

        Returns:
            新脚本的虚拟路径
        """
        parsed = self._parse_writable(path)
        entry = self._cache.open(parsed.file)
        self._model.insert(entry, parsed.index, parsed.title, content)
        return self._resolver.join(parsed.file, parsed.index, parsed.title)

    # ==================== 搜索 ====================

    def _open_directory(self, path: str) -> ArchiveEntry:
        parsed = self._parse_or_not_found(path)
        if not parsed.is_root:
            raise FileNotADirectoryError(path)
        return self._cache.open(parsed.file)

    def search(self, path: str, needle: str, context: int = 2) -> SearchReport:
        """在归档的全部脚本中查找文本"""
        return self._model.search(self._open_directory(path), needle, context)

    def find(self, path: str, query: str) -> List[str]:
        """按文件名查找脚本，返回匹配脚本的虚拟路径"""
        entry = self._open_directory(path)
        return [
            self._resolver.join(entry.path, index, title)
            for index, title in self._model.find(entry, query)
        ]

    # ==================== 挂载与通知 ====================

    def close(self, path: str) -> None:
        """卸载归档"""
        parsed = self._parse_or_not_found(path)
        self._cache.close(parsed.file)

    def watch(self, path: str, recursive: bool = False, excludes: Optional[List[str]] = None) -> Disposable:
        # 所有变更都会通过 on_did_change_file 发出，这里无需单独监听
        return Disposable()

    def on_did_change_file(self, listener: Listener) -> Disposable:
        """订阅批量变更事件"""
        return self._batcher.subscribe(listener)

    def poll(self) -> bool:
        """由宿主事件循环调用，发送已到期的变更事件"""
        return self._batcher.poll()
