#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
RgssFS - 将 RGSS Scripts.rvdata2 归档映射为虚拟文件系统

归档表现为目录，每条脚本表现为可读写、可重命名、可删除的 .rb 文件，
所有修改都会重新压缩并写回归档。
"""

__version__ = "0.1.0"

# 异常类
from .exceptions import (
    RgssFSError,
    FileSystemError,
    NotFoundError,
    NoPermissionsError,
    AlreadyExistsError,
    FileIsADirectoryError,
    FileNotADirectoryError,
    UnavailableError,
    ArchiveUnreadableError,
    InvalidFormatError,
    UnknownCompressionError,
)

# 数据结构
from .core.schema import (
    ROOT_INDEX,
    MAX_INDEX,
    ScriptRecord,
    ArchiveEntry,
    ArchiveMetadata,
    ParsedPath,
    FileType,
    FileStat,
    FileChangeType,
    FileChangeEvent,
    Disposable,
)

# 配置与宿主
from .config import RgssConfig
from .host import HostFileSystem, HostStat, LocalHostFileSystem, MemoryHostFileSystem

# 组件
from .paths import PathResolver
from .notify import ChangeBatcher
from .archive import ArchiveCache, ArchiveModel, SearchReport, SearchLine, LineKind, search_records
from .provider import ScriptFileSystemProvider

# Hooks
from .hooks import (
    CompressionHook,
    ZlibCompressionHook,
    StreamingZlibHook,
    get_compression_hook,
)

__all__ = [
    # 版本
    "__version__",
    # 异常
    "RgssFSError",
    "FileSystemError",
    "NotFoundError",
    "NoPermissionsError",
    "AlreadyExistsError",
    "FileIsADirectoryError",
    "FileNotADirectoryError",
    "UnavailableError",
    "ArchiveUnreadableError",
    "InvalidFormatError",
    "UnknownCompressionError",
    # 数据结构
    "ROOT_INDEX",
    "MAX_INDEX",
    "ScriptRecord",
    "ArchiveEntry",
    "ArchiveMetadata",
    "ParsedPath",
    "FileType",
    "FileStat",
    "FileChangeType",
    "FileChangeEvent",
    "Disposable",
    # 配置与宿主
    "RgssConfig",
    "HostFileSystem",
    "HostStat",
    "LocalHostFileSystem",
    "MemoryHostFileSystem",
    # 组件
    "PathResolver",
    "ChangeBatcher",
    "ArchiveCache",
    "ArchiveModel",
    "SearchReport",
    "SearchLine",
    "LineKind",
    "search_records",
    "ScriptFileSystemProvider",
    # Hooks
    "CompressionHook",
    "ZlibCompressionHook",
    "StreamingZlibHook",
    "get_compression_hook",
]
