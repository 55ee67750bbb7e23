#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
RgssFS 核心模块

提供数据结构定义。
"""

from .schema import (
    ROOT_INDEX, MAX_INDEX, ScriptRecord, ArchiveMetadata, ArchiveEntry, ParsedPath,
    FileType, FileStat, FileChangeType, FileChangeEvent, Disposable, new_tag,
)

__all__ = [
    "ROOT_INDEX",
    "MAX_INDEX",
    "ScriptRecord",
    "ArchiveMetadata",
    "ArchiveEntry",
    "ParsedPath",
    "FileType",
    "FileStat",
    "FileChangeType",
    "FileChangeEvent",
    "Disposable",
    "new_tag",
]
