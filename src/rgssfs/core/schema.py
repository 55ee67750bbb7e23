#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
RgssFS 数据结构定义

定义 ScriptRecord、ArchiveEntry、ParsedPath 以及文件系统接口使用的
FileStat / FileChangeEvent 等核心数据结构。
"""

import enum
import random
from dataclasses import dataclass, field
from typing import List, Optional


# ==================== 常量定义 ====================

# ParsedPath.index 的哨兵值: 指向归档本身 (目录)
ROOT_INDEX = -1

# 可寻址的最大序号，超出的路径视为无法解析
MAX_INDEX = 9999

# 新脚本标识的取值上限 (保证以 Fixnum 写出)
TAG_LIMIT = 1 << 30


def new_tag() -> int:
    """为新建脚本随机分配标识"""
    return random.randrange(TAG_LIMIT)


# ==================== 脚本与归档 ====================

@dataclass
class ScriptRecord:
    """
    归档中的一条脚本记录

    对应 Marshal 数组中的 [tag, title, code] 三元组，
    payload 为解压后的原始代码字节。
    """
    tag: int
    title: str = ""
    payload: bytes = b""

    @property
    def is_placeholder(self) -> bool:
        """标题和内容均为空的占位记录"""
        return not self.title and not self.payload

    def clear(self) -> None:
        """清空为占位记录 (保留 tag)"""
        self.title = ""
        self.payload = b""


@dataclass
class ArchiveMetadata:
    """
    归档元数据

    size 始终等于最近一次加载或写回后的记录数。
    """
    ctime: float = 0.0
    mtime: float = 0.0
    size: int = 0


@dataclass
class ArchiveEntry:
    """
    一个已打开的归档

    records 是从 0 开始的稠密列表，中间被删除的记录以占位记录保留，
    以免后续记录的序号发生变化。
    """
    path: str
    records: List[ScriptRecord] = field(default_factory=list)
    metadata: ArchiveMetadata = field(default_factory=ArchiveMetadata)

    def __len__(self) -> int:
        return len(self.records)

    def record_at(self, index: int) -> Optional[ScriptRecord]:
        """按序号取记录，越界返回 None"""
        if 0 <= index < len(self.records):
            return self.records[index]
        return None


# ==================== 路径 ====================

@dataclass(frozen=True)
class ParsedPath:
    """
    虚拟路径解析结果

    Attributes:
        file: 归档文件路径
        index: 脚本序号，ROOT_INDEX 表示归档本身
        title: 脚本标题
    """
    file: str
    index: int = ROOT_INDEX
    title: str = ""

    @property
    def is_root(self) -> bool:
        return self.index == ROOT_INDEX


# ==================== 文件系统接口 ====================

class FileType(enum.IntEnum):
    """文件类型"""
    UNKNOWN = 0
    FILE = 1
    DIRECTORY = 2


@dataclass(frozen=True)
class FileStat:
    """stat() 结果"""
    type: FileType
    ctime: float
    mtime: float
    size: int


class FileChangeType(enum.IntEnum):
    """变更通知类型"""
    CHANGED = 1
    CREATED = 2
    DELETED = 3


@dataclass(frozen=True)
class FileChangeEvent:
    """一条变更通知"""
    type: FileChangeType
    path: str


class Disposable:
    """
    可释放的订阅句柄

    dispose() 可重复调用，只有第一次生效。
    """

    def __init__(self, callback=None):
        self._callback = callback

    def dispose(self) -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()
