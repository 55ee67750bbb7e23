#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
宿主文件系统接口

归档缓存只通过这里的三个整文件操作访问真实磁盘，
便于在测试或嵌入环境中替换为内存实现。
"""

import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict


@dataclass(frozen=True)
class HostStat:
    """宿主文件元数据"""
    ctime: float
    mtime: float
    size: int


class HostFileSystem(ABC):
    """宿主文件系统抽象"""

    @abstractmethod
    def stat_file(self, path: str) -> HostStat:
        """
        获取文件元数据

        Raises:
            FileNotFoundError: 文件不存在
        """
        pass

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """读取整个文件"""
        pass

    @abstractmethod
    def write_file(self, path: str, data: bytes) -> None:
        """整体替换文件内容 (不存在则创建)"""
        pass

    def exists(self, path: str) -> bool:
        """文件是否存在"""
        try:
            self.stat_file(path)
        except FileNotFoundError:
            return False
        return True


class LocalHostFileSystem(HostFileSystem):
    """本地磁盘实现"""

    def stat_file(self, path: str) -> HostStat:
        st = os.stat(path)
        return HostStat(ctime=st.st_ctime, mtime=st.st_mtime, size=st.st_size)

    def read_file(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def write_file(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)


class MemoryHostFileSystem(HostFileSystem):
    """
    内存实现

    以路径字符串为键保存文件内容，主要用于测试和预览。
    """

    def __init__(self, files: Dict[str, bytes] = None, clock=time.time):
        self._clock = clock
        self._files: Dict[str, bytes] = {}
        self._stats: Dict[str, HostStat] = {}
        for path, data in (files or {}).items():
            self.write_file(path, data)

    def stat_file(self, path: str) -> HostStat:
        if path not in self._files:
            raise FileNotFoundError(path)
        return self._stats[path]

    def read_file(self, path: str) -> bytes:
        if path not in self._files:
            raise FileNotFoundError(path)
        return self._files[path]

    def write_file(self, path: str, data: bytes) -> None:
        now = self._clock()
        previous = self._stats.get(path)
        ctime = previous.ctime if previous else now
        self._files[path] = bytes(data)
        self._stats[path] = HostStat(ctime=ctime, mtime=now, size=len(data))
