#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
测试辅助工具

路径常量、假时钟以及归档的构建与读取。
"""

from typing import List, Tuple

from rgssfs import MemoryHostFileSystem, ScriptRecord, ZlibCompressionHook
from rgssfs.archive.cache import pack_records, unpack_records


# ==================== 路径常量 ====================

ARCHIVE = "/game/Data/Scripts.rvdata2"
OTHER_ARCHIVE = "/other/Data/Scripts.rvdata2"


def script_path(name: str, archive: str = ARCHIVE) -> str:
    """归档内脚本的虚拟路径"""
    return f"{archive}/{name}"


# ==================== 工具 ====================

class FakeClock:
    """可手动推进的时钟"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_archive(records: List[Tuple[int, str, bytes]]) -> bytes:
    """由 (tag, title, code) 列表构建归档字节"""
    return pack_records(
        [ScriptRecord(tag, title, code) for tag, title, code in records],
        ZlibCompressionHook()
    )


def read_archive(host: MemoryHostFileSystem, path: str = ARCHIVE) -> List[Tuple[int, str, bytes]]:
    """从宿主读取归档并还原为 (tag, title, code) 列表"""
    records = unpack_records(host.read_file(path), ZlibCompressionHook())
    return [(r.tag, r.title, r.payload) for r in records]
