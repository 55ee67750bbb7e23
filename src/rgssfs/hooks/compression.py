#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
内置压缩 Hook 实现

- ZlibCompressionHook: 一次性 zlib.compress / zlib.decompress
- StreamingZlibHook: 分块 compressobj / decompressobj，适合逐块喂数据的宿主
"""

import zlib
from typing import Dict, Type

from .base import CompressionHook
from ..exceptions import UnknownCompressionError


class ZlibCompressionHook(CompressionHook):
    """使用 zlib 一次性压缩脚本代码"""

    def __init__(self, level: int = zlib.Z_DEFAULT_COMPRESSION):
        """
        Args:
            level: 压缩级别 (0-9, -1 为默认)
        """
        self._level = level

    @property
    def name(self) -> str:
        return "zlib"

    def compress(self, data: bytes) -> bytes:
        return zlib.compress(data, self._level)

    def decompress(self, data: bytes) -> bytes:
        return zlib.decompress(data)


class StreamingZlibHook(CompressionHook):
    """
    分块流式压缩

    输出与 ZlibCompressionHook 兼容，可互相解压。
    """

    def __init__(self, level: int = zlib.Z_DEFAULT_COMPRESSION, chunk_size: int = 64 * 1024):
        """
        Args:
            level: 压缩级别
            chunk_size: 每次送入压缩器的字节数
        """
        self._level = level
        self._chunk_size = chunk_size

    @property
    def name(self) -> str:
        return "zlib-stream"

    def _chunks(self, data: bytes):
        view = memoryview(data)
        for start in range(0, len(view), self._chunk_size):
            yield view[start:start + self._chunk_size]

    def compress(self, data: bytes) -> bytes:
        compressor = zlib.compressobj(self._level)
        parts = [compressor.compress(chunk) for chunk in self._chunks(data)]
        parts.append(compressor.flush())
        return b"".join(parts)

    def decompress(self, data: bytes) -> bytes:
        decompressor = zlib.decompressobj()
        parts = [decompressor.decompress(chunk) for chunk in self._chunks(data)]
        parts.append(decompressor.flush())
        if not decompressor.eof:
            raise zlib.error("压缩流不完整")
        return b"".join(parts)


# ==================== 注册表 ====================

COMPRESSION_REGISTRY: Dict[str, Type[CompressionHook]] = {
    "zlib": ZlibCompressionHook,
    "zlib-stream": StreamingZlibHook,
}


def get_compression_hook(name: str, level: int = zlib.Z_DEFAULT_COMPRESSION) -> CompressionHook:
    """
    根据算法名创建压缩 Hook

    Args:
        name: 算法名 ("zlib" 或 "zlib-stream")
        level: 压缩级别

    Raises:
        UnknownCompressionError: 未注册的算法名
    """
    hook_cls = COMPRESSION_REGISTRY.get(name.lower())
    if hook_cls is None:
        raise UnknownCompressionError(name)
    return hook_cls(level)
