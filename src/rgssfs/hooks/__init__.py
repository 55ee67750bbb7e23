#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
RgssFS Hook 系统

提供脚本压缩算法的可插拔接口。
"""

from .base import CompressionHook
from .compression import (
    ZlibCompressionHook,
    StreamingZlibHook,
    COMPRESSION_REGISTRY,
    get_compression_hook,
)

__all__ = [
    "CompressionHook",
    "ZlibCompressionHook",
    "StreamingZlibHook",
    "COMPRESSION_REGISTRY",
    "get_compression_hook",
]
