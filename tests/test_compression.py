#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
压缩 Hook 测试
"""

import os
import zlib

import pytest

from rgssfs.hooks import (
    COMPRESSION_REGISTRY,
    StreamingZlibHook,
    ZlibCompressionHook,
    get_compression_hook,
)
from rgssfs.exceptions import UnknownCompressionError


@pytest.fixture(params=[ZlibCompressionHook, StreamingZlibHook])
def hook(request):
    return request.param()


class TestCompressionHooks:
    """内置压缩 Hook"""

    @pytest.mark.parametrize("data", [
        b"",
        b"puts 'hello'\n" * 500,
        os.urandom(4096),
    ])
    def test_round_trip(self, hook, data):
        assert hook.decompress(hook.compress(data)) == data

    def test_output_is_zlib_stream(self, hook):
        """输出可被标准 zlib 解压 (与 Ruby Zlib::Inflate 兼容)"""
        data = b"class Scene_Map\nend\n"
        assert zlib.decompress(hook.compress(data)) == data

    def test_implementations_interchangeable(self):
        """两种实现的输出可以互相解压"""
        data = b"x = 1\n" * 1000
        native = ZlibCompressionHook()
        stream = StreamingZlibHook(chunk_size=128)
        assert stream.decompress(native.compress(data)) == data
        assert native.decompress(stream.compress(data)) == data

    def test_invalid_data(self, hook):
        with pytest.raises(zlib.error):
            hook.decompress(b"not compressed")

    def test_truncated_stream(self):
        """流式解压拒绝不完整的数据"""
        data = zlib.compress(b"a" * 10000 + os.urandom(1000))
        with pytest.raises(zlib.error):
            StreamingZlibHook().decompress(data[:-10])


class TestRegistry:
    """get_compression_hook 测试"""

    def test_names(self):
        for name, hook_cls in COMPRESSION_REGISTRY.items():
            assert hook_cls().name == name

    def test_lookup(self):
        assert isinstance(get_compression_hook("zlib"), ZlibCompressionHook)
        assert isinstance(get_compression_hook("ZLIB-STREAM", 9), StreamingZlibHook)

    def test_unknown(self):
        with pytest.raises(UnknownCompressionError):
            get_compression_hook("lz4")
