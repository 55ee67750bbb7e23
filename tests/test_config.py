#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
RgssConfig 测试
"""

import zlib

import pytest

from rgssfs import (
    MemoryHostFileSystem,
    RgssConfig,
    ScriptFileSystemProvider,
    StreamingZlibHook,
)


class TestDefaults:
    """默认配置"""

    def test_defaults(self):
        config = RgssConfig()
        assert config.marker == "Scripts.rvdata2"
        assert config.suffix == ".rb"
        assert config.index_width == 3
        assert config.debounce_seconds == pytest.approx(0.005)
        assert config.compression == "zlib"
        assert config.compression_level == zlib.Z_DEFAULT_COMPRESSION

    @pytest.mark.parametrize("changes", [
        {"marker": ""},
        {"marker": "a/b"},
        {"index_width": 0},
        {"debounce_ms": -1},
        {"compression_level": 10},
    ])
    def test_invalid_values(self, changes):
        with pytest.raises(ValueError):
            RgssConfig(**changes)

    def test_with_overrides(self):
        config = RgssConfig().with_overrides(marker="Scripts.rxdata")
        assert config.marker == "Scripts.rxdata"
        assert config.suffix == ".rb"


class TestFromEnv:
    """环境变量覆盖"""

    def test_empty_environment(self):
        assert RgssConfig.from_env({}) == RgssConfig()

    def test_overrides(self):
        config = RgssConfig.from_env({
            "RGSSFS_MARKER": "Scripts.rxdata",
            "RGSSFS_DEBOUNCE_MS": "20",
            "RGSSFS_COMPRESSION": "ZLIB-STREAM",
            "RGSSFS_COMPRESSION_LEVEL": "9",
        })
        assert config.marker == "Scripts.rxdata"
        assert config.debounce_ms == 20.0
        assert config.compression == "zlib-stream"
        assert config.compression_level == 9

    def test_explicit_overrides_win(self):
        config = RgssConfig.from_env({"RGSSFS_MARKER": "A.rvdata2"}, marker="B.rvdata2")
        assert config.marker == "B.rvdata2"

    def test_invalid_number(self):
        with pytest.raises(ValueError):
            RgssConfig.from_env({"RGSSFS_DEBOUNCE_MS": "soon"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("RGSSFS_MARKER", "Scripts.rvdata")
        assert RgssConfig.from_env().marker == "Scripts.rvdata"


class TestProviderFromConfig:
    """按配置组装文件系统"""

    def test_wiring(self):
        config = RgssConfig(marker="Scripts.rxdata", compression="zlib-stream", debounce_ms=50)
        provider = ScriptFileSystemProvider.from_config(config, host=MemoryHostFileSystem())
        assert provider.resolver.marker == "Scripts.rxdata"
        assert isinstance(provider.cache.compression, StreamingZlibHook)

    def test_create_with_config(self):
        host = MemoryHostFileSystem()
        provider = ScriptFileSystemProvider.from_config(RgssConfig(), host=host)
        provider.create_directory("/new/Scripts.rvdata2")
        assert host.read_file("/new/Scripts.rvdata2") == b"\x04\x08[\x00"
