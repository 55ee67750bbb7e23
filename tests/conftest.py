#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pytest 全局配置

提供共享 fixtures: 假时钟、内存宿主、预构建归档和文件系统实例。
"""

from typing import List

import pytest

from rgssfs import (
    ArchiveCache,
    ChangeBatcher,
    FileChangeEvent,
    MemoryHostFileSystem,
    PathResolver,
    ScriptFileSystemProvider,
)

from helpers import ARCHIVE, FakeClock, build_archive


# ==================== 基础 Fixtures ====================

@pytest.fixture
def clock():
    """假时钟"""
    return FakeClock()


@pytest.fixture
def sample_records():
    """两条脚本的归档内容"""
    return [
        (1, "Main", b"rgss_main { SceneManager.run }\n"),
        (2, "Util", b"module Util\n  def self.clamp(v)\n    v\n  end\nend\n"),
    ]


@pytest.fixture
def host(clock, sample_records):
    """预置了一个归档的内存宿主"""
    return MemoryHostFileSystem({ARCHIVE: build_archive(sample_records)}, clock=clock)


@pytest.fixture
def resolver():
    return PathResolver()


@pytest.fixture
def batcher(clock):
    return ChangeBatcher(delay=0.005, clock=clock)


@pytest.fixture
def cache(host, clock):
    return ArchiveCache(host, clock=clock)


@pytest.fixture
def provider(cache, resolver, batcher):
    return ScriptFileSystemProvider(cache, resolver, batcher)


@pytest.fixture
def delivered(provider) -> List[List[FileChangeEvent]]:
    """收集 provider 发出的每一批事件"""
    batches: List[List[FileChangeEvent]] = []
    provider.on_did_change_file(batches.append)
    return batches
