#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
RgssFS 配置

所有配置项都有默认值，可通过环境变量覆盖:

    RGSSFS_MARKER             归档文件名 (路径中的标记段)
    RGSSFS_DEBOUNCE_MS        变更通知的合并延迟 (毫秒)
    RGSSFS_COMPRESSION        压缩算法名 (zlib / zlib-stream)
    RGSSFS_COMPRESSION_LEVEL  压缩级别 (-1 ~ 9)
"""

import os
import zlib
from dataclasses import dataclass, replace
from typing import Mapping, Optional


@dataclass(frozen=True)
class RgssConfig:
    """RgssFS 配置"""
    marker: str = "Scripts.rvdata2"
    suffix: str = ".rb"
    index_width: int = 3
    debounce_ms: float = 5.0
    compression: str = "zlib"
    compression_level: int = zlib.Z_DEFAULT_COMPRESSION

    # 配置项名 -> 环境变量名
    ENV_VAR_MAP = {
        'marker': 'RGSSFS_MARKER',
        'debounce_ms': 'RGSSFS_DEBOUNCE_MS',
        'compression': 'RGSSFS_COMPRESSION',
        'compression_level': 'RGSSFS_COMPRESSION_LEVEL',
    }

    def __post_init__(self):
        if not self.marker or "/" in self.marker or "\\" in self.marker:
            raise ValueError(f"marker 必须是单个路径段: {self.marker!r}")
        if self.index_width < 1:
            raise ValueError(f"index_width 必须为正数: {self.index_width}")
        if self.debounce_ms < 0:
            raise ValueError(f"debounce_ms 不能为负数: {self.debounce_ms}")
        if not -1 <= self.compression_level <= 9:
            raise ValueError(f"compression_level 超出范围: {self.compression_level}")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "RgssConfig":
        """
        从环境变量构建配置

        Args:
            environ: 环境变量映射，默认 os.environ
            **overrides: 显式指定的配置项 (优先级最高)

        Raises:
            ValueError: 环境变量的值无法转换
        """
        environ = os.environ if environ is None else environ
        values = {}

        marker = environ.get(cls.ENV_VAR_MAP['marker'])
        if marker:
            values['marker'] = marker

        debounce = environ.get(cls.ENV_VAR_MAP['debounce_ms'])
        if debounce:
            values['debounce_ms'] = float(debounce)

        compression = environ.get(cls.ENV_VAR_MAP['compression'])
        if compression:
            values['compression'] = compression.lower()

        level = environ.get(cls.ENV_VAR_MAP['compression_level'])
        if level:
            values['compression_level'] = int(level)

        values.update(overrides)
        return cls(**values)

    def with_overrides(self, **changes) -> "RgssConfig":
        """返回修改了部分配置项的副本"""
        return replace(self, **changes)
