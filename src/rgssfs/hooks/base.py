#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Hook 基类定义

定义脚本压缩的抽象接口。
"""

from abc import ABC, abstractmethod


class CompressionHook(ABC):
    """
    压缩算法钩子

    每条脚本代码独立压缩/解压，实现必须是纯粹的字节到字节变换，
    且不同实现之间产出的数据可以互相解压 (均为 zlib 封装的 DEFLATE 流)。
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        算法名

        用于配置项 RgssConfig.compression 的查找。
        """
        pass

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        """
        压缩数据

        Args:
            data: 原始代码

        Returns:
            压缩后的数据
        """
        pass

    @abstractmethod
    def decompress(self, data: bytes) -> bytes:
        """
        解压数据

        Args:
            data: 压缩后的数据

        Returns:
            原始代码

        Raises:
            zlib.error: 数据不是有效的 zlib 流
        """
        pass
