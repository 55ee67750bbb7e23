#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
RgssFS 工具函数

提供路径规范化、序号格式化和计数文案等通用功能。
"""


def normalize_path(path: str) -> str:
    """
    路径规范化

    1. 反斜杠统一为正斜杠
    2. 合并连续斜杠
    3. 移除末尾斜杠 (根目录 "/" 除外)

    与纯相对路径处理不同，这里保留前导斜杠，
    因为归档路径本身是宿主上的绝对路径。

    Args:
        path: 原始路径

    Returns:
        规范化后的路径

    Examples:
        >>> normalize_path("C:\\\\Game\\\\Data\\\\Scripts.rvdata2")
        'C:/Game/Data/Scripts.rvdata2'
        >>> normalize_path("/game//Data/")
        '/game/Data'
        >>> normalize_path("/")
        '/'
    """
    # 反斜杠 → 正斜杠
    path = path.replace("\\", "/")

    # 合并连续斜杠
    while "//" in path:
        path = path.replace("//", "/")

    if len(path) > 1:
        path = path.rstrip("/")

    return path


def pad_index(index: int, width: int = 3) -> str:
    """
    序号补零

    Examples:
        >>> pad_index(7)
        '007'
        >>> pad_index(1234)
        '1234'
    """
    return str(index).zfill(width)


def pluralize(count: int, singular: str, plural: str = None) -> str:
    """
    带数量的英文单复数

    Examples:
        >>> pluralize(1, "match", "matches")
        '1 match'
        >>> pluralize(0, "file")
        '0 files'
    """
    if count == 1:
        return f"{count} {singular}"
    return f"{count} {plural or singular + 's'}"
