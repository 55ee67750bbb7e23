#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
RgssFS 异常定义

所有异常均继承自 RgssFSError，便于统一捕获。
文件系统类异常与宿主文件系统的错误分类一一对应。
"""

from typing import Optional


class RgssFSError(Exception):
    """RgssFS 基础异常"""
    pass


# ==================== 文件系统类异常 ====================

class FileSystemError(RgssFSError):
    """
    虚拟文件系统异常基类

    携带出错的虚拟路径，便于宿主将其映射为自身的错误类型。
    """
    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or path)


class NotFoundError(FileSystemError):
    """路径无法解析到已存在的脚本或归档"""
    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(path, message or f"路径不存在: {path}")


class NoPermissionsError(FileSystemError):
    """
    无权限异常

    写入只读的归档根目录，或写入无法解析的路径时抛出。
    """
    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(
            path,
            message or f"只能写入 '{{归档}}/{{序号}}_{{标题}}.rb': {path}"
        )


class AlreadyExistsError(FileSystemError):
    """创建或重命名的目标已存在且未指定覆盖"""
    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(path, message or f"目标已存在: {path}")


class FileIsADirectoryError(FileSystemError):
    """期望文件，实际为目录 (归档根)"""
    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(path, message or f"路径是目录: {path}")


class FileNotADirectoryError(FileSystemError):
    """期望目录，实际为文件 (脚本)"""
    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(path, message or f"路径不是目录: {path}")


class UnavailableError(FileSystemError):
    """归档未加载或不可用"""
    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(path, message or f"归档不可用: {path}")


class ArchiveUnreadableError(UnavailableError):
    """
    归档读取失败

    宿主读取失败、Marshal 解码失败或脚本解压失败时抛出，
    原始异常保留在 __cause__ 中。
    """
    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(path, f"无法读取归档 '{path}': {reason}")


# ==================== 编解码类异常 ====================

class InvalidFormatError(RgssFSError):
    """
    数据格式无效异常

    当 Marshal 版本号、类型标记或记录结构不符合预期时抛出。
    """
    def __init__(self, message: str, expected: str = None, actual: str = None):
        self.expected = expected
        self.actual = actual
        if expected and actual:
            message = f"{message}: 期望 {expected}, 实际 {actual}"
        super().__init__(message)


class UnknownCompressionError(RgssFSError):
    """未注册的压缩算法名"""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"未知的压缩算法: {name}")
