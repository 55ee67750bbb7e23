#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
RgssFS Archive

提供归档的加载缓存、修改操作和全文搜索。
"""

from .cache import ArchiveCache, pack_records, unpack_records
from .model import ArchiveModel
from .search import LineKind, SearchLine, SearchReport, search_records

__all__ = [
    "ArchiveCache",
    "ArchiveModel",
    "pack_records",
    "unpack_records",
    "LineKind",
    "SearchLine",
    "SearchReport",
    "search_records",
]
