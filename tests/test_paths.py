#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
PathResolver 测试

测试虚拟路径的解析与生成。
"""

import pytest

from rgssfs import MAX_INDEX, PathResolver, ROOT_INDEX
from rgssfs.utils import normalize_path, pad_index, pluralize

from helpers import ARCHIVE


# ==================== parse 测试 ====================

class TestParse:
    """parse() 测试"""

    def test_root(self, resolver):
        """路径止于标记段时指向归档本身"""
        parsed = resolver.parse(ARCHIVE)
        assert parsed.file == ARCHIVE
        assert parsed.index == ROOT_INDEX
        assert parsed.is_root

    def test_root_with_trailing_slash(self, resolver):
        parsed = resolver.parse(ARCHIVE + "/")
        assert parsed.is_root

    def test_script(self, resolver):
        parsed = resolver.parse(f"{ARCHIVE}/007_Scene_Map.rb")
        assert parsed.file == ARCHIVE
        assert parsed.index == 7
        assert parsed.title == "Scene_Map"

    def test_suffix_optional(self, resolver):
        """.rb 后缀可省略"""
        parsed = resolver.parse(f"{ARCHIVE}/12_Main")
        assert (parsed.index, parsed.title) == (12, "Main")

    def test_windows_separators(self, resolver):
        """反斜杠分隔符"""
        parsed = resolver.parse("C:\\Game\\Data\\Scripts.rvdata2\\003_Window.rb")
        assert parsed.file == "C:/Game/Data/Scripts.rvdata2"
        assert (parsed.index, parsed.title) == (3, "Window")

    def test_empty_title(self, resolver):
        """占位记录的文件名"""
        parsed = resolver.parse(f"{ARCHIVE}/004_.rb")
        assert (parsed.index, parsed.title) == (4, "")

    def test_title_with_underscore(self, resolver):
        parsed = resolver.parse(f"{ARCHIVE}/001_Game_Actor.rb")
        assert parsed.title == "Game_Actor"

    def test_unicode_title(self, resolver):
        parsed = resolver.parse(f"{ARCHIVE}/002_主要.rb")
        assert parsed.title == "主要"

    @pytest.mark.parametrize("path", [
        "/game/Data/Other.rvdata2",
        "/game/Data/Scripts.rvdata2x/001_Main.rb",
        "/game/Data/MyScripts.rvdata2",
        f"{ARCHIVE}/Main.rb",
        f"{ARCHIVE}/x01_Main.rb",
        f"{ARCHIVE}/-1_Main.rb",
        f"{ARCHIVE}/001_Main.rb/nested.rb",
        f"{ARCHIVE}/sub/001_Main.rb",
    ])
    def test_rejected(self, resolver, path):
        """无法解析的路径返回 None"""
        assert resolver.parse(path) is None

    def test_index_ceiling(self, resolver):
        """序号有上限，超大序号不会触发海量占位记录"""
        assert resolver.parse(f"{ARCHIVE}/{MAX_INDEX}_Last.rb").index == MAX_INDEX
        assert resolver.parse(f"{ARCHIVE}/{MAX_INDEX + 1}_Far.rb") is None
        assert resolver.parse(f"{ARCHIVE}/999999999999_x.rb") is None

    def test_custom_marker(self):
        resolver = PathResolver(marker="Scripts.rxdata")
        parsed = resolver.parse("/xp/Data/Scripts.rxdata/000_Main.rb")
        assert parsed.file == "/xp/Data/Scripts.rxdata"
        assert parsed.index == 0


# ==================== format 测试 ====================

class TestFormat:
    """format() / join() 测试"""

    @pytest.mark.parametrize("index,title,expected", [
        (0, "Main", "000_Main.rb"),
        (42, "", "042_.rb"),
        (1234, "Big", "1234_Big.rb"),
    ])
    def test_format(self, resolver, index, title, expected):
        assert resolver.format(index, title) == expected

    def test_join(self, resolver):
        assert resolver.join(ARCHIVE, 1, "Util") == f"{ARCHIVE}/001_Util.rb"

    @pytest.mark.parametrize("index,title", [
        (0, "Main"),
        (5, ""),
        (99, "a.rb"),
        (1000, "Scene_Title"),
        (3, "with space"),
        (8, "123_456"),
        (12, "Scripts.rvdata2"),
    ])
    def test_round_trip(self, resolver, index, title):
        """parse(format(i, t)) 还原 (i, t)"""
        parsed = resolver.parse(resolver.join(ARCHIVE, index, title))
        assert (parsed.index, parsed.title) == (index, title)


# ==================== 工具函数测试 ====================

class TestUtils:
    """utils 测试"""

    @pytest.mark.parametrize("input_path,expected", [
        ("a\\b\\c", "a/b/c"),
        ("/a//b/", "/a/b"),
        ("/", "/"),
        ("", ""),
    ])
    def test_normalize_path(self, input_path, expected):
        assert normalize_path(input_path) == expected

    def test_pad_index(self):
        assert pad_index(7) == "007"
        assert pad_index(7, width=5) == "00007"

    @pytest.mark.parametrize("count,expected", [
        (0, "0 matches"),
        (1, "1 match"),
        (2, "2 matches"),
    ])
    def test_pluralize(self, count, expected):
        assert pluralize(count, "match", "matches") == expected
