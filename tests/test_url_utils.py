"""Tests for page slugs and fetch addresses."""

import pytest

from viewdiff.models.screenshot import PageTarget, difference_path, screenshot_path
from viewdiff.url_utils import join_url, slug_for_path


class TestSlugForPath:
    @pytest.mark.parametrize("path", ["/", "", "  /  "])
    def test_root_is_frontpage(self, path):
        assert slug_for_path(path) == "frontpage"

    def test_single_segment_is_verbatim(self):
        assert slug_for_path("multimedia") == "multimedia"

    def test_leading_and_trailing_slashes_are_stripped(self):
        assert slug_for_path("/sport/") == "sport"

    def test_nested_segments_are_flattened(self):
        assert slug_for_path("/shoppages/begood") == "shoppages_begood"


class TestJoinUrl:
    def test_root(self):
        assert join_url("https://example.com", "/") == "https://example.com/"

    def test_single_slash_between_parts(self):
        assert join_url("https://example.com/", "/sport") == "https://example.com/sport"
        assert join_url("https://example.com", "sport") == "https://example.com/sport"

    def test_query_string_is_kept(self):
        assert join_url("https://example.com", "search?q=shoes") == "https://example.com/search?q=shoes"


class TestNaming:
    def test_page_target_from_path(self):
        target = PageTarget.from_path("/")
        assert target.slug == "frontpage"
        assert target.address("https://example.com") == "https://example.com/"

    def test_screenshot_path(self, tmp_path):
        assert screenshot_path(tmp_path, "frontpage", 640, "base") == tmp_path / "frontpage_640_base.png"

    def test_difference_path(self, tmp_path):
        assert difference_path(tmp_path, "sport", 600) == tmp_path / "sport_600_DIFFERENCE.png"
