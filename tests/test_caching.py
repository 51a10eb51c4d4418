"""Tests for the Cache-Control policy."""

from console_server.caching import (
    DEFAULT_CACHE_CONTROL,
    HTML_CACHE_CONTROL,
    ONE_DAY,
    cache_control_for,
)


class TestCacheControlFor:
    def test_html_is_not_kept_fresh(self):
        assert cache_control_for("text/html") == "public, max-age=0"

    def test_html_with_charset(self):
        assert cache_control_for("text/html; charset=utf-8") == HTML_CACHE_CONTROL

    def test_html_case_insensitive(self):
        assert cache_control_for("Text/HTML") == HTML_CACHE_CONTROL

    def test_javascript_gets_one_day(self):
        assert cache_control_for("text/javascript") == DEFAULT_CACHE_CONTROL
        assert f"max-age={ONE_DAY}" in DEFAULT_CACHE_CONTROL
        assert ONE_DAY == 86400

    def test_other_types_get_one_day(self):
        for content_type in ("text/css", "image/png", "application/json", "text/plain"):
            assert cache_control_for(content_type) == DEFAULT_CACHE_CONTROL
