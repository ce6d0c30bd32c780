"""
==============================================================================
Settings Tests
==============================================================================
"""

import pytest

from product_search.config.settings import DEFAULT_CACHE_SIZE, Settings


class TestSettings:
    """Tests for Settings validation."""

    @pytest.mark.parametrize("raw", ["abc", "0", "-5", ""])
    def test_invalid_cache_size_falls_back_to_default(self, monkeypatch, raw: str):
        monkeypatch.setenv("CACHE_SIZE", raw)
        assert Settings().cache_size == DEFAULT_CACHE_SIZE

    def test_cache_size_from_environment(self, monkeypatch):
        monkeypatch.setenv("CACHE_SIZE", "250")
        assert Settings().cache_size == 250

    def test_default_limit_clamped_to_max(self, monkeypatch):
        monkeypatch.setenv("SEARCH_DEFAULT_LIMIT", "80")
        monkeypatch.setenv("SEARCH_MAX_LIMIT", "40")
        assert Settings().search_default_limit == 40

    def test_unknown_environment_defaults_to_development(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "qa")
        assert Settings().is_development is True

    def test_in_memory_sqlite_has_no_path(self):
        assert Settings(database_url="sqlite://").get_database_path() is None
