"""Tests for environment configuration interface."""

from pathlib import Path

import pytest

from common.env import Environment, env


class TestEnvironment:
    """Tests for Environment class."""

    def test_book_dir_default(self, monkeypatch):
        """Test book_dir returns the Kindle default."""
        monkeypatch.delenv("RANDOMQUOTE_BOOK_DIR", raising=False)
        assert Environment.book_dir() == Path("/mnt/us/Books")

    def test_book_dir_from_env(self, monkeypatch):
        """Test book_dir reads from environment."""
        monkeypatch.setenv("RANDOMQUOTE_BOOK_DIR", "/media/kobo/books")
        assert Environment.book_dir() == Path("/media/kobo/books")

    def test_quotes_path_default(self, monkeypatch):
        """Test quotes_path returns default value."""
        monkeypatch.delenv("RANDOMQUOTE_QUOTES_PATH", raising=False)
        assert str(Environment.quotes_path()) == "quotes.lua"

    def test_quotes_path_from_env(self, monkeypatch):
        """Test quotes_path reads from environment."""
        monkeypatch.setenv("RANDOMQUOTE_QUOTES_PATH", "/tmp/quotes.lua")
        assert str(Environment.quotes_path()) == "/tmp/quotes.lua"

    def test_max_depth_default(self, monkeypatch):
        """Test max_depth returns default value."""
        monkeypatch.delenv("RANDOMQUOTE_MAX_DEPTH", raising=False)
        assert Environment.max_depth() == 5

    def test_max_depth_from_env(self, monkeypatch):
        """Test max_depth reads and converts from environment."""
        monkeypatch.setenv("RANDOMQUOTE_MAX_DEPTH", "3")
        assert Environment.max_depth() == 3

    def test_highlight_colors_unset(self, monkeypatch):
        """Test highlight_colors is None when nothing is configured."""
        monkeypatch.delenv("RANDOMQUOTE_COLORS", raising=False)
        assert Environment.highlight_colors() is None

    def test_highlight_colors_blank(self, monkeypatch):
        """Test a blank color list means every color."""
        monkeypatch.setenv("RANDOMQUOTE_COLORS", " , ")
        assert Environment.highlight_colors() is None

    def test_highlight_colors_from_env(self, monkeypatch):
        """Test highlight_colors splits and trims the list."""
        monkeypatch.setenv("RANDOMQUOTE_COLORS", "yellow, red ,,green")
        assert Environment.highlight_colors() == frozenset({"yellow", "red", "green"})

    @pytest.mark.parametrize("value", ["0", "false", "No", "OFF"])
    def test_legacy_fallback_disabled(self, monkeypatch, value):
        """Test false-like values turn the raw-text fallback off."""
        monkeypatch.setenv("RANDOMQUOTE_LEGACY_FALLBACK", value)
        assert Environment.legacy_fallback() is False

    def test_legacy_fallback_default(self, monkeypatch):
        """Test the raw-text fallback is on by default."""
        monkeypatch.delenv("RANDOMQUOTE_LEGACY_FALLBACK", raising=False)
        assert Environment.legacy_fallback() is True


class TestEnvSingleton:
    """Tests for the env singleton instance."""

    def test_env_is_environment_instance(self):
        """Test that env is an Environment instance."""
        assert isinstance(env, Environment)

    def test_env_methods_accessible(self, monkeypatch):
        """Test that env singleton methods work."""
        monkeypatch.setenv("RANDOMQUOTE_MAX_DEPTH", "9")
        assert env.max_depth() == 9
