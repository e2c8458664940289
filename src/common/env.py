"""Environment configuration interface for randomquote.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from common.constants import DEFAULT_BOOK_DIR, DEFAULT_MAX_DEPTH, DEFAULT_QUOTES_PATH

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def book_dir() -> Path:
        """Get the root directory scanned for book sidecars.

        Returns:
            Book directory, defaults to /mnt/us/Books (Kindle storage)
        """
        return Path(os.getenv("RANDOMQUOTE_BOOK_DIR", DEFAULT_BOOK_DIR))

    @staticmethod
    def quotes_path() -> Path:
        """Get the path of the generated quote store.

        Returns:
            Path to quotes.lua, defaults to ./quotes.lua
        """
        return Path(os.getenv("RANDOMQUOTE_QUOTES_PATH", DEFAULT_QUOTES_PATH))

    @staticmethod
    def max_depth() -> int:
        """Get the directory recursion bound.

        Returns:
            Maximum depth, defaults to 5
        """
        return int(os.getenv("RANDOMQUOTE_MAX_DEPTH", str(DEFAULT_MAX_DEPTH)))

    @staticmethod
    def highlight_colors() -> frozenset[str] | None:
        """Get the allowed highlight colors.

        Read from a comma-separated list, e.g. ``RANDOMQUOTE_COLORS=yellow,red``.

        Returns:
            Set of color names, or None when every color is accepted
        """
        raw = os.getenv("RANDOMQUOTE_COLORS", "")
        colors = frozenset(c.strip() for c in raw.split(",") if c.strip())
        return colors or None

    @staticmethod
    def legacy_fallback() -> bool:
        """Whether unparseable sidecars are scanned as raw text.

        Returns:
            True unless RANDOMQUOTE_LEGACY_FALLBACK is a false-like value
        """
        value = os.getenv("RANDOMQUOTE_LEGACY_FALLBACK", "true")
        return value.strip().lower() not in ("0", "false", "no", "off")


# Singleton instance for convenient access
env = Environment()
