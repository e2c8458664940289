"""Shared constants for the randomquote highlight harvester.

For environment-based configuration (book directory, store path, etc.), use the env module:
    from common.env import env
    book_dir = env.book_dir()
"""

# Highlights shorter than this (after whitespace normalization) are treated as labels
MIN_QUOTE_LENGTH = 20

# How many directory levels below the book root are scanned
DEFAULT_MAX_DEPTH = 5

# KOReader keeps per-book settings in a "<book>.sdr" folder next to the book file
SIDECAR_SUFFIX = ".sdr"

# Separates the fields of a record's dedup key; never present in highlight text
KEY_SEPARATOR = "\x1f"

# First line of every generated quote store
STORE_HEADER = "-- autogenerated by randomquote plugin"

DEFAULT_BOOK_DIR = "/mnt/us/Books"
DEFAULT_QUOTES_PATH = "./quotes.lua"
