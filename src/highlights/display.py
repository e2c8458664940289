"""Format stored quotes the way the plugin shows them."""

import random

from .models import QuoteRecord

# Shown when the store is empty or missing
FALLBACK_QUOTES = [
    "Hello, reader!",
    "Stay focused",
    "Time to read!",
    "Random wisdom incoming...",
    "Enjoy the moment",
]


def format_quote(entry: QuoteRecord | str) -> str:
    """
    Render a quote as display text.

    Text starting with a lowercase letter was highlighted mid-sentence and gets
    a leading ellipsis. Book and author follow on their own lines when known.
    """
    if isinstance(entry, QuoteRecord):
        text, book, author = entry.text, entry.book, entry.author
    else:
        text, book, author = str(entry), "", ""

    if text == "":
        text = "(empty)"
    if "a" <= text[0] <= "z":
        text = "… " + text

    out = "“" + text + "”"
    if book or author:
        out += "\n\n" + book + "\n" + author
    return out


def pick_random_quote(
    records: list[QuoteRecord], rng: random.Random | None = None
) -> QuoteRecord | str:
    """Pick one stored quote, or a fallback message when there are none."""
    rng = rng or random.Random()
    if not records:
        return rng.choice(FALLBACK_QUOTES)
    return rng.choice(records)
