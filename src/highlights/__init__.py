"""Harvest KOReader highlights into a random-quote store."""

from .acceptance import accept
from .collector import QuoteCollector
from .errors import HighlightsError, LuaSyntaxError, StoreWriteError
from .main import HarvestResult, extract_highlights, harvest
from .models import Annotation, AnnotationSource, QuoteRecord, ScanOptions
from .sidecar import parse_sidecar
from .store import QuoteStore, read_quote_store, write_quote_store
from .walker import walk

__all__ = [
    "accept",
    "Annotation",
    "AnnotationSource",
    "extract_highlights",
    "harvest",
    "HarvestResult",
    "HighlightsError",
    "LuaSyntaxError",
    "parse_sidecar",
    "QuoteCollector",
    "QuoteRecord",
    "QuoteStore",
    "read_quote_store",
    "ScanOptions",
    "StoreWriteError",
    "walk",
    "write_quote_store",
]
