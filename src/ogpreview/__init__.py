"""
OGPreview - Open Graph metadata extraction for link previews.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .crawler import FetchError, HttpDocumentFetcher
from .metadata import MetaTagGrouper, Metadata, TagScanner, materialize, materialize_all
from .pipeline import ExtractionResult, OpenGraphExtractor, extract_open_graph, fetch_open_graph

__all__ = [
    "__version__",
    "Config",
    "ExtractionResult",
    "FetchError",
    "HttpDocumentFetcher",
    "MetaTagGrouper",
    "Metadata",
    "OpenGraphExtractor",
    "TagScanner",
    "extract_open_graph",
    "fetch_open_graph",
    "materialize",
    "materialize_all",
]
