"""
OGPreview Metadata Module - Open Graph Extraction Pipeline

This module turns raw HTML into typed Open Graph records in three stages:

Core Features:
- Character-level tag scanning with quoting, escaping and comment rules
- Grouping of ``<meta property content>`` pairs into one bag per object
- Typed, immutable records for music, video, articles, books and profiles
- Recursive resolution of nested objects (musicians, albums, series)
- Best-effort field parsing: malformed values never fail a record

Components:
- TagScanner: Reports tags and their attributes to an observer
- MetaTagGrouper: Accumulates Open Graph property bags
- materialize / materialize_all: Build records from property bags
- Metadata and subclasses: The record taxonomy
- Determiner, TemporalValue: Scalar value types
"""

from .factory import RECORD_TYPES, materialize, materialize_all, materialize_as
from .meta_grouper import MetaTagGrouper
from .records import (
    Album,
    Article,
    Book,
    Episode,
    Image,
    Media,
    Metadata,
    Movie,
    Music,
    OtherVideo,
    Playlist,
    Profile,
    RadioStation,
    RecordKind,
    Song,
    TVShow,
    Video,
    VisualMedia,
)
from .tag_scanner import ScanState, TagScanner
from .values import Determiner, TemporalValue

__all__ = [
    # Scanning
    "TagScanner",
    "ScanState",
    # Grouping
    "MetaTagGrouper",
    # Factory
    "RECORD_TYPES",
    "materialize",
    "materialize_all",
    "materialize_as",
    # Records
    "RecordKind",
    "Metadata",
    "Media",
    "VisualMedia",
    "Image",
    "Music",
    "Song",
    "Album",
    "Playlist",
    "RadioStation",
    "Video",
    "Movie",
    "TVShow",
    "OtherVideo",
    "Episode",
    "Article",
    "Book",
    "Profile",
    # Values
    "Determiner",
    "TemporalValue",
]
