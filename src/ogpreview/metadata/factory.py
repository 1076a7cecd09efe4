"""
Metadata factory: turns property bags into typed Open Graph records.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Type, TypeVar

import structlog

from ogpreview.metadata.records import (
    Album,
    Article,
    Book,
    Episode,
    Metadata,
    Movie,
    OtherVideo,
    Playlist,
    Profile,
    RadioStation,
    Song,
    TVShow,
)
from ogpreview.protocols import DISCRIMINATOR_KEY

logger = structlog.get_logger(__name__)

R = TypeVar("R", bound=Metadata)

# og:type literal -> record type. Anything else becomes a plain Metadata.
RECORD_TYPES: Mapping[str, Type[Metadata]] = MappingProxyType(
    {
        "music.song": Song,
        "music.album": Album,
        "music.playlist": Playlist,
        "music.radio_station": RadioStation,
        "video.movie": Movie,
        "video.episode": Episode,
        "video.tv_show": TVShow,
        "video.other": OtherVideo,
        "article": Article,
        "book": Book,
        "profile": Profile,
    }
)


def materialize(bag: Mapping[str, Any]) -> Optional[Metadata]:
    """
    Build the record described by ``bag``.

    Args:
        bag: Open Graph properties for one object.

    Returns:
        None when the bag has no ``og:type``; the matching record type for a
        known ``og:type``; a base ``Metadata`` record for any other value.
    """
    og_type = bag.get(DISCRIMINATOR_KEY)
    if isinstance(og_type, (list, tuple)):
        og_type = next((item for item in og_type if isinstance(item, str)), None)
    if not isinstance(og_type, str):
        return None

    record_type = RECORD_TYPES.get(og_type)
    if record_type is None:
        logger.debug("Unknown og:type, using common fields only", og_type=og_type)
        record_type = Metadata

    return record_type.from_bag(bag)


def materialize_all(bags: Iterable[Mapping[str, Any]]) -> List[Metadata]:
    """Materialize every bag in order, dropping bags without ``og:type``."""
    records: List[Metadata] = []
    for bag in bags:
        record = materialize(bag)
        if record is not None:
            records.append(record)
    return records


def materialize_as(record_type: Type[R], bag: Mapping[str, Any]) -> R:
    """Build ``record_type`` from ``bag`` without consulting ``og:type``."""
    return record_type.from_bag(bag)
