"""
Open Graph record types.

Immutable dataclasses for every kind of object the Open Graph protocol
describes. Shared fields are layered through inheritance::

    Metadata
    ├── Media
    │   ├── VisualMedia
    │   │   ├── Image
    │   │   └── Video ── Movie, TVShow, OtherVideo, Episode
    │   └── Music ── Song, Album, Playlist, RadioStation
    ├── Article
    ├── Book
    └── Profile

Each record is built from one property bag with ``from_bag``. Fields that
are missing from the bag, or that do not parse, are left as ``None``;
``title``, ``image_url`` and ``url`` fall back to an empty string. Nested
objects (musicians, albums, series) are built eagerly from nested bags using
the fixed record type of the field.

Differences from the Open Graph protocol, all of which widen what is
accepted:

1. ``title``, ``image`` and ``url`` are required by the protocol; their
   absence never fails a record here.
2. ``musician`` and ``creator`` are lists of profiles. A single profile bag
   is still accepted and becomes a one-element tuple.
3. ``Profile.gender`` is a free-form string rather than a closed enum.
4. When a scalar property is repeated, the first value is used.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from ogpreview.metadata.values import Determiner, TemporalValue

R = TypeVar("R", bound="Metadata")

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class RecordKind(Enum):
    """Closed set of record kinds."""

    METADATA = "metadata"
    MEDIA = "media"
    VISUAL_MEDIA = "visual_media"
    IMAGE = "image"
    MUSIC = "music"
    SONG = "song"
    ALBUM = "album"
    PLAYLIST = "playlist"
    RADIO_STATION = "radio_station"
    VIDEO = "video"
    MOVIE = "movie"
    EPISODE = "episode"
    TV_SHOW = "tv_show"
    OTHER_VIDEO = "other_video"
    ARTICLE = "article"
    BOOK = "book"
    PROFILE = "profile"


# ============================================================================
# Bag readers
# ============================================================================


def _string(bag: Mapping[str, Any], key: str) -> Optional[str]:
    value = bag.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, str):
                return item
    return None


def _first_string(bag: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = _string(bag, key)
        if value is not None:
            return value
    return None


def _strings(bag: Mapping[str, Any], key: str) -> Optional[Tuple[str, ...]]:
    value = bag.get(key)
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        items = tuple(item for item in value if isinstance(item, str))
        return items or None
    return None


def _integer(bag: Mapping[str, Any], key: str) -> Optional[int]:
    text = _string(bag, key)
    if text is None or not _INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)


def _decimal(bag: Mapping[str, Any], key: str) -> Optional[float]:
    text = _string(bag, key)
    if text is None or not _DECIMAL_PATTERN.fullmatch(text):
        return None
    return float(text)


def _temporal(bag: Mapping[str, Any], key: str) -> Optional[TemporalValue]:
    text = _string(bag, key)
    return TemporalValue.parse(text) if text is not None else None


def _nested(bag: Mapping[str, Any], key: str, record_type: Type[R]) -> Optional[R]:
    value = bag.get(key)
    if isinstance(value, Mapping):
        return record_type.from_bag(value)
    if isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, Mapping):
                return record_type.from_bag(item)
    return None


def _nested_list(bag: Mapping[str, Any], key: str, record_type: Type[R]) -> Optional[Tuple[R, ...]]:
    value = bag.get(key)
    if isinstance(value, Mapping):
        return (record_type.from_bag(value),)
    if isinstance(value, (list, tuple)):
        records = tuple(record_type.from_bag(item) for item in value if isinstance(item, Mapping))
        return records or None
    return None


def _freeze(value: Any) -> Any:
    """Deep read-only copy of a bag value: lists become tuples, bags become proxies."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _format_value(value: Any, indent: int) -> str:
    if isinstance(value, Metadata):
        return value.describe(indent)
    if isinstance(value, tuple):
        return "[" + ", ".join(_format_value(item, indent) for item in value) + "]"
    if isinstance(value, Enum):
        return repr(value.value)
    if isinstance(value, str):
        return repr(value)
    return str(value)


# ============================================================================
# Base record
# ============================================================================


@dataclass(frozen=True)
class Metadata:
    """Basic metadata common to every Open Graph object."""

    kind: ClassVar[RecordKind] = RecordKind.METADATA

    #: The title of the object as it should appear within the graph, e.g. "The Rock".
    title: str = ""
    #: An image URL which should represent the object within the graph.
    image_url: str = ""
    #: The canonical URL of the object, used as its permanent ID in the graph.
    url: str = ""

    audio_url: Optional[str] = None
    description: Optional[str] = None
    determiner: Optional[Determiner] = None
    locale: Optional[str] = None
    alternate_locales: Optional[Tuple[str, ...]] = None
    site_name: Optional[str] = None
    video_url: Optional[str] = None

    #: Read-only copy of the property bag this record was built from; repeated
    #: values are tuples.
    raw_data: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), repr=False, compare=False)

    @classmethod
    def from_bag(cls: Type[R], bag: Mapping[str, Any]) -> R:
        """Build this record type from ``bag``, ignoring ``og:type``."""
        return cls(**cls._read_fields(bag))

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        determiner = _string(bag, "og:determiner")
        return {
            "title": _string(bag, "og:title") or "",
            "image_url": _string(bag, "og:image") or "",
            "url": _string(bag, "og:url") or "",
            "audio_url": _string(bag, "og:audio"),
            "description": _string(bag, "og:description"),
            "determiner": Determiner.parse(determiner) if determiner is not None else None,
            "locale": _string(bag, "og:locale"),
            "alternate_locales": _strings(bag, "og:locale:alternate"),
            "site_name": _string(bag, "og:site_name"),
            "video_url": _string(bag, "og:video"),
            "raw_data": _freeze(bag),
        }

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return [
            ("title", self.title),
            ("image_url", self.image_url),
            ("url", self.url),
            ("audio_url", self.audio_url),
            ("description", self.description),
            ("determiner", self.determiner),
            ("locale", self.locale),
            ("alternate_locales", self.alternate_locales),
            ("site_name", self.site_name),
            ("video_url", self.video_url),
        ]

    def describe(self, indent: int = 0) -> str:
        """Render every field of the record, one per line, nesting child records."""
        pad = "\t" * indent
        lines = [f"{type(self).__name__} ({self.kind.value}): {{"]
        for name, value in self._describe_fields():
            lines.append(f"{pad}\t{name}: {_format_value(value, indent + 1)},")
        lines.append(f"{pad}}}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()


# ============================================================================
# Media
# ============================================================================


@dataclass(frozen=True)
class Media(Metadata):
    kind: ClassVar[RecordKind] = RecordKind.MEDIA

    secure_url: Optional[str] = None
    mime_type: Optional[str] = None

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [
            ("secure_url", self.secure_url),
            ("mime_type", self.mime_type),
        ]


@dataclass(frozen=True)
class VisualMedia(Media):
    kind: ClassVar[RecordKind] = RecordKind.VISUAL_MEDIA

    width: Optional[float] = None
    height: Optional[float] = None

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [
            ("width", self.width),
            ("height", self.height),
        ]


@dataclass(frozen=True)
class Image(VisualMedia):
    """An image described by the ``og:image`` structured properties."""

    kind: ClassVar[RecordKind] = RecordKind.IMAGE

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        url = _first_string(bag, "og:image:url", "og:image")
        if url is not None:
            fields["url"] = url
        fields.update(
            secure_url=_string(bag, "og:image:secure_url"),
            mime_type=_string(bag, "og:image:type"),
            width=_decimal(bag, "og:image:width"),
            height=_decimal(bag, "og:image:height"),
        )
        return fields


# ============================================================================
# Music
# ============================================================================


@dataclass(frozen=True)
class Music(Media):
    """Base for music records; the record URL comes from ``og:audio``."""

    kind: ClassVar[RecordKind] = RecordKind.MUSIC

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        url = _first_string(bag, "og:audio:url", "og:audio")
        if url is not None:
            fields["url"] = url
        fields.update(
            secure_url=_string(bag, "og:audio:secure_url"),
            mime_type=_string(bag, "og:audio:type"),
        )
        return fields


@dataclass(frozen=True)
class Song(Music):
    kind: ClassVar[RecordKind] = RecordKind.SONG

    #: Length in seconds.
    duration: Optional[int] = None
    albums: Optional[Tuple[Album, ...]] = None
    disc: Optional[int] = None
    track: Optional[int] = None
    musicians: Optional[Tuple[Profile, ...]] = None

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        fields.update(
            duration=_integer(bag, "og:music:duration"),
            albums=_nested_list(bag, "og:music:album", Album),
            disc=_integer(bag, "og:music:album:disc"),
            track=_integer(bag, "og:music:track"),
            musicians=_nested_list(bag, "og:music:musician", Profile),
        )
        return fields

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [
            ("duration", self.duration),
            ("albums", self.albums),
            ("disc", self.disc),
            ("track", self.track),
            ("musicians", self.musicians),
        ]


@dataclass(frozen=True)
class Album(Music):
    kind: ClassVar[RecordKind] = RecordKind.ALBUM

    song: Optional[Song] = None
    disc: Optional[int] = None
    track: Optional[int] = None
    musicians: Optional[Tuple[Profile, ...]] = None
    release_date: Optional[TemporalValue] = None

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        fields.update(
            song=_nested(bag, "og:music:song", Song),
            disc=_integer(bag, "og:music:album:disc"),
            track=_integer(bag, "og:music:track"),
            musicians=_nested_list(bag, "og:music:musician", Profile),
            release_date=_temporal(bag, "og:music:release_date"),
        )
        return fields

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [
            ("song", self.song),
            ("disc", self.disc),
            ("track", self.track),
            ("musicians", self.musicians),
            ("release_date", self.release_date),
        ]


@dataclass(frozen=True)
class Playlist(Music):
    kind: ClassVar[RecordKind] = RecordKind.PLAYLIST

    songs: Optional[Tuple[Song, ...]] = None
    disc: Optional[int] = None
    track: Optional[int] = None
    creators: Optional[Tuple[Profile, ...]] = None

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        fields.update(
            songs=_nested_list(bag, "og:music:song", Song),
            disc=_integer(bag, "og:music:album:disc"),
            track=_integer(bag, "og:music:track"),
            creators=_nested_list(bag, "og:music:creator", Profile),
        )
        return fields

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [
            ("songs", self.songs),
            ("disc", self.disc),
            ("track", self.track),
            ("creators", self.creators),
        ]


@dataclass(frozen=True)
class RadioStation(Music):
    kind: ClassVar[RecordKind] = RecordKind.RADIO_STATION

    creators: Optional[Tuple[Profile, ...]] = None

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        fields["creators"] = _nested_list(bag, "og:music:creator", Profile)
        return fields

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [("creators", self.creators)]


# ============================================================================
# Video
# ============================================================================


@dataclass(frozen=True)
class Video(VisualMedia):
    """Base for video records; URL, size and type come from ``og:video``."""

    kind: ClassVar[RecordKind] = RecordKind.VIDEO

    actors: Optional[Tuple[Profile, ...]] = None
    #: Roles played by the actors, in the order they were declared.
    roles: Optional[Tuple[str, ...]] = None
    directors: Optional[Tuple[Profile, ...]] = None
    writers: Optional[Tuple[Profile, ...]] = None
    #: Length in seconds.
    duration: Optional[int] = None
    release_date: Optional[TemporalValue] = None
    tags: Optional[Tuple[str, ...]] = None

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        url = _first_string(bag, "og:video:url", "og:video")
        if url is not None:
            fields["url"] = url
        fields.update(
            secure_url=_string(bag, "og:video:secure_url"),
            mime_type=_string(bag, "og:video:type"),
            width=_decimal(bag, "og:video:width"),
            height=_decimal(bag, "og:video:height"),
            actors=_nested_list(bag, "og:video:actor", Profile),
            roles=_strings(bag, "og:video:actor:role"),
            directors=_nested_list(bag, "og:video:director", Profile),
            writers=_nested_list(bag, "og:video:writer", Profile),
            duration=_integer(bag, "og:video:duration"),
            release_date=_temporal(bag, "og:video:release_date"),
            tags=_strings(bag, "og:video:tag"),
        )
        return fields

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [
            ("actors", self.actors),
            ("roles", self.roles),
            ("directors", self.directors),
            ("writers", self.writers),
            ("duration", self.duration),
            ("release_date", self.release_date),
            ("tags", self.tags),
        ]


@dataclass(frozen=True)
class Movie(Video):
    kind: ClassVar[RecordKind] = RecordKind.MOVIE


@dataclass(frozen=True)
class TVShow(Video):
    kind: ClassVar[RecordKind] = RecordKind.TV_SHOW


@dataclass(frozen=True)
class OtherVideo(Video):
    kind: ClassVar[RecordKind] = RecordKind.OTHER_VIDEO


@dataclass(frozen=True)
class Episode(Video):
    kind: ClassVar[RecordKind] = RecordKind.EPISODE

    series: Optional[TVShow] = None

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        fields["series"] = _nested(bag, "og:video:series", TVShow)
        return fields

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [("series", self.series)]


# ============================================================================
# Article, Book, Profile
# ============================================================================


@dataclass(frozen=True)
class Article(Metadata):
    kind: ClassVar[RecordKind] = RecordKind.ARTICLE

    published_time: Optional[TemporalValue] = None
    modified_time: Optional[TemporalValue] = None
    expiration_time: Optional[TemporalValue] = None
    authors: Optional[Tuple[Profile, ...]] = None
    #: A high-level section name, e.g. "Technology".
    section: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        fields.update(
            published_time=_temporal(bag, "og:article:published_time"),
            modified_time=_temporal(bag, "og:article:modified_time"),
            expiration_time=_temporal(bag, "og:article:expiration_time"),
            authors=_nested_list(bag, "og:article:author", Profile),
            section=_string(bag, "og:article:section"),
            tags=_strings(bag, "og:article:tag"),
        )
        return fields

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [
            ("published_time", self.published_time),
            ("modified_time", self.modified_time),
            ("expiration_time", self.expiration_time),
            ("authors", self.authors),
            ("section", self.section),
            ("tags", self.tags),
        ]


@dataclass(frozen=True)
class Book(Metadata):
    kind: ClassVar[RecordKind] = RecordKind.BOOK

    authors: Optional[Tuple[Profile, ...]] = None
    isbn: Optional[str] = None
    release_date: Optional[TemporalValue] = None
    tags: Optional[Tuple[str, ...]] = None

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        fields.update(
            authors=_nested_list(bag, "og:book:author", Profile),
            isbn=_string(bag, "og:book:isbn"),
            release_date=_temporal(bag, "og:book:release_date"),
            tags=_strings(bag, "og:book:tag"),
        )
        return fields

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [
            ("authors", self.authors),
            ("isbn", self.isbn),
            ("release_date", self.release_date),
            ("tags", self.tags),
        ]


@dataclass(frozen=True)
class Profile(Metadata):
    kind: ClassVar[RecordKind] = RecordKind.PROFILE

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    gender: Optional[str] = None

    @classmethod
    def _read_fields(cls, bag: Mapping[str, Any]) -> Dict[str, Any]:
        fields = super()._read_fields(bag)
        fields.update(
            first_name=_string(bag, "og:profile:first_name"),
            last_name=_string(bag, "og:profile:last_name"),
            username=_string(bag, "og:profile:username"),
            gender=_string(bag, "og:profile:gender"),
        )
        return fields

    def _describe_fields(self) -> List[Tuple[str, Any]]:
        return super()._describe_fields() + [
            ("first_name", self.first_name),
            ("last_name", self.last_name),
            ("username", self.username),
            ("gender", self.gender),
        ]
