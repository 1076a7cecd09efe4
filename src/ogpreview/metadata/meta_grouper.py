"""
Meta Grouper - Open Graph Property Bag Accumulation

Observes scanner tag events, keeps only ``<meta>`` tags carrying both a
``property`` and a ``content`` attribute, and groups the pairs into one
property bag per described object. A new bag starts whenever ``og:type``
shows up again in the bag currently being filled, which is how pages
describing several objects are split apart.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from ogpreview.protocols import DISCRIMINATOR_KEY, AttributeMap, PropertyBag

logger = structlog.get_logger(__name__)

_META_TAG = "meta"
_PROPERTY_ATTRIBUTE = "property"
_CONTENT_ATTRIBUTE = "content"


class MetaTagGrouper:
    """
    Keeps track of Open Graph meta tags as they come in.

    After tracking::

        <meta property="og:title" content="The Rock">
        <meta property="og:type" content="video.movie">
        <meta property="og:image" content="http://example.com/rock.jpg">
        <meta property="og:image" content="http://example.com/rock2.jpg">

    ``bags`` is::

        [{
            "og:title": "The Rock",
            "og:type": "video.movie",
            "og:image": ["http://example.com/rock.jpg", "http://example.com/rock2.jpg"],
        }]

    The grouper is callable, so it can be handed to the scanner directly as
    its tag observer.
    """

    def __init__(self) -> None:
        self._sealed: List[PropertyBag] = []
        self._current: PropertyBag = {}
        self.ignored_tags = 0

    @property
    def bags(self) -> List[PropertyBag]:
        """Sealed bags followed by the bag currently being filled; never empty."""
        return [*self._sealed, self._current]

    def track(self, tag: str, attributes: AttributeMap) -> bool:
        """
        Track one tag event.

        Returns:
            True if the tag was a ``meta`` tag (even one lacking a property
            or content), False for every other tag.
        """
        if tag.lower() != _META_TAG:
            self.ignored_tags += 1
            return False

        prop: Optional[str] = None
        content: Optional[str] = None
        for key, value in attributes.items():
            lowered = key.lower()
            if lowered == _PROPERTY_ATTRIBUTE:
                prop = value
            elif lowered == _CONTENT_ATTRIBUTE:
                content = value

        if prop is None or content is None:
            return True

        if prop == DISCRIMINATOR_KEY and prop in self._current:
            self._sealed.append(self._current)
            self._current = {}

        existing = self._current.get(prop)
        if existing is None:
            self._current[prop] = content
        elif isinstance(existing, list):
            existing.append(content)
        else:
            self._current[prop] = [existing, content]

        return True

    def __call__(self, tag: str, attributes: AttributeMap) -> None:
        if not self.track(tag, attributes):
            logger.debug("Refusing to track non-meta tag", tag=tag)

    def drain(self) -> List[PropertyBag]:
        """Hand the accumulated bags to the caller and start over."""
        bags = self.bags
        self._sealed = []
        self._current = {}
        return bags
