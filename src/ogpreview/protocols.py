"""
Core contracts and type aliases for OGPreview.

This module defines the shapes that flow between the pipeline stages:

- Tag events produced by the scanner (tag name plus attribute map)
- Property bags accumulated by the meta grouper
- The document fetch contract consumed by the preview helpers
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Protocol, Union

# ============================================================================
# Type Aliases
# ============================================================================

AttributeMap = Dict[str, str]
"""Attribute name (case-sensitive as written) to value, for one tag."""

TagObserver = Callable[[str, AttributeMap], Any]
"""Callback invoked by the scanner once per recognized, non-empty tag."""

PropertyValue = Union[str, List[str], Mapping[str, Any], List[Mapping[str, Any]]]
"""A bag value: a string, repeated strings, or (hand-built) nested bags."""

PropertyBag = Dict[str, PropertyValue]
"""Namespaced Open Graph keys (``og:title``) mapped to their values."""

# ============================================================================
# Constants
# ============================================================================

DISCRIMINATOR_KEY = "og:type"
"""The property whose value selects the record kind."""


# ============================================================================
# Protocols
# ============================================================================


class DocumentFetcher(Protocol):
    """Retrieves a decoded HTML document for the extraction pipeline."""

    async def fetch_text(self, url: str) -> str:
        """
        Fetch ``url`` and return its body as text.

        Raises:
            FetchError: if the document could not be retrieved or decoded.
        """
        ...
