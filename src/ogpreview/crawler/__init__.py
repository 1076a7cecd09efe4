"""Document fetching for link previews."""

from .http_client import FetchError, HttpDocumentFetcher

__all__ = ["FetchError", "HttpDocumentFetcher"]
