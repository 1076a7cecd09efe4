"""
End-to-end Open Graph extraction: scan, group, materialize.

``OpenGraphExtractor.extract`` runs the synchronous pipeline over one decoded
document. ``fetch_open_graph`` first retrieves the document through a
``DocumentFetcher`` and only runs the pipeline when the fetch succeeded.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from ogpreview.config.config import Config
from ogpreview.crawler.http_client import FetchError, HttpDocumentFetcher
from ogpreview.metadata.factory import materialize_all
from ogpreview.metadata.meta_grouper import MetaTagGrouper
from ogpreview.metadata.records import Metadata
from ogpreview.metadata.tag_scanner import TagScanner
from ogpreview.observability import histogram, increment
from ogpreview.protocols import DocumentFetcher, PropertyBag

logger = structlog.get_logger(__name__)


@dataclass
class ExtractionResult:
    """Outcome of extracting Open Graph records from one document."""

    success: bool
    records: List[Metadata] = field(default_factory=list)
    bags: List[PropertyBag] = field(default_factory=list)
    url: Optional[str] = None
    error: Optional[str] = None


class OpenGraphExtractor:
    """
    Runs the extraction pipeline over HTML documents.

    Every call to ``extract`` uses a fresh scanner and grouper, so one
    extractor can serve many documents, including from several threads.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config()

    def extract(self, html: str) -> ExtractionResult:
        """
        Extract every Open Graph object described in ``html``.

        Returns:
            A successful result with the records in document order, or an
            unsuccessful result with no records when the document has an
            unterminated or unmatched tag.
        """
        start = time.perf_counter()

        grouper = MetaTagGrouper()
        scanner = TagScanner(grouper, keep_self_closing=self.config.extraction.keep_self_closing_tags)
        scanned = scanner.scan(html)
        increment("tags_emitted", scanner.tags_emitted)

        if not scanned:
            histogram("scan_duration_seconds", time.perf_counter() - start)
            increment("documents_scanned", labels={"outcome": "failed"})
            logger.info("Document could not be scanned", length=len(html), tags_emitted=scanner.tags_emitted)
            return ExtractionResult(success=False, error="Unterminated or unmatched tag")

        bags = grouper.drain()
        records = materialize_all(bags)
        histogram("scan_duration_seconds", time.perf_counter() - start)

        increment("documents_scanned", labels={"outcome": "ok"})
        for record in records:
            increment("records_materialized", labels={"kind": record.kind.value})

        logger.debug(
            "Extracted Open Graph records",
            tags_emitted=scanner.tags_emitted,
            meta_tags_ignored=grouper.ignored_tags,
            bags=len(bags),
            kinds=[record.kind.value for record in records],
        )
        return ExtractionResult(success=True, records=records, bags=bags)


def extract_open_graph(html: str, config: Optional[Config] = None) -> ExtractionResult:
    """Extract Open Graph records from an HTML document."""
    return OpenGraphExtractor(config).extract(html)


async def fetch_open_graph(
    url: str,
    *,
    fetcher: Optional[DocumentFetcher] = None,
    config: Optional[Config] = None,
) -> ExtractionResult:
    """
    Fetch ``url`` and extract its Open Graph records.

    Args:
        url: Document to preview.
        fetcher: Source of the document; an ``HttpDocumentFetcher`` built
            from ``config.fetch`` is used (and closed) when omitted.
        config: Settings for fetching and extraction.

    Returns:
        The extraction result with ``url`` set. A failed fetch yields an
        unsuccessful result whose ``error`` describes the failure.
    """
    config = config or Config()

    with structlog.contextvars.bound_contextvars(document_url=url):
        try:
            if fetcher is None:
                async with HttpDocumentFetcher(config.fetch) as http_fetcher:
                    html = await http_fetcher.fetch_text(url)
            else:
                html = await fetcher.fetch_text(url)
        except FetchError as e:
            increment("fetches", labels={"outcome": "failed"})
            logger.warning("Document fetch failed", url=url, status=e.status, error=str(e))
            return ExtractionResult(success=False, url=url, error=str(e))

        increment("fetches", labels={"outcome": "ok"})
        result = OpenGraphExtractor(config).extract(html)
        result.url = url
        return result
