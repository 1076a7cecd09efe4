"""
Defines and manages Prometheus metrics for the extraction pipeline.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram
from prometheus_client import generate_latest

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# Reloading this module (the test suite does so between tests) must not raise
# duplicate registration errors, so an existing collector is reused.


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[override]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing  # type: ignore[return-value]

        try:
            return metric_cls(name, documentation, *args, **kwargs)  # type: ignore[call-arg]
        except ValueError:
            # Registration lost the race; fall back to the now-existing collector.
            return _PROM_REGISTRY._names_to_collectors[name]  # type: ignore[return-value]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)  # type: ignore[assignment]
Histogram = _duplicate_safe_factory(_OrigHistogram)  # type: ignore[assignment]


def _create_metrics() -> Dict[str, Any]:
    return {
        "documents_scanned": Counter(
            "ogpreview_documents_scanned_total",
            "Documents run through the tag scanner, by outcome",
            ["outcome"],
        ),
        "tags_emitted": Counter(
            "ogpreview_tags_emitted_total",
            "Tags reported by the scanner",
        ),
        "records_materialized": Counter(
            "ogpreview_records_materialized_total",
            "Open Graph records built from property bags, by kind",
            ["kind"],
        ),
        "scan_duration_seconds": Histogram(
            "ogpreview_scan_duration_seconds",
            "Time taken to scan, group and materialize one document",
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        ),
        "fetches": Counter(
            "ogpreview_fetches_total",
            "Document fetches, by outcome",
            ["outcome"],
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()


def export_prometheus() -> str:
    """Export metrics in Prometheus text format."""
    return generate_latest(_PROM_REGISTRY).decode("utf-8")
