"""
Test configuration for OGPreview.

Provides sample documents, configuration objects and tag observers shared
by the unit and integration suites.
"""

# Standard library imports
from typing import Generator, List, Tuple

# Third-party imports
import pytest

# Local imports
from ogpreview.config import Config, FetchConfig


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")
    config.addinivalue_line("markers", "network: Tests requiring network access")


# ============================================================================
# Sample Documents
# ============================================================================


@pytest.fixture
def rock_html() -> str:
    """The canonical single-object Open Graph document."""
    return """<!DOCTYPE html>
<html prefix="og: https://ogp.me/ns#">
<head>
<title>The Rock (1996)</title>
<meta property="og:title" content="The Rock">
<meta property="og:type" content="video.movie">
<meta property="og:url" content="https://www.imdb.com/title/tt0117500/">
<meta property="og:image" content="https://ia.media-imdb.com/images/rock.jpg">
</head>
<body><p>A movie.</p></body>
</html>
"""


@pytest.fixture
def two_object_html() -> str:
    """A document describing two objects, each introduced by its og:type."""
    return """<html><head>
<meta property="og:type" content="video.movie">
<meta property="og:title" content="The Rock">
<meta property="og:type" content="article">
<meta property="og:title" content="Making of The Rock">
</head></html>
"""


@pytest.fixture
def article_html() -> str:
    """A richer article page with repeated properties and non-meta tags."""
    return """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Typing in Python</title>
    <!-- social cards -->
    <meta name="description" content="Not an Open Graph property">
    <meta property="og:type" content="article">
    <meta property="og:title" content="Typing in Python">
    <meta property="og:description" content="A tour of the typing module">
    <meta property="og:locale" content="en_GB">
    <meta property="og:locale:alternate" content="fr_FR">
    <meta property="og:locale:alternate" content="es_ES">
    <meta property="og:article:published_time" content="2023-12-01T10:00:00Z">
    <meta property="og:article:section" content="Technology">
    <meta property="og:article:tag" content="python">
    <meta property="og:article:tag" content="typing">
    <link rel="canonical" href="https://example.com/typing">
</head>
<body>
    <h1>Typing in Python</h1>
    <p>Body text with <strong>markup</strong>.</p>
</body>
</html>
"""


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_config() -> Config:
    """Provide test configuration with instant retries."""
    config = Config()
    config.fetch = FetchConfig(max_retries=2, backoff_base_seconds=0.0, timeout=5.0)
    config.monitoring.enabled = False
    return config


@pytest.fixture
def fetch_config() -> FetchConfig:
    """Fetch settings with no backoff delay."""
    return FetchConfig(max_retries=2, backoff_base_seconds=0.0, timeout=5.0, max_document_bytes=1024)


# ============================================================================
# Observer Fixtures
# ============================================================================


@pytest.fixture
def tag_recorder() -> Generator[List[Tuple[str, dict]], None, None]:
    """A list that records every tag event appended by ``record``."""
    events: List[Tuple[str, dict]] = []
    yield events
    events.clear()


@pytest.fixture
def recorder(tag_recorder):
    """Tag observer that appends events to ``tag_recorder``."""

    def record(tag: str, attributes: dict) -> None:
        tag_recorder.append((tag, attributes))

    return record
