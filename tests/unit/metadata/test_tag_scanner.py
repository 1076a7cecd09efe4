"""
Tests for the character-level tag scanner.
"""

import pytest
from ogpreview.metadata.tag_scanner import TagScanner


@pytest.mark.unit
class TestTagScannerEvents:
    """Tags and attributes reported to the observer."""

    def test_meta_tag_reported_with_attributes(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<meta property="og:title" content="The Rock">') is True
        assert tag_recorder == [("meta", {"property": "og:title", "content": "The Rock"})]
        assert scanner.tags_emitted == 1

    def test_closing_tags_are_not_reported(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan("<head><title>The Rock</title></head>") is True
        assert [tag for tag, _ in tag_recorder] == ["head", "title"]

    def test_tag_and_attribute_case_preserved(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<META PROPERTY="og:title" CONTENT="x">') is True
        assert tag_recorder == [("META", {"PROPERTY": "og:title", "CONTENT": "x"})]

    def test_whitespace_around_equals(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<meta\n  property = "og:title"\n  content = "x">') is True
        assert tag_recorder == [("meta", {"property": "og:title", "content": "x"})]

    def test_valueless_attribute(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<input disabled type="text">') is True
        assert tag_recorder == [("input", {"disabled": "", "type": "text"})]

    @pytest.mark.parametrize("html", ["<input disabled>", "<input disabled >", "<input\tdisabled\n>"])
    def test_trailing_valueless_attribute(self, recorder, tag_recorder, html):
        scanner = TagScanner(recorder)

        assert scanner.scan(html) is True
        assert tag_recorder == [("input", {"disabled": ""})]

    def test_valueless_attribute_before_self_close_when_kept(self, recorder, tag_recorder):
        scanner = TagScanner(recorder, keep_self_closing=True)

        assert scanner.scan("<input disabled/>") is True
        assert tag_recorder == [("input", {"disabled": ""})]

    def test_duplicate_attribute_last_wins(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<meta property="og:title" content="a" content="b">') is True
        assert tag_recorder == [("meta", {"property": "og:title", "content": "b"})]

    def test_escaped_close_inside_tag(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan(r'<meta property="og:title" content=a\>b>') is True
        assert tag_recorder == [("meta", {"property": "og:title", "content": "a>b"})]

    def test_empty_quoted_value(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<meta property="og:description" content="">') is True
        assert tag_recorder[0][1]["content"] == ""

    def test_quoted_value_keeps_special_characters(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        html = '<meta property="og:url" content="https://example.com/a>b?c=d e">'
        assert scanner.scan(html) is True
        assert tag_recorder[0][1]["content"] == "https://example.com/a>b?c=d e"

    def test_quoted_value_starting_with_slash(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<meta property="og:url" content="/movies/rock">') is True
        assert tag_recorder == [("meta", {"property": "og:url", "content": "/movies/rock"})]

    def test_escaped_quote_inside_value(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan(r'<meta property="og:title" content="say \"hi\"">') is True
        assert tag_recorder[0][1]["content"] == 'say "hi"'

    def test_observer_receives_copies(self, tag_recorder):
        seen = []

        def observer(tag, attributes):
            attributes["mutated"] = "yes"
            seen.append(attributes)

        scanner = TagScanner(observer)
        assert scanner.scan('<a href="x"><b class="y">') is True
        assert seen[0] == {"href": "x", "mutated": "yes"}
        assert seen[1] == {"class": "y", "mutated": "yes"}

    def test_observer_passed_to_scan_overrides_constructor(self, recorder, tag_recorder):
        ignored = []
        scanner = TagScanner(lambda tag, attrs: ignored.append(tag))

        assert scanner.scan("<p>", on_tag=recorder) is True
        assert tag_recorder == [("p", {})]
        assert ignored == []


@pytest.mark.unit
class TestTagScannerSkipping:
    """Comments and self-closing tags."""

    def test_doctype_and_comments_skipped(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        html = '<!DOCTYPE html><!-- social cards --><meta property="og:type" content="article">'
        assert scanner.scan(html) is True
        assert tag_recorder == [("meta", {"property": "og:type", "content": "article"})]

    def test_escaped_close_does_not_end_comment(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan(r"<!-- 1 \> 0 --><p>") is True
        assert tag_recorder == [("p", {})]

    def test_self_closing_tags_discarded_by_default(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<br/><meta property="og:title" content="x" /><p>') is True
        assert tag_recorder == [("p", {})]

    def test_self_closing_tags_kept_when_enabled(self, recorder, tag_recorder):
        scanner = TagScanner(recorder, keep_self_closing=True)

        assert scanner.scan('<br/><meta property="og:title" content="x" />') is True
        assert tag_recorder == [
            ("br", {}),
            ("meta", {"property": "og:title", "content": "x"}),
        ]

    def test_closing_tags_ignored_when_keeping_self_closing(self, recorder, tag_recorder):
        scanner = TagScanner(recorder, keep_self_closing=True)

        assert scanner.scan("<p></p>") is True
        assert tag_recorder == [("p", {})]


@pytest.mark.unit
class TestTagScannerFailures:
    """Scan results for malformed documents."""

    def test_unterminated_tag_fails(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<meta property="og:title" content="X"') is False
        assert tag_recorder == []

    def test_unterminated_quote_fails(self, recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan('<meta content="X>') is False

    def test_unterminated_comment_fails(self, recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan("<!-- never closed") is False

    def test_stray_close_fails_after_reporting_earlier_tags(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan("<p>1 > 0</p>") is False
        assert tag_recorder == [("p", {})]

    def test_no_observer_fails(self):
        scanner = TagScanner()

        assert scanner.scan("<p>") is False

    def test_empty_document_succeeds(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan("") is True
        assert scanner.scan("plain text only") is True
        assert tag_recorder == []

    def test_scanner_reusable_after_failure(self, recorder, tag_recorder):
        scanner = TagScanner(recorder)

        assert scanner.scan("<meta") is False
        assert scanner.scan("<p>") is True
        assert tag_recorder == [("p", {})]
        assert scanner.tags_emitted == 1
