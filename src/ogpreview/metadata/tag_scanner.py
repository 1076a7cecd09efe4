"""
Tag Scanner - Barebones Character-Level HTML Tag Reader

Walks raw markup one character at a time and reports every completed tag to
an observer as ``(tag_name, attributes)``. The scanner knows nothing about
Open Graph; it only tracks tag boundaries, attribute tokens, double-quoted
values, backslash escapes and ``<!...>`` comments.

It performs no document validation (a ``<meta>`` outside ``<head>`` is
reported like any other tag) and comment skipping stops at the first ``>``
after ``<!``, so comments whose bodies contain ``>`` are not supported.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

import structlog

from ogpreview.protocols import AttributeMap, TagObserver

logger = structlog.get_logger(__name__)


class ScanState(Enum):
    """States of the tag scanner."""

    START = "start"
    IN_COMMENT = "in_comment"
    IN_TAG_NAME = "in_tag_name"
    IN_ATTRIBUTE_NAME = "in_attribute_name"
    IN_ATTRIBUTE_VALUE = "in_attribute_value"


class TagScanner:
    """
    Reports HTML tags as they are encountered.

    After scanning::

        <meta property="og:title" content="The Rock">

    the observer is called with
    ``("meta", {"property": "og:title", "content": "The Rock"})``.

    Closing tags (``</head>``) and, by default, self-closing tags
    (``<br/>``) complete with an empty name and are never reported. Pass
    ``keep_self_closing=True`` to report self-closing tags under the name
    read before the ``/``.

    An instance keeps per-document state while scanning; use one instance
    per document or serialize calls.
    """

    def __init__(self, on_tag: Optional[TagObserver] = None, *, keep_self_closing: bool = False) -> None:
        self.on_tag = on_tag
        self.keep_self_closing = keep_self_closing
        self.tags_emitted = 0
        self._reset()

    def _reset(self) -> None:
        self._state = ScanState.START
        self._markers: List[str] = []
        self._token: List[str] = []
        self._attributes: AttributeMap = {}
        self._attribute_name = ""
        self._in_quotes = False
        self._quoted = False
        self._escaped = False
        self._awaiting_equals = False
        self._suppressed = False
        self._discard = False

    def scan(self, text: str, on_tag: Optional[TagObserver] = None) -> bool:
        """
        Scan ``text`` and report every completed, named tag.

        Args:
            text: The document to scan.
            on_tag: Observer for this call; falls back to the one given at
                construction.

        Returns:
            True if every opened tag was closed before the end of input.
            False if no observer is registered, if a ``>`` arrives with no
            open tag, or if the input ends inside a tag, comment or quoted
            value. Tags reported before a failure stay reported.
        """
        observer = on_tag or self.on_tag
        if observer is None:
            logger.warning("Refusing to scan without a tag observer")
            return False

        self._reset()
        self.tags_emitted = 0

        length = len(text)
        for index, character in enumerate(text):
            lookahead = text[index + 1] if index + 1 < length else ""
            if not self._step(character, lookahead, observer):
                logger.debug("Tag closed with no open tag", offset=index, tags_emitted=self.tags_emitted)
                return False

        if self._markers or self._state is not ScanState.START:
            logger.debug(
                "Document ended inside a tag",
                open_tags=len(self._markers),
                state=self._state.value,
                tags_emitted=self.tags_emitted,
            )
            return False

        return True

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _step(self, character: str, lookahead: str, observer: TagObserver) -> bool:
        """Consume one character. Returns False on a fatal parse error."""
        if self._state is ScanState.START:
            if character == "<":
                self._open_tag(lookahead, allow_comment=True)
                return True
            # A ">" here has no tag to close.
            return character != ">"

        if self._escaped:
            self._escaped = False
            if self._state is not ScanState.IN_COMMENT and not self._suppressed:
                self._accumulate(character)
            return True

        if character == "\\":
            self._escaped = True
            return True

        if self._state is ScanState.IN_COMMENT:
            if character == ">":
                self._state = ScanState.START
            return True

        if self._in_quotes:
            if character == '"':
                self._in_quotes = False
            else:
                self._token.append(character)
            return True

        if character == ">":
            return self._close_tag(observer)

        if self._suppressed:
            return True

        if character == '"':
            self._in_quotes = True
            self._quoted = True
            self._awaiting_equals = False
            return True

        if character == "<":
            self._open_tag(lookahead, allow_comment=False)
            return True

        if self.keep_self_closing:
            if character == "/":
                self._finish_token()
                self._suppressed = True
                return True
        elif character == "/" or lookahead == "/":
            self._suppressed = True
            self._discard = True
            return True

        if character.isspace() or character == "=":
            self._terminate_token(character)
            return True

        self._accumulate(character)
        return True

    def _open_tag(self, lookahead: str, *, allow_comment: bool) -> None:
        if allow_comment and lookahead == "!":
            self._state = ScanState.IN_COMMENT
            return

        self._markers.append("")
        self._state = ScanState.IN_TAG_NAME
        self._token.clear()
        self._quoted = False
        self._awaiting_equals = False

        if lookahead == "/":
            self._suppressed = True
            self._discard = True

    def _close_tag(self, observer: TagObserver) -> bool:
        if not self._suppressed:
            self._finish_token(force_value=True)

        if not self._markers:
            return False

        name = self._markers.pop()
        if self._discard:
            name = ""

        if name:
            observer(name, dict(self._attributes))
            self.tags_emitted += 1

        self._state = ScanState.START
        self._token.clear()
        self._attributes = {}
        self._attribute_name = ""
        self._quoted = False
        self._awaiting_equals = False
        self._suppressed = False
        self._discard = False
        return True

    def _accumulate(self, character: str) -> None:
        if self._state is ScanState.IN_ATTRIBUTE_VALUE and self._awaiting_equals:
            # The previous attribute had no "=": it is valueless and this
            # character starts the next attribute name.
            self._store_attribute("")
            self._state = ScanState.IN_ATTRIBUTE_NAME
        self._token.append(character)

    def _terminate_token(self, character: str) -> None:
        """Handle whitespace or "=" outside a quoted value."""
        if self._state is ScanState.IN_TAG_NAME:
            if self._token:
                self._commit_tag_name()
                self._state = ScanState.IN_ATTRIBUTE_NAME
        elif self._state is ScanState.IN_ATTRIBUTE_NAME:
            if self._token:
                self._attribute_name = self._take_token()
                self._state = ScanState.IN_ATTRIBUTE_VALUE
                self._awaiting_equals = character != "="
        elif self._state is ScanState.IN_ATTRIBUTE_VALUE:
            if character == "=" and self._awaiting_equals:
                self._awaiting_equals = False
            elif self._token or self._quoted:
                self._store_attribute(self._take_token())
                self._state = ScanState.IN_ATTRIBUTE_NAME

    def _finish_token(self, force_value: bool = False) -> None:
        """Finalize a pending tag name, valueless attribute or attribute value."""
        if self._state is ScanState.IN_TAG_NAME:
            if self._token:
                self._commit_tag_name()
            self._state = ScanState.IN_ATTRIBUTE_NAME
        elif self._state is ScanState.IN_ATTRIBUTE_NAME:
            if self._token:
                self._attribute_name = self._take_token()
                self._store_attribute("")
        elif self._state is ScanState.IN_ATTRIBUTE_VALUE:
            if self._token or self._quoted or force_value:
                self._store_attribute(self._take_token())
            self._state = ScanState.IN_ATTRIBUTE_NAME

    def _commit_tag_name(self) -> None:
        name = self._take_token()
        if self._markers:
            self._markers[-1] = name

    def _store_attribute(self, value: str) -> None:
        # Duplicate attribute names overwrite; last occurrence wins.
        self._attributes[self._attribute_name] = value
        self._attribute_name = ""
        self._awaiting_equals = False

    def _take_token(self) -> str:
        token = "".join(self._token)
        self._token.clear()
        self._quoted = False
        return token
