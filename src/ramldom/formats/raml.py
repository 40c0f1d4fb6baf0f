"""
RAML line classifier.

Lexical rules for one line of a RAML (YAML-flavoured) document. Nothing here
looks at neighbouring lines; structure is inferred later from depth alone.
"""

from __future__ import annotations

import re

from ..config import get_config
from .base import LineClassifier, registry

_LIST_MARKER = re.compile(r'^-(\s|$)')
_KEY_SEPARATOR = re.compile(r':(\s|$)')
_TRAILING_COMMENT = re.compile(r'\s+#')
_QUOTES = "\"'"


class RamlLineClassifier(LineClassifier):
    """Indentation, comments, `- ` list markers and `key: value` pairs."""

    def __init__(self, indent_unit: int | None = None):
        """
        Args:
            indent_unit: Spaces per depth level. None defers to the
                configured [indent] unit, read at call time.
        """
        if indent_unit is not None and indent_unit < 1:
            raise ValueError(f"Indent unit must be >= 1, got {indent_unit}")
        self._indent_unit = indent_unit

    @property
    def name(self) -> str:
        return "raml"

    @property
    def indent_unit(self) -> int:
        if self._indent_unit is not None:
            return self._indent_unit
        return get_config().indent.unit

    def detect(self, content: str) -> bool:
        """RAML documents open with a `#%RAML <version>` header line."""
        return content.startswith("#%RAML")

    def depth(self, text: str) -> int:
        unit = self.indent_unit
        columns = 0
        for ch in text:
            if ch == " ":
                columns += 1
            elif ch == "\t":
                columns += unit
            else:
                break
        return columns // unit

    def is_comment_start(self, text: str) -> bool:
        return text.lstrip(" \t").startswith("#")

    def is_list_item_start(self, text: str) -> bool:
        return _LIST_MARKER.match(text.lstrip(" \t")) is not None

    def extract_key(self, text: str) -> str | None:
        if self.is_comment_start(text):
            return None
        body = self._body(text)
        match = _search_unquoted(_KEY_SEPARATOR, body)
        if match is None:
            return None
        key = body[:match.start()].strip()
        if len(key) >= 2 and key[0] == key[-1] and key[0] in _QUOTES:
            key = key[1:-1]
        return key or None

    def extract_value(self, text: str) -> str | None:
        if self.is_comment_start(text):
            return None
        body = self._body(text)
        match = _search_unquoted(_KEY_SEPARATOR, body)
        if match is not None:
            body = body[match.end():]
        return body.strip() or None

    def _body(self, text: str) -> str:
        """Line content without indentation, list marker or trailing comment."""
        content = text.lstrip(" \t")
        marker = _LIST_MARKER.match(content)
        if marker is not None:
            content = content[marker.end():].lstrip(" \t")
        if content.startswith("#"):
            return ""
        comment = _search_unquoted(_TRAILING_COMMENT, content)
        if comment is not None:
            content = content[:comment.start()]
        return content.rstrip()


def _search_unquoted(pattern: re.Pattern[str], content: str) -> re.Match[str] | None:
    """
    First match of pattern that starts outside a quoted scalar.

    A quote opens a scalar only at the start of the text or after whitespace,
    so apostrophes inside plain words stay literal. Inside single quotes a
    doubled '' is an escaped quote.
    """
    quote = None
    i = 0
    while i < len(content):
        ch = content[i]
        if quote is not None:
            if ch == quote:
                if quote == "'" and content.startswith("''", i):
                    i += 2
                    continue
                quote = None
        elif ch in _QUOTES and (i == 0 or content[i - 1].isspace()):
            quote = ch
        else:
            match = pattern.match(content, i)
            if match is not None:
                return match
        i += 1
    return None


_default = RamlLineClassifier()


def default_classifier() -> LineClassifier:
    """The shared RAML classifier, following configured indentation."""
    return _default


# Register the default classifier
registry.register(_default)
