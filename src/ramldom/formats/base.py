"""
Line classifier interface and registry.

A classifier turns one raw line into the facts navigation needs: its depth,
whether it is a comment, whether it opens a list element, and its key/value
text. Each document convention implements this interface; the registry
handles selection by name or content sniffing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class LineClassifier(ABC):
    """Base class for per-line lexical classification.

    Every method must be total: any text, however malformed, has some depth
    and some comment/list-marker status.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable convention name."""
        ...

    def detect(self, content: str) -> bool:
        """
        Magic detection: returns True if content looks like this convention.
        Default implementation returns False.
        """
        return False

    @abstractmethod
    def depth(self, text: str) -> int:
        """Indentation level of the line, including whitespace-only text."""
        ...

    @abstractmethod
    def is_comment_start(self, text: str) -> bool:
        ...

    @abstractmethod
    def is_list_item_start(self, text: str) -> bool:
        """True iff the line's content opens a list element."""
        ...

    @abstractmethod
    def extract_key(self, text: str) -> str | None:
        ...

    @abstractmethod
    def extract_value(self, text: str) -> str | None:
        ...


class ClassifierRegistry:
    """Classifiers by name, for --type overrides and header sniffing."""

    def __init__(self):
        self._by_name: dict[str, LineClassifier] = {}

    def register(self, classifier: LineClassifier) -> None:
        self._by_name[classifier.name] = classifier

    def get_by_name(self, name: str) -> LineClassifier | None:
        return self._by_name.get(name)

    def detect(self, content: str) -> LineClassifier | None:
        """First registered classifier whose detect() accepts content."""
        for classifier in self._by_name.values():
            if classifier.detect(content):
                return classifier
        return None


# Global registry instance
registry = ClassifierRegistry()
