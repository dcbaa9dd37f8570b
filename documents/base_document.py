"""Abstract document-tree interface shared by the snapshot and live-session providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Union


@dataclass(frozen=True)
class NodePattern:
    """
    Structural pattern describing which element nodes qualify for a query.

    Every field that is set must match. ``value`` is only meaningful together
    with ``attribute``; without it the attribute merely has to be present.
    """

    tag: Optional[str] = None
    attribute: Optional[str] = None
    value: Optional[str] = None
    class_name: Optional[str] = None

    @property
    def css(self) -> str:
        """Render the pattern as a CSS selector (used with BeautifulSoup ``select``)."""
        selector = self.tag or ''
        if self.class_name:
            selector += f'.{self.class_name}'
        if self.attribute:
            if self.value is None:
                selector += f'[{self.attribute}]'
            else:
                escaped = self.value.replace('"', '\\"')
                selector += f'[{self.attribute}="{escaped}"]'
        return selector or '*'

    def matches(self, node: 'DocumentNode') -> bool:
        """Check whether an element node satisfies this pattern."""
        if self.tag and node.tag_name != self.tag.lower():
            return False
        if self.class_name and self.class_name not in node.classes():
            return False
        if self.attribute:
            actual = node.get_attribute(self.attribute)
            if actual is None:
                return False
            if self.value is not None and actual != self.value:
                return False
        return True


class DocumentNode(ABC):
    """
    Minimal capability interface over an element node.

    Concrete providers supply tag name, attribute lookup and child iteration;
    pattern search and text extraction are built on top of those three.
    """

    @property
    @abstractmethod
    def tag_name(self) -> str:
        """Lower-case element name."""
        pass

    @abstractmethod
    def get_attribute(self, name: str) -> Optional[str]:
        """
        Look up an attribute value.

        Args:
            name: Attribute name

        Returns:
            Attribute value as a string, or None when absent
        """
        pass

    @abstractmethod
    def iter_children(self) -> Iterator[Union['DocumentNode', str]]:
        """Yield child element nodes and text strings in document order."""
        pass

    def classes(self) -> List[str]:
        """Return the class tokens of this node."""
        return (self.get_attribute('class') or '').split()

    def iter_descendants(self) -> Iterator['DocumentNode']:
        """Yield descendant element nodes in document order, excluding self."""
        for child in self.iter_children():
            if isinstance(child, DocumentNode):
                yield child
                yield from child.iter_descendants()

    def find_all(self, patterns: Sequence[NodePattern]) -> List['DocumentNode']:
        """Return descendants matching any of the patterns, in document order."""
        return [
            node for node in self.iter_descendants()
            if any(pattern.matches(node) for pattern in patterns)
        ]

    def find_first(self, patterns: Sequence[NodePattern]) -> Optional['DocumentNode']:
        """Return the first descendant matching any of the patterns, or None."""
        for node in self.iter_descendants():
            if any(pattern.matches(node) for pattern in patterns):
                return node
        return None

    def text_content(self) -> str:
        """Concatenate every descendant text string, hidden content included."""
        parts = []
        for child in self.iter_children():
            if isinstance(child, DocumentNode):
                parts.append(child.text_content())
            else:
                parts.append(child)
        return ''.join(parts)

    def rendered_text(self) -> str:
        """Return the human-visible text approximation of this subtree."""
        from .rendered_text import render_text
        return render_text(self)


class ChatDocument(ABC):
    """A captured chat-session document: a node tree plus its provenance."""

    @property
    @abstractmethod
    def root(self) -> DocumentNode:
        """Root node of the document tree."""
        pass

    @property
    @abstractmethod
    def source_identifier(self) -> str:
        """Identifier written to the transcript header (file name or URL)."""
        pass

    def lookup_title(self) -> str:
        """Best available human-readable title, possibly empty."""
        from .title_lookup import find_title
        return find_title(self.root)
