"""Static document snapshots parsed from saved HTML files with BeautifulSoup."""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag
from bs4.element import CData, Declaration, ProcessingInstruction

from .base_document import ChatDocument, DocumentNode, NodePattern

logger = logging.getLogger('chat_transcript_exporter.documents.snapshot')

# NavigableString subclasses that are markup artefacts rather than text
NON_TEXT_STRINGS = (Comment, Doctype, CData, Declaration, ProcessingInstruction)


class SoupNode(DocumentNode):
    """DocumentNode backed by a BeautifulSoup ``Tag``."""

    def __init__(self, tag: Tag) -> None:
        self.tag = tag

    @property
    def tag_name(self) -> str:
        return (self.tag.name or '').lower()

    def get_attribute(self, name: str) -> Optional[str]:
        value = self.tag.get(name)
        if value is None:
            return None
        # Multi-valued attributes (class, rel, ...) come back as lists
        if isinstance(value, list):
            return ' '.join(value)
        return str(value)

    def iter_children(self) -> Iterator[Union[DocumentNode, str]]:
        for child in self.tag.children:
            if isinstance(child, Tag):
                yield SoupNode(child)
            elif isinstance(child, NavigableString) and not isinstance(child, NON_TEXT_STRINGS):
                yield str(child)

    def find_all(self, patterns: Sequence[NodePattern]) -> List[DocumentNode]:
        """Match patterns through soupsieve; a selector list keeps document order."""
        if not patterns:
            return []
        selector = ', '.join(pattern.css for pattern in patterns)
        return [SoupNode(tag) for tag in self.tag.select(selector)]

    def find_first(self, patterns: Sequence[NodePattern]) -> Optional[DocumentNode]:
        if not patterns:
            return None
        selector = ', '.join(pattern.css for pattern in patterns)
        tag = self.tag.select_one(selector)
        return SoupNode(tag) if tag is not None else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SoupNode):
            return False
        return self.tag is other.tag

    def __hash__(self) -> int:
        return id(self.tag)

    def __repr__(self) -> str:
        return f"SoupNode(<{self.tag_name}>)"


class SnapshotDocument(ChatDocument):
    """A conversation page captured to storage and parsed once."""

    def __init__(self, soup: BeautifulSoup, source_path: Optional[str] = None) -> None:
        """
        Initialize snapshot document.

        Args:
            soup: Parsed document
            source_path: Path the document was read from (optional)
        """
        self.soup = soup
        self.source_path = source_path
        self._root = SoupNode(soup)

    @classmethod
    def from_html(cls, html: str, source_path: Optional[str] = None) -> 'SnapshotDocument':
        """Parse HTML markup into a snapshot document."""
        return cls(BeautifulSoup(html, 'lxml'), source_path=source_path)

    @classmethod
    def from_path(cls, path: Union[str, Path], encoding: str = 'utf-8') -> 'SnapshotDocument':
        """
        Read and parse a saved conversation page.

        Args:
            path: Path to the HTML file
            encoding: Text encoding of the file

        Returns:
            Parsed SnapshotDocument

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")

        # utf-8-sig swallows a BOM left behind by "Save page as"
        if encoding.lower().replace('_', '-') == 'utf-8':
            encoding = 'utf-8-sig'

        with open(path, 'r', encoding=encoding, errors='replace') as f:
            html = f.read()

        logger.debug(f"Read {len(html)} characters from {path}")
        return cls.from_html(html, source_path=str(path))

    @property
    def root(self) -> DocumentNode:
        return self._root

    @property
    def source_identifier(self) -> str:
        """Base name of the source file."""
        if not self.source_path:
            return ''
        return os.path.basename(self.source_path)
