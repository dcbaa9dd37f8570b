"""Live, mutable in-memory conversation tree with mutation notifications."""

import logging
from typing import Callable, Dict, Iterator, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from .base_document import ChatDocument, DocumentNode
from .snapshot_document import NON_TEXT_STRINGS
from .title_lookup import find_title

logger = logging.getLogger('chat_transcript_exporter.documents.session')

MutationCallback = Callable[['SessionDocument'], None]


class SessionNode(DocumentNode):
    """Mutable element node of a live session tree."""

    def __init__(
        self,
        tag: str,
        attributes: Optional[Dict[str, str]] = None,
        children: Optional[List[Union['SessionNode', str]]] = None
    ) -> None:
        """
        Initialize session node.

        Args:
            tag: Element name
            attributes: Attribute mapping (class tokens space-separated)
            children: Initial child nodes and text strings
        """
        self._tag = tag.lower()
        self.attributes: Dict[str, str] = dict(attributes or {})
        self.children: List[Union['SessionNode', str]] = []
        self.parent: Optional['SessionNode'] = None
        self.document: Optional['SessionDocument'] = None
        for child in children or []:
            self._adopt(child)
            self.children.append(child)

    @property
    def tag_name(self) -> str:
        return self._tag

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def iter_children(self) -> Iterator[Union[DocumentNode, str]]:
        return iter(list(self.children))

    def append_child(self, child: Union['SessionNode', str]) -> Union['SessionNode', str]:
        """Append a child node or text string and notify observers."""
        self._adopt(child)
        self.children.append(child)
        self._notify()
        return child

    def remove_child(self, child: Union['SessionNode', str]) -> None:
        """Remove a child and notify observers."""
        self.children.remove(child)
        if isinstance(child, SessionNode):
            child.parent = None
            child._attach(None)
        self._notify()

    def set_attribute(self, name: str, value: Optional[str]) -> None:
        """Set or (with None) remove an attribute and notify observers."""
        if value is None:
            self.attributes.pop(name, None)
        else:
            self.attributes[name] = value
        self._notify()

    def set_text(self, text: str) -> None:
        """Replace all children with a single text string and notify observers."""
        for child in self.children:
            if isinstance(child, SessionNode):
                child.parent = None
                child._attach(None)
        self.children = [text] if text else []
        self._notify()

    def _adopt(self, child: Union['SessionNode', str]) -> None:
        if isinstance(child, SessionNode):
            if child.parent is not None:
                child.parent.remove_child(child)
            child.parent = self
            child._attach(self.document)

    def _attach(self, document: Optional['SessionDocument']) -> None:
        self.document = document
        for child in self.children:
            if isinstance(child, SessionNode):
                child._attach(document)

    def _notify(self) -> None:
        if self.document is not None:
            self.document.notify_mutation()

    def __repr__(self) -> str:
        return f"SessionNode(<{self._tag}>, {len(self.children)} children)"


class SessionDocument(ChatDocument):
    """
    A conversation tree that keeps changing while a session is open.

    Observers registered with ``observe`` are called after every mutation,
    mirroring the re-render notifications a live page would emit.
    """

    def __init__(self, root: Optional[SessionNode] = None, url: str = '', title: str = '') -> None:
        self.url = url
        self.title = title
        self._observers: List[MutationCallback] = []
        self._root = root or SessionNode('html')
        self._root._attach(self)

    @classmethod
    def from_html(cls, html: str, url: str = '', title: str = '') -> 'SessionDocument':
        """Build a session document from markup."""
        document = cls(url=url, title=title)
        document.replace_root(build_session_tree(html))
        return document

    @property
    def root(self) -> DocumentNode:
        return self._root

    @property
    def source_identifier(self) -> str:
        """URL of the live session."""
        return self.url

    def lookup_title(self) -> str:
        """Visible heading first, then the session-level title."""
        return find_title(self._root, fallback=self.title)

    def observe(self, callback: MutationCallback) -> Callable[[], None]:
        """
        Register a mutation observer.

        Args:
            callback: Called with this document after each mutation

        Returns:
            Callable that unregisters the observer
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def replace_root(self, root: SessionNode) -> None:
        """Swap in a new tree and notify observers once."""
        self._root._attach(None)
        self._root = root
        self._root._attach(self)
        self.notify_mutation()

    def load_html(self, html: str) -> None:
        """Replace the tree with freshly parsed markup."""
        self.replace_root(build_session_tree(html))

    def notify_mutation(self) -> None:
        for callback in list(self._observers):
            callback(self)


def build_session_tree(html: str) -> SessionNode:
    """
    Convert HTML markup into a detached SessionNode tree.

    Args:
        html: Markup to parse

    Returns:
        Root SessionNode (the ``html`` element, or a synthetic one for fragments)
    """
    soup = BeautifulSoup(html, 'lxml')
    top = soup.find('html')
    if isinstance(top, Tag):
        return _convert_tag(top)
    root = SessionNode('html')
    for child in soup.children:
        converted = _convert_child(child)
        if converted is not None:
            root.children.append(converted)
            if isinstance(converted, SessionNode):
                converted.parent = root
    return root


def _convert_tag(tag: Tag) -> SessionNode:
    attributes = {
        name: ' '.join(value) if isinstance(value, list) else str(value)
        for name, value in tag.attrs.items()
    }
    children = []
    for child in tag.children:
        converted = _convert_child(child)
        if converted is not None:
            children.append(converted)
    return SessionNode(tag.name, attributes, children)


def _convert_child(child) -> Optional[Union[SessionNode, str]]:
    if isinstance(child, Tag):
        return _convert_tag(child)
    if isinstance(child, NON_TEXT_STRINGS):
        return None
    return str(child)
