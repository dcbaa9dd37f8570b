"""Document-tree providers: static HTML snapshots and live in-memory sessions."""

from .base_document import ChatDocument, DocumentNode, NodePattern
from .rendered_text import render_text
from .session_document import SessionDocument, SessionNode, build_session_tree
from .snapshot_document import SnapshotDocument, SoupNode
from .title_lookup import find_title

__all__ = [
    'ChatDocument',
    'DocumentNode',
    'NodePattern',
    'SessionDocument',
    'SessionNode',
    'SnapshotDocument',
    'SoupNode',
    'build_session_tree',
    'find_title',
    'render_text'
]
