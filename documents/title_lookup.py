"""Title lookup for captured conversation documents."""

from typing import Optional

from .base_document import DocumentNode, NodePattern

# Tried in priority order, not document order: a visible heading beats <title>
TITLE_PATTERNS = (
    NodePattern(tag='h1'),
    NodePattern(attribute='data-testid', value='conversation-title'),
    NodePattern(tag='title'),
)


def find_title(root: DocumentNode, fallback: Optional[str] = None) -> str:
    """
    Find the best available human-readable title in a document tree.

    Args:
        root: Document root node
        fallback: Value returned when no candidate carries text

    Returns:
        Whitespace-collapsed title text, or the fallback (empty string by default)
    """
    for pattern in TITLE_PATTERNS:
        node = root.find_first((pattern,))
        if node is None:
            continue
        text = ' '.join(node.text_content().split())
        if text:
            return text
    return fallback or ''
