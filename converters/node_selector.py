"""Candidate message node selection with ordered fallback patterns."""

import logging
from typing import List, Optional, Sequence, Tuple

from documents import DocumentNode, NodePattern

# Turns explicitly tagged with an author-role marker
PRIMARY_PATTERNS: Tuple[NodePattern, ...] = (
    NodePattern(tag='div', attribute='data-message-author-role'),
)

# Tried in order when the primary pattern finds nothing
FALLBACK_PATTERNS: Tuple[Tuple[NodePattern, ...], ...] = (
    (NodePattern(attribute='data-testid', value='conversation-turn'),),
    (NodePattern(tag='article'), NodePattern(tag='section')),
)


class NodeSelector:
    """Locates candidate message nodes inside an unpredictable tree shape."""

    def __init__(
        self,
        tiers: Optional[Sequence[Sequence[NodePattern]]] = None,
        logger: logging.Logger = None
    ):
        """
        Initialize node selector.

        Args:
            tiers: Pattern tiers in priority order (defaults to primary then fallbacks)
            logger: Optional logger instance
        """
        self.tiers = [tuple(tier) for tier in (tiers or (PRIMARY_PATTERNS,) + FALLBACK_PATTERNS)]
        self.logger = logger or logging.getLogger('chat_transcript_exporter.converters.node_selector')

    def select(self, root: DocumentNode) -> List[DocumentNode]:
        """
        Return the candidate message nodes of a document in document order.

        The first tier yielding at least one node wins; later tiers are not
        consulted. An empty list means no tier matched, which is a valid
        (empty) conversation rather than an error.

        Args:
            root: Document root node

        Returns:
            Ordered list of candidate nodes
        """
        for index, patterns in enumerate(self.tiers):
            nodes = root.find_all(patterns)
            if nodes:
                selector = ', '.join(pattern.css for pattern in patterns)
                self.logger.debug(f"Pattern tier {index} ({selector}) matched {len(nodes)} nodes")
                return nodes

        self.logger.info("No candidate message nodes found by any pattern")
        return []
