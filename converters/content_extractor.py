"""Rendered-text extraction from candidate message nodes."""

import logging
from typing import Optional, Sequence, Tuple

from documents import DocumentNode, NodePattern

# Container the chat UI renders formatted (markdown) answers into
FORMATTED_CONTENT_PATTERNS: Tuple[NodePattern, ...] = (
    NodePattern(class_name='markdown'),
)


class ContentExtractor:
    """Extracts best-effort visible text from a message node."""

    def __init__(
        self,
        formatted_patterns: Optional[Sequence[NodePattern]] = None,
        logger: logging.Logger = None
    ):
        self.formatted_patterns = tuple(formatted_patterns or FORMATTED_CONTENT_PATTERNS)
        self.logger = logger or logging.getLogger('chat_transcript_exporter.converters.content_extractor')

    def extract(self, node: DocumentNode) -> str:
        """
        Extract the rendered text of a message node.

        Prefers the first nested formatted-content container at any depth,
        falling back to the node itself. The result is raw; callers normalize
        it and drop nodes whose text ends up empty.

        Args:
            node: Candidate message node

        Returns:
            Raw rendered text (may be empty)
        """
        target = node.find_first(self.formatted_patterns)
        if target is None:
            target = node
        else:
            self.logger.debug("Using nested formatted-content container")
        return target.rendered_text()
