"""Assembly of classified, normalized nodes into a Conversation."""

import logging
import re
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from config_loader import get_nested
from documents import DocumentNode
from models import Conversation, Message

from .content_extractor import ContentExtractor
from .role_classifier import RoleClassifier
from .text_normalizer import normalize_text

TITLE_PLACEHOLDER = '<Conversation>'
DEFAULT_PRODUCT_NAMES = ('ChatGPT',)


def build_suffix_pattern(product_names: Sequence[str]) -> Optional[re.Pattern]:
    """Compile the trailing " - <ProductName>..." pattern for the given products."""
    names = [re.escape(name) for name in product_names if name]
    if not names:
        return None
    return re.compile(r' - (?:' + '|'.join(names) + r').*$', re.IGNORECASE | re.DOTALL)


class ConversationAssembler:
    """Builds a Conversation from candidate nodes in document order."""

    def __init__(
        self,
        classifier: Optional[RoleClassifier] = None,
        extractor: Optional[ContentExtractor] = None,
        product_names: Sequence[str] = DEFAULT_PRODUCT_NAMES,
        clock: Callable[[], datetime] = datetime.now,
        logger: logging.Logger = None
    ):
        """
        Initialize conversation assembler.

        Args:
            classifier: Role classifier (default rule chain if omitted)
            extractor: Content extractor
            product_names: Hosting products whose title suffix is stripped
            clock: Returns the local export time
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger('chat_transcript_exporter.converters.conversation_assembler')
        self.classifier = classifier or RoleClassifier(logger=self.logger)
        self.extractor = extractor or ContentExtractor(logger=self.logger)
        self.suffix_pattern = build_suffix_pattern(product_names)
        self.clock = clock

    @classmethod
    def from_config(
        cls,
        config: Optional[Dict[str, Any]] = None,
        clock: Callable[[], datetime] = datetime.now,
        logger: logging.Logger = None
    ) -> 'ConversationAssembler':
        """Build an assembler from ``title`` and ``roles`` configuration."""
        config = config or {}
        product_names = get_nested(config, 'title.product_names', list(DEFAULT_PRODUCT_NAMES))
        return cls(
            classifier=RoleClassifier.from_config(config, logger=logger),
            product_names=product_names,
            clock=clock,
            logger=logger
        )

    def resolve_title(self, raw_title: Optional[str]) -> str:
        """
        Clean a looked-up title.

        Strips a trailing hosting-product suffix, trims whitespace and falls
        back to a fixed placeholder when nothing is left.
        """
        title = (raw_title or '').strip()
        if self.suffix_pattern is not None:
            title = self.suffix_pattern.sub('', title).strip()
        return title or TITLE_PLACEHOLDER

    def build_messages(self, nodes: Iterable[DocumentNode]) -> List[Message]:
        """Classify and extract each node, skipping those with empty content."""
        messages = []
        skipped = 0
        for node in nodes:
            content = normalize_text(self.extractor.extract(node))
            if not content:
                skipped += 1
                continue
            messages.append(Message(role=self.classifier.classify(node), content=content))

        if skipped:
            self.logger.debug(f"Skipped {skipped} candidate nodes with empty content")
        return messages

    def assemble(
        self,
        title: Optional[str],
        source_identifier: str,
        nodes: Iterable[DocumentNode]
    ) -> Conversation:
        """
        Assemble a Conversation.

        Args:
            title: Raw title from the title lookup (may be empty)
            source_identifier: File name or URL of the source document
            nodes: Candidate message nodes in document order

        Returns:
            Immutable Conversation; zero messages is a valid result
        """
        messages = self.build_messages(nodes)
        exported_at = self.clock().replace(second=0, microsecond=0)
        conversation = Conversation(
            title=self.resolve_title(title),
            source_identifier=source_identifier or '',
            exported_at=exported_at,
            messages=tuple(messages)
        )
        self.logger.info(
            f"Assembled conversation '{conversation.title}' with {conversation.message_count} messages"
        )
        return conversation
