"""End-to-end transcript pipeline shared by the CLI and the live session app."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from documents import ChatDocument
from models import Conversation, ExportError

from .conversation_assembler import ConversationAssembler
from .filename_sanitizer import sanitize_filename
from .markdown_serializer import MarkdownSerializer
from .node_selector import NodeSelector

MARKDOWN_EXTENSION = '.md'


@dataclass(frozen=True)
class ExportResult:
    """Output of one pipeline run."""

    conversation: Conversation
    markdown: str

    @property
    def filename(self) -> str:
        """Suggested file name: sanitized title plus ``.md``."""
        return sanitize_filename(self.conversation.title) + MARKDOWN_EXTENSION


class TranscriptPipeline:
    """
    Runs NodeSelector -> ConversationAssembler -> MarkdownSerializer.

    The pipeline is synchronous and holds no state between runs, so running
    it twice on an unchanged document with the same clock reading produces
    identical text.
    """

    def __init__(
        self,
        selector: Optional[NodeSelector] = None,
        assembler: Optional[ConversationAssembler] = None,
        serializer: Optional[MarkdownSerializer] = None,
        logger: logging.Logger = None
    ):
        self.logger = logger or logging.getLogger('chat_transcript_exporter.converters.pipeline')
        self.selector = selector or NodeSelector(logger=self.logger)
        self.assembler = assembler or ConversationAssembler(logger=self.logger)
        self.serializer = serializer or MarkdownSerializer(logger=self.logger)

    @classmethod
    def from_config(
        cls,
        config: Optional[Dict[str, Any]] = None,
        clock: Callable[[], datetime] = datetime.now,
        logger: logging.Logger = None
    ) -> 'TranscriptPipeline':
        """Build a pipeline from configuration."""
        return cls(
            assembler=ConversationAssembler.from_config(config, clock=clock, logger=logger),
            logger=logger
        )

    def build_conversation(self, document: ChatDocument) -> Conversation:
        """Select, classify and extract the messages of a document."""
        nodes = self.selector.select(document.root)
        return self.assembler.assemble(
            document.lookup_title(),
            document.source_identifier,
            nodes
        )

    def run(self, document: ChatDocument) -> ExportResult:
        """
        Convert a document into transcript text.

        Args:
            document: Snapshot or live session document

        Returns:
            ExportResult with the conversation and its Markdown rendering

        Raises:
            ExportError: If any stage fails on this document
        """
        try:
            conversation = self.build_conversation(document)
            markdown = self.serializer.serialize(conversation)
        except ExportError:
            raise
        except Exception as e:
            source = document.source_identifier or 'document'
            raise ExportError(f"Failed to convert {source}: {e}") from e
        return ExportResult(conversation=conversation, markdown=markdown)
