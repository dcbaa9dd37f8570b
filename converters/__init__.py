"""Converters package for turning captured chat documents into Markdown transcripts."""

import logging

from .content_extractor import ContentExtractor
from .conversation_assembler import ConversationAssembler
from .filename_sanitizer import sanitize_filename
from .markdown_serializer import MarkdownSerializer
from .node_selector import NodeSelector
from .pipeline import ExportResult, TranscriptPipeline
from .role_classifier import RoleClassifier, RoleRule
from .text_normalizer import normalize_text

logger = logging.getLogger('chat_transcript_exporter.converters')


def convert_document(document, config=None, logger=None):
    """
    Convenience function to convert a ChatDocument into a Markdown transcript.

    This orchestrates the full conversion pipeline:
    1. Candidate node selection (primary pattern, then fallbacks)
    2. Role classification and rendered-text extraction per node
    3. Text normalization and empty-turn dropping
    4. Conversation assembly (title cleanup, export timestamp)
    5. Markdown serialization

    Args:
        document: SnapshotDocument or SessionDocument
        config: Optional configuration dictionary
        logger: Optional logger instance (uses module logger if not provided)

    Returns:
        ExportResult with the conversation and its Markdown text

    Example:
        >>> from converters import convert_document
        >>> from documents import SnapshotDocument
        >>> result = convert_document(SnapshotDocument.from_path('chat.html'))
        >>> print(result.markdown)
    """
    if logger is None:
        logger = logging.getLogger('chat_transcript_exporter.converters')

    pipeline = TranscriptPipeline.from_config(config, logger=logger)
    return pipeline.run(document)


__all__ = [
    'convert_document',
    'ContentExtractor',
    'ConversationAssembler',
    'ExportResult',
    'MarkdownSerializer',
    'NodeSelector',
    'RoleClassifier',
    'RoleRule',
    'TranscriptPipeline',
    'normalize_text',
    'sanitize_filename'
]
