"""Fixed-template Markdown rendering of a Conversation."""

import logging
from typing import List

from models import Conversation

SECTION_SEPARATOR = '---'


class MarkdownSerializer:
    """Renders conversations into the transcript format."""

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger('chat_transcript_exporter.converters.markdown_serializer')

    def serialize(self, conversation: Conversation) -> str:
        """
        Render a conversation as Markdown.

        Layout: a title heading, a bullet header with source and export time,
        a separator, then one ``## <Role>`` section per message, each closed by
        its own separator. Lines are joined with LF and the text ends with
        ``---`` followed by a single newline.

        Args:
            conversation: Assembled conversation

        Returns:
            Transcript text
        """
        lines: List[str] = [
            f"# {conversation.title}",
            '',
            f"- **Source**: {conversation.source_identifier}",
            f"- **Exported at**: {conversation.exported_at_text}",
            '',
            SECTION_SEPARATOR,
            '',
        ]

        for message in conversation.messages:
            lines.extend([
                f"## {message.role.value}",
                '',
                message.content,
                '',
                SECTION_SEPARATOR,
                '',
            ])

        self.logger.debug(f"Serialized {conversation.message_count} messages")
        return '\n'.join(lines)
