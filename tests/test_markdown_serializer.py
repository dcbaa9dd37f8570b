"""Tests for transcript Markdown serialization."""

import unittest
from datetime import datetime

from converters.markdown_serializer import MarkdownSerializer
from models import Conversation, Message, Role

EXPORTED_AT = datetime(2024, 3, 9, 14, 5)


class TestMarkdownSerializer(unittest.TestCase):
    def setUp(self):
        self.serializer = MarkdownSerializer()

    def test_full_template(self):
        conversation = Conversation(
            title="My Chat",
            source_identifier="https://chat.example.com/c/123",
            exported_at=EXPORTED_AT,
            messages=(
                Message(Role.USER, "Hi"),
                Message(Role.ASSISTANT, "Hello!\n\nHow can I help?"),
            ),
        )
        expected = (
            "# My Chat\n"
            "\n"
            "- **Source**: https://chat.example.com/c/123\n"
            "- **Exported at**: 2024-03-09 14:05\n"
            "\n"
            "---\n"
            "\n"
            "## User\n"
            "\n"
            "Hi\n"
            "\n"
            "---\n"
            "\n"
            "## Assistant\n"
            "\n"
            "Hello!\n"
            "\n"
            "How can I help?\n"
            "\n"
            "---\n"
        )
        self.assertEqual(self.serializer.serialize(conversation), expected)

    def test_zero_messages_header_only(self):
        conversation = Conversation("<Conversation>", "chat.html", EXPORTED_AT, ())
        expected = (
            "# <Conversation>\n"
            "\n"
            "- **Source**: chat.html\n"
            "- **Exported at**: 2024-03-09 14:05\n"
            "\n"
            "---\n"
        )
        self.assertEqual(self.serializer.serialize(conversation), expected)

    def test_system_heading(self):
        conversation = Conversation("t", "s", EXPORTED_AT, (Message(Role.SYSTEM, "Be brief."),))
        self.assertIn("\n## System\n\nBe brief.\n\n---\n", self.serializer.serialize(conversation))

    def test_message_order_preserved(self):
        contents = [f"message {i}" for i in range(10)]
        conversation = Conversation(
            "t", "s", EXPORTED_AT,
            tuple(Message(Role.USER if i % 2 == 0 else Role.ASSISTANT, c) for i, c in enumerate(contents))
        )
        markdown = self.serializer.serialize(conversation)
        positions = [markdown.index(c + "\n") for c in contents]
        self.assertEqual(positions, sorted(positions))

    def test_no_crlf_and_single_trailing_newline(self):
        conversation = Conversation("t", "s", EXPORTED_AT, (Message(Role.USER, "x"),))
        markdown = self.serializer.serialize(conversation)
        self.assertNotIn("\r", markdown)
        self.assertTrue(markdown.endswith("---\n"))
        self.assertFalse(markdown.endswith("\n\n"))


if __name__ == '__main__':
    unittest.main()
