"""Tests for the live-session export action."""

import logging
from datetime import datetime

import pytest

from converters import TranscriptPipeline
from documents import NodePattern, SessionDocument, SessionNode
from exporters import MarkdownExporter
from tui.export_controller import ExportController

FIXED_NOW = datetime(2024, 3, 9, 14, 5)


class FailingExporter:
    def write(self, result, output_path=None):
        raise OSError("disk full")


@pytest.fixture
def document():
    return SessionDocument.from_html(
        '<main><div data-message-author-role="user">Live question</div></main>',
        url='https://chat.example.com/c/42',
        title='Live chat - ChatGPT'
    )


@pytest.fixture
def pipeline():
    return TranscriptPipeline.from_config(clock=lambda: FIXED_NOW)


class TestExportController:
    """Test export outcomes."""

    def test_successful_export(self, document, pipeline, tmp_path):
        controller = ExportController(document, pipeline, MarkdownExporter({}, output_dir=str(tmp_path)))
        outcome = controller.export()
        assert outcome.success
        assert outcome.path == tmp_path / "Live chat.md"
        text = outcome.path.read_text(encoding='utf-8')
        assert "- **Source**: https://chat.example.com/c/42\n" in text
        assert "Live question" in text

    def test_export_sees_latest_mutations(self, document, pipeline, tmp_path):
        controller = ExportController(document, pipeline, MarkdownExporter({}, output_dir=str(tmp_path)))
        [main] = document.root.find_all((NodePattern(tag='main'),))
        main.append_child(SessionNode('div', {'data-message-author-role': 'assistant'}, ['Live answer']))
        outcome = controller.export()
        assert "## Assistant\n\nLive answer\n" in outcome.path.read_text(encoding='utf-8')

    def test_failure_is_contained(self, document, pipeline, caplog):
        controller = ExportController(document, pipeline, FailingExporter())
        with caplog.at_level(logging.ERROR, logger='chat_transcript_exporter'):
            outcome = controller.export()
        assert not outcome.success
        assert outcome.path is None
        assert "disk full" in caplog.text

    def test_retry_after_failure(self, document, pipeline, tmp_path):
        controller = ExportController(document, pipeline, FailingExporter())
        assert not controller.export().success
        controller.exporter = MarkdownExporter({}, output_dir=str(tmp_path))
        assert controller.export().success
