"""Export action bound to a live session document."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from converters.pipeline import TranscriptPipeline
from documents import ChatDocument
from exporters import MarkdownExporter


@dataclass(frozen=True)
class ExportOutcome:
    """What the user is told after an export attempt."""

    success: bool
    message: str
    path: Optional[Path] = None


class ExportController:
    """
    Runs the pipeline against the current state of a document and saves the result.

    Failures are contained here: they are logged with a traceback and turned
    into an unsuccessful outcome so the trigger stays usable for a retry.
    """

    def __init__(
        self,
        document: ChatDocument,
        pipeline: TranscriptPipeline,
        exporter: MarkdownExporter,
        logger: Optional[logging.Logger] = None
    ) -> None:
        self.document = document
        self.pipeline = pipeline
        self.exporter = exporter
        self.logger = logger or logging.getLogger('chat_transcript_exporter.tui.export_controller')

    def export(self) -> ExportOutcome:
        """
        Export the document once.

        Returns:
            ExportOutcome describing the written file or the failure
        """
        try:
            result = self.pipeline.run(self.document)
            path = self.exporter.write(result)
            count = result.conversation.message_count
            return ExportOutcome(True, f"Exported {count} messages to {path}", path)
        except Exception as e:
            self.logger.error(f"Markdown export failed: {e}", exc_info=True)
            return ExportOutcome(False, "Markdown export failed. See the log for details.")
