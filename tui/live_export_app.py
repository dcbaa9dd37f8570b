"""Textual application hosting a live conversation session with an export action."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Button, Footer, Header

from config_loader import get_nested
from converters.pipeline import TranscriptPipeline
from documents import SessionDocument
from exporters import MarkdownExporter
from .export_controller import ExportController, ExportOutcome
from .transcript_preview import TranscriptPreview

EXPORT_BUTTON_ID = 'export-md-btn'
EXPORT_LABEL = 'Export .md'
EXPORTING_LABEL = 'Exporting...'

# Lets the "Exporting..." label paint before the synchronous pipeline runs
EXPORT_YIELD_SECONDS = 0.05


class LiveExportApp(App):
    """Shows the live transcript and offers it as a downloadable markdown file."""

    TITLE = "Chat Transcript Export - Live Session"

    CSS = """
    #toolbar {
        height: auto;
        padding: 0 1;
    }

    #transcript-scroll {
        height: 1fr;
        border: round $accent;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("e", "export", "Export .md", key_display="E"),
        Binding("r", "reload", "Reload Source", key_display="R"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        document: SessionDocument,
        config: Dict[str, Any],
        source_path: Optional[Path] = None,
        pipeline: Optional[TranscriptPipeline] = None,
        exporter: Optional[MarkdownExporter] = None
    ) -> None:
        """
        Initialize the live export app.

        Args:
            document: Live session document
            config: Configuration dictionary
            source_path: File feeding the session; polled for changes when given
            pipeline: Transcript pipeline (built from config if omitted)
            exporter: File writer (targets session.download_directory if omitted)
        """
        super().__init__()
        self.document = document
        self.config = config
        self.source_path = source_path
        self.logger = logging.getLogger('chat_transcript_exporter.tui.live_export_app')

        self.pipeline = pipeline or TranscriptPipeline.from_config(config)
        exporter = exporter or MarkdownExporter(
            config, output_dir=get_nested(config, 'session.download_directory', '.')
        )
        self.controller = ExportController(document, self.pipeline, exporter)

        self.poll_interval = float(get_nested(config, 'session.poll_interval', 1.0))
        self.encoding = get_nested(config, 'export.encoding', 'utf-8')
        self.exporting = False
        self.last_outcome: Optional[ExportOutcome] = None
        self._unsubscribe = None
        self._source_mtime: Optional[float] = None

    def compose(self) -> ComposeResult:
        """Compose the UI layout."""
        yield Header()
        yield Horizontal(id="toolbar")
        yield VerticalScroll(TranscriptPreview(id="transcript-preview"), id="transcript-scroll")
        yield Footer()

    def on_mount(self) -> None:
        """Subscribe to document mutations and install the export trigger."""
        self._unsubscribe = self.document.observe(self._on_document_mutated)
        self.install_export_button()
        self.refresh_preview()

        if self.source_path is not None:
            self._source_mtime = self._read_source_mtime()
            self.set_interval(self.poll_interval, self.poll_source)

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def install_export_button(self) -> bool:
        """
        Mount the export button unless it is already present.

        Safe to call on every re-render notification.

        Returns:
            True if a button was mounted, False if one already existed
        """
        if self._export_button() is not None:
            return False

        self.query_one("#toolbar", Horizontal).mount(Button(EXPORT_LABEL, id=EXPORT_BUTTON_ID))
        self.logger.debug("Export button installed")
        return True

    def refresh_preview(self) -> None:
        """Re-render the transcript preview from the current document state."""
        preview = self.query_one(TranscriptPreview)
        try:
            result = self.pipeline.run(self.document)
        except Exception as e:
            self.logger.error(f"Preview rendering failed: {e}", exc_info=True)
            preview.show_error(str(e))
            return
        preview.preview_content = result.markdown
        self.sub_title = result.conversation.title

    def poll_source(self) -> None:
        """Reload the session when its source file has changed on disk."""
        mtime = self._read_source_mtime()
        if mtime is None or mtime == self._source_mtime:
            return
        self._source_mtime = mtime
        self.reload_source()

    def reload_source(self) -> None:
        """Re-read the source file into the live document."""
        if self.source_path is None:
            self.notify("This session has no source file to reload", severity="warning")
            return
        try:
            html = self.source_path.read_text(encoding=self.encoding, errors='replace')
        except OSError as e:
            self.logger.warning(f"Failed to read session source {self.source_path}: {e}")
            self.notify(f"Could not read {self.source_path.name}", severity="warning")
            return
        self.document.load_html(html)

    def action_reload(self) -> None:
        self.reload_source()

    async def action_export(self) -> None:
        """Export the live document; failures become a notice and the trigger stays usable."""
        if self.exporting:
            self.notify("An export is already in progress", severity="warning")
            return

        self.exporting = True
        button = self._export_button()
        if button is not None:
            button.disabled = True
            button.label = EXPORTING_LABEL

        try:
            await asyncio.sleep(EXPORT_YIELD_SECONDS)
            outcome = self.controller.export()
        finally:
            self.exporting = False
            # The button may have been replaced by a re-install during the export
            button = self._export_button()
            if button is not None:
                button.disabled = False
                button.label = EXPORT_LABEL

        self.last_outcome = outcome
        if outcome.success:
            self.notify(outcome.message, severity="information")
        else:
            self.notify(outcome.message, severity="error", timeout=10)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == EXPORT_BUTTON_ID:
            await self.action_export()

    def _on_document_mutated(self, document: SessionDocument) -> None:
        self.install_export_button()
        self.refresh_preview()

    def _export_button(self) -> Optional[Button]:
        try:
            return self.query_one(f"#{EXPORT_BUTTON_ID}", Button)
        except NoMatches:
            return None

    def _read_source_mtime(self) -> Optional[float]:
        try:
            return self.source_path.stat().st_mtime
        except OSError:
            return None
