"""Preview widget showing the transcript the live document would export to."""

from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static


class TranscriptPreview(Static):
    """Read-only transcript preview."""

    preview_content: reactive[str] = reactive("")

    def render(self) -> Text:
        """Render the transcript verbatim; message text must not be read as markup."""
        if self.preview_content:
            return Text(self.preview_content)

        return Text("No conversation captured yet", style="dim")

    def show_error(self, message: str) -> None:
        self.preview_content = f"Preview unavailable: {message}"
