"""Writes rendered transcripts to local markdown files."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from converters.pipeline import ExportResult


class MarkdownExporter:
    """
    Saves ExportResults to the filesystem.

    The exporter:
    1. Resolves the target path (explicit path, or output directory plus the
       sanitized conversation title)
    2. Creates missing parent directories
    3. Writes UTF-8 text with LF line endings on every platform
    """

    def __init__(self, config: Dict[str, Any], logger: Optional[logging.Logger] = None, output_dir: Optional[str] = None):
        """
        Initialize the markdown exporter.

        Args:
            config: Configuration dictionary with export settings
            logger: Logger instance
            output_dir: Optional output directory override (takes precedence over config)
        """
        self.config = config
        self.logger = logger or logging.getLogger('chat_transcript_exporter.exporters.markdown_exporter')

        export_config = config.get('export', {})
        self.output_directory = Path(output_dir) if output_dir else Path(export_config.get('output_directory', '.'))

    def resolve_path(self, result: ExportResult, output_path: Optional[Union[str, Path]] = None) -> Path:
        """Return the explicit output path, or ``<output_directory>/<sanitized title>.md``."""
        if output_path:
            return Path(output_path)
        return self.output_directory / result.filename

    def write(self, result: ExportResult, output_path: Optional[Union[str, Path]] = None) -> Path:
        """
        Write a transcript to disk.

        Args:
            result: Pipeline output
            output_path: Optional explicit target file

        Returns:
            Path of the written file

        Raises:
            OSError: If the directory cannot be created or the file written
        """
        path = self.resolve_path(result, output_path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Failed to create output directory {path.parent}: {e}")
            raise

        with open(path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(result.markdown)

        self.logger.info(
            f"Wrote {result.conversation.message_count} messages ({len(result.markdown)} characters) to {path}"
        )
        return path
