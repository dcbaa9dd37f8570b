"""Markdown export package for the chat transcript pipeline.

Package Structure:
- markdown_exporter: Writes rendered transcripts to local files

Configuration Referenced:
- export.output_directory: Default directory when no output path is given
"""

from .markdown_exporter import MarkdownExporter

__all__ = [
    'MarkdownExporter'
]
