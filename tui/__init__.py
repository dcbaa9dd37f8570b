"""Textual front end for exporting a live conversation session."""

from .export_controller import ExportController, ExportOutcome
from .live_export_app import EXPORT_BUTTON_ID, LiveExportApp

__all__ = [
    'EXPORT_BUTTON_ID',
    'ExportController',
    'ExportOutcome',
    'LiveExportApp'
]
