#!/usr/bin/env python3
"""
Chat Transcript Exporter - Main CLI Entry Point

Converts a saved chat conversation page (HTML) into a portable Markdown
transcript, or opens it as a live session with an interactive export action.
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from config_loader import ConfigLoader, get_nested
from converters import TranscriptPipeline
from documents import SessionDocument, SnapshotDocument
from exporters import MarkdownExporter
from logger import log_config, log_section, setup_logging
from models import ExportError

# Version
__version__ = "1.0.0"


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="Export a saved chat conversation page to a Markdown transcript",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export next to the current directory, file named after the conversation
  python export_chat.py conversation.html

  # Explicit output file
  python export_chat.py conversation.html transcript.md

  # Export into a directory
  python export_chat.py conversation.html --output-dir ./transcripts

  # Live session: preview and export while the file keeps changing
  python export_chat.py conversation.html --interactive

  # Verbose logging
  python export_chat.py conversation.html -vv
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        'input',
        help='Saved conversation page (HTML)'
    )

    parser.add_argument(
        'output',
        nargs='?',
        help='Output markdown file (default: <output-dir>/<sanitized title>.md)'
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration YAML file (default: config.yaml if present)'
    )

    parser.add_argument(
        '--output-dir',
        type=str,
        help='Directory for derived output file names (overrides export.output_directory)'
    )

    parser.add_argument(
        '--url',
        type=str,
        help='Session URL shown as the source in interactive mode'
    )

    parser.add_argument(
        '-i', '--interactive',
        action=argparse.BooleanOptionalAction,
        default=False,
        help='Open the input as a live session with an export button'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write logs to this file'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (-v for INFO, -vv for DEBUG)'
    )

    return parser


def run_export(config: dict, args: argparse.Namespace, logger: logging.Logger) -> int:
    """Convert the input snapshot and write the transcript."""
    encoding = get_nested(config, 'export.encoding', 'utf-8')

    logger.info(f"Reading {args.input}")
    document = SnapshotDocument.from_path(args.input, encoding=encoding)

    pipeline = TranscriptPipeline.from_config(config)
    result = pipeline.run(document)

    exporter = MarkdownExporter(config)
    path = exporter.write(result, args.output)

    print(f"Markdown export generated: {path}")
    return 0


def run_interactive(config: dict, args: argparse.Namespace, logger: logging.Logger) -> int:
    """Open the input as a live session in the Textual app."""
    # Imported here so plain exports do not pay for loading Textual
    from tui import LiveExportApp

    source_path = Path(args.input)
    if not source_path.is_file():
        raise FileNotFoundError(f"Input file not found: {source_path}")

    encoding = get_nested(config, 'export.encoding', 'utf-8')
    html = source_path.read_text(encoding=encoding, errors='replace')
    url = get_nested(config, 'session.url') or source_path.resolve().as_uri()

    document = SessionDocument.from_html(html, url=url)
    logger.info(f"Launching live session for {url}")

    app = LiveExportApp(document, config, source_path=source_path)
    app.run()
    return 0


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        # Minimal logging for config loading
        setup_logging(verbosity=args.verbose)
        logger = logging.getLogger('chat_transcript_exporter.cli')

        log_section("Chat Transcript Exporter")
        logger.info(f"Version: {__version__}")

        config_loader = ConfigLoader()
        config = config_loader.load(args.config, required=bool(args.config))

        # Merge with CLI arguments (CLI takes precedence)
        config = config_loader.merge_with_args(config, args)
        config_loader.validate(config)

        # Reconfigure logging with config file settings
        setup_logging(
            verbosity=args.verbose,
            log_file=get_nested(config, 'logging.file'),
            level=get_nested(config, 'logging.level')
        )
        log_config(config)

        if args.interactive:
            return run_interactive(config, args, logger)
        return run_export(config, args, logger)

    except ExportError as e:
        print(f"ERROR: Export failed: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}", file=sys.stderr)
        return 2
    except (ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Configuration error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"ERROR: Cannot read or write file: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nExport interrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"ERROR: Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
