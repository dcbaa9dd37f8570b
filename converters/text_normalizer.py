"""Pure text normalization for extracted message content."""

import re

CODE_FENCE = '```'
ESCAPED_CODE_FENCE = '`` `'

WHITESPACE_ONLY_LINE_PATTERN = re.compile(r'^[^\S\n]+$', re.MULTILINE)
EXCESS_NEWLINES_PATTERN = re.compile(r'\n{3,}')


def unify_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace('\r\n', '\n').replace('\r', '\n')


def collapse_blank_lines(text: str) -> str:
    """Cap vertical whitespace at a single blank line."""
    text = WHITESPACE_ONLY_LINE_PATTERN.sub('', text)
    return EXCESS_NEWLINES_PATTERN.sub('\n\n', text)


def escape_code_fences(text: str) -> str:
    """
    Split every triple-backtick run so message content cannot open or close
    a code fence in the transcript.

    A single replacement pass leaves a fresh run behind for six or more
    consecutive backticks, so replace until none remain.
    """
    while CODE_FENCE in text:
        text = text.replace(CODE_FENCE, ESCAPED_CODE_FENCE)
    return text


def normalize_text(raw_text: str) -> str:
    """
    Normalize raw extracted text.

    Steps: unify line endings, collapse blank lines, trim, escape code
    fences. The function is idempotent.

    Args:
        raw_text: Text as extracted from the document

    Returns:
        Normalized text (empty if the input held only whitespace)
    """
    text = unify_line_endings(raw_text or '')
    text = collapse_blank_lines(text)
    text = text.strip()
    return escape_code_fences(text)
