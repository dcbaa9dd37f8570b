"""Safe file-name candidates from arbitrary titles."""

import re

FORBIDDEN_CHARACTERS_PATTERN = re.compile(r'[/\\?%*:|"<>]')
MAX_FILENAME_LENGTH = 80
FALLBACK_FILENAME = 'conversation'


def sanitize_filename(name: str) -> str:
    """
    Convert a title into a cross-platform file-name candidate.

    Forbidden characters become hyphens, the result is cut to 80 characters
    and trimmed. Never returns an empty string.

    Args:
        name: Arbitrary title text

    Returns:
        Sanitized name without extension
    """
    sanitized = FORBIDDEN_CHARACTERS_PATTERN.sub('-', name or '')
    sanitized = sanitized[:MAX_FILENAME_LENGTH].strip()
    return sanitized or FALLBACK_FILENAME
