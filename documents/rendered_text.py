"""Visible-text rendering for document nodes, approximating a browser's innerText."""

import re
from typing import List, Union

from .base_document import DocumentNode

# Subtrees that never contribute visible text
NON_RENDERED_TAGS = {
    'script', 'style', 'noscript', 'template', 'head', 'title', 'meta', 'link', 'svg'
}

BLOCK_TAGS = {
    'address', 'article', 'aside', 'blockquote', 'body', 'caption', 'dd', 'details',
    'dialog', 'div', 'dl', 'dt', 'fieldset', 'figcaption', 'figure', 'footer', 'form',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'header', 'hgroup', 'hr', 'html', 'li', 'main',
    'nav', 'ol', 'pre', 'section', 'summary', 'table', 'tbody', 'tfoot', 'thead', 'tr', 'ul'
}

PARAGRAPH_TAGS = {'p'}

PREFORMATTED_TAGS = {'pre', 'textarea', 'listing', 'plaintext'}

CELL_TAGS = {'td', 'th'}

HIDDEN_STYLE_PATTERN = re.compile(r'(?:display\s*:\s*none|visibility\s*:\s*hidden)', re.IGNORECASE)
WHITESPACE_PATTERN = re.compile(r'[ \t\n\r\f]+')


class _Text:
    """Text run; preformatted runs keep their whitespace verbatim."""

    __slots__ = ('value', 'preformatted')

    def __init__(self, value: str, preformatted: bool) -> None:
        self.value = value
        self.preformatted = preformatted


# An int item is a required line-break count between surrounding text runs
_Item = Union[_Text, int]


def is_hidden(node: DocumentNode) -> bool:
    """Check whether a node's subtree is excluded from rendered text."""
    if node.tag_name in NON_RENDERED_TAGS:
        return True
    if node.get_attribute('hidden') is not None:
        return True
    style = node.get_attribute('style')
    return bool(style and HIDDEN_STYLE_PATTERN.search(style))


def render_text(node: DocumentNode) -> str:
    """
    Render the visible text of a subtree.

    Whitespace outside preformatted elements collapses to single spaces,
    block elements start and end on their own line, paragraphs are separated
    by a blank line, ``br`` becomes a newline and table cells are separated
    by tabs. Leading and trailing line breaks are dropped.

    Args:
        node: Subtree root

    Returns:
        Visible text of the subtree
    """
    items: List[_Item] = []
    _collect(node, items, preformatted=node.tag_name in PREFORMATTED_TAGS)
    return _resolve(items)


def _collect(node: DocumentNode, items: List[_Item], preformatted: bool) -> None:
    if is_hidden(node):
        return

    tag = node.tag_name
    if tag == 'br':
        items.append(_Text('\n', True))
        return

    breaks = 2 if tag in PARAGRAPH_TAGS else 1 if tag in BLOCK_TAGS else 0
    if breaks:
        items.append(breaks)

    first_cell = True
    first_child = True
    for child in node.iter_children():
        # A newline right after an opening <pre> is not rendered
        if first_child and tag in PREFORMATTED_TAGS and isinstance(child, str) and child.startswith('\n'):
            child = child[1:]
        first_child = False

        if isinstance(child, DocumentNode):
            if tag == 'tr' and child.tag_name in CELL_TAGS:
                if not first_cell:
                    items.append(_Text('\t', True))
                first_cell = False
            _collect(child, items, preformatted or child.tag_name in PREFORMATTED_TAGS)
        elif preformatted:
            items.append(_Text(child, True))
        else:
            items.append(_Text(WHITESPACE_PATTERN.sub(' ', child), False))

    if breaks:
        items.append(breaks)


def _resolve(items: List[_Item]) -> str:
    out: List[str] = []
    pending_breaks = 0

    def ends_with_break() -> bool:
        return not out or out[-1].endswith('\n')

    for item in items:
        if isinstance(item, int):
            pending_breaks = max(pending_breaks, item)
            continue

        value = item.value
        if not item.preformatted and (pending_breaks or ends_with_break() or out[-1].endswith(' ')):
            value = value.lstrip(' ')
        if not value:
            continue

        if pending_breaks and out:
            _trim_trailing_spaces(out)
            out.append('\n' * pending_breaks)
        pending_breaks = 0
        out.append(value)

    _trim_trailing_spaces(out)
    return ''.join(out).strip('\n')


def _trim_trailing_spaces(out: List[str]) -> None:
    while out and out[-1].endswith(' '):
        out[-1] = out[-1].rstrip(' ')
        if not out[-1]:
            out.pop()
