"""Tests for innerText-style rendering of document subtrees."""

import pytest

from documents import NodePattern, SessionDocument, SnapshotDocument, render_text


def body(html, document_class=SnapshotDocument):
    return document_class.from_html(html).root.find_first((NodePattern(tag='body'),))


@pytest.mark.parametrize("document_class", [SnapshotDocument, SessionDocument])
class TestRenderText:
    """Test rendering rules on both providers."""

    def test_inline_whitespace_collapses(self, document_class):
        assert render_text(body('<span>a   b\n\n c</span>', document_class)) == "a b c"

    def test_paragraphs_separated_by_blank_line(self, document_class):
        html = '<div>\n  <p>first</p>\n  <p>second</p>\n</div>'
        assert render_text(body(html, document_class)) == "first\n\nsecond"

    def test_blocks_on_own_lines(self, document_class):
        html = '<div>one</div><div>two</div><span>three</span>'
        assert render_text(body(html, document_class)) == "one\ntwo\nthree"

    def test_list_items(self, document_class):
        html = '<ul>\n<li>alpha</li>\n<li>beta</li>\n</ul>'
        assert render_text(body(html, document_class)) == "alpha\nbeta"

    def test_br(self, document_class):
        assert render_text(body('line one<br>line two', document_class)) == "line one\nline two"

    def test_pre_keeps_whitespace(self, document_class):
        html = '<p>Code:</p><pre>\ndef f():\n    return  1\n</pre>'
        assert render_text(body(html, document_class)) == "Code:\n\ndef f():\n    return  1"

    def test_table_cells_tab_separated(self, document_class):
        html = '<table><tr><th>a</th><th>b</th></tr><tr><td>1</td><td>2</td></tr></table>'
        assert render_text(body(html, document_class)) == "a\tb\n1\t2"

    def test_hidden_subtrees_skipped(self, document_class):
        html = (
            '<div>shown</div>'
            '<div hidden>attr</div>'
            '<div style="visibility:hidden">style</div>'
            '<style>.x{}</style>'
            '<noscript>ns</noscript>'
        )
        assert render_text(body(html, document_class)) == "shown"

    def test_comments_ignored(self, document_class):
        assert render_text(body('<span>a<!-- note -->b</span>', document_class)) == "ab"


def test_head_title_not_rendered():
    document = SnapshotDocument.from_html('<html><head><title>T</title></head><body><p>x</p></body></html>')
    assert document.root.rendered_text() == "x"
