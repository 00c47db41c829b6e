"""Tests for knead.htmltidy.normalize_html — whole documents in, tidy text out."""

from __future__ import annotations

import pytest

from knead.htmltidy import normalize_html


def assert_normalizes(source: str, expected: str) -> None:
    """Check the output, then check that tidying it again changes nothing."""
    out = normalize_html(source)
    assert out == expected
    assert normalize_html(out) == expected


SKELETON = """\
<!DOCTYPE html>
<html>
    <head>
    </head>
    <body>
{body}    </body>
</html>
"""


# ---------------------------------------------------------------------------
# Document skeleton
# ---------------------------------------------------------------------------


class TestDocumentSkeleton:
    """The doctype, html, head and body scaffolding."""

    def test_doctype_preserved(self) -> None:
        source = "<!DOCTYPE html>\n<html>\n<head></head>\n<body>\n</body>\n</html>\n"
        assert_normalizes(source, SKELETON.format(body=""))

    def test_compact_document(self) -> None:
        """A document on one line gets the same skeleton."""
        source = "<!DOCTYPE html><html><head></head><body></body></html>"
        assert_normalizes(source, SKELETON.format(body=""))

    def test_missing_structure_is_created(self) -> None:
        """The parser supplies html, head and body around a bare fragment."""
        out = normalize_html("<p>hi</p>")
        assert out == (
            "<html>\n"
            "    <head>\n"
            "    </head>\n"
            "    <body>\n"
            "        <p>\n"
            "            hi\n"
            "        </p>\n"
            "    </body>\n"
            "</html>\n"
        )

    def test_empty_input(self) -> None:
        out = normalize_html("")
        assert "<head>" in out
        assert normalize_html(out) == out


# ---------------------------------------------------------------------------
# Inline runs
# ---------------------------------------------------------------------------


class TestInlineFormatting:
    """Inline elements stay on the line of the text around them."""

    def test_inline_run_collapsed(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n<head></head>\n<body>\n<p>\n"
            "   <em>This   is</em>\n"
            "   some   <i>in</i>line text\n"
            "</p>\n</body>\n</html>\n"
        )
        body = (
            "        <p>\n"
            "            <em>This is</em> some <i>in</i>line text\n"
            "        </p>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    def test_no_space_invented_after_inline(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n<head></head>\n<body>\n<p>\n"
            "   <em>This   is</em>some   <i>in</i>line text\n"
            "</p>\n</body>\n</html>\n"
        )
        body = (
            "        <p>\n"
            "            <em>This is</em>some <i>in</i>line text\n"
            "        </p>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    def test_text_before_inline(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n<head></head>\n<body>\n<p>\n"
            "   This   is\n"
            "   some   <i>in</i>line text\n"
            "</p>\n</body>\n</html>\n"
        )
        body = (
            "        <p>\n"
            "            This is some <i>in</i>line text\n"
            "        </p>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    def test_paragraph_fragment(self) -> None:
        """A paragraph is indented one level inside its block, runs collapsed."""
        out = normalize_html("<p>\n   This   is\n   some   <i>in</i>line text\n</p>")
        assert (
            "        <p>\n"
            "            This is some <i>in</i>line text\n"
            "        </p>\n"
        ) in out

    def test_nested_inline_elements(self) -> None:
        out = normalize_html('<p>a <a href="#"><b>bold</b></a>  link</p>')
        assert '            a <a href="#"><b>bold</b></a> link\n' in out


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


class TestBlockFormatting:
    """Block elements get their own lines and indentation."""

    def test_trailing_whitespace_trimmed(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n<head></head>\n    <body>\n"
            "            <p>\n"
            "                <strong>Import File</strong> allows you to import several "
            "different special files that you have saved on your device."
            "            </p>\n\n"
            "    </body>\n</html>\n"
        )
        body = (
            "        <p>\n"
            "            <strong>Import File</strong> allows you to import several "
            "different special files that you have saved on your device.\n"
            "        </p>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    def test_text_then_inline_at_block_end(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n<head></head>\n    <body>\n"
            "<p>For instance:\n<code>blinds up</code></p>\n"
            "    </body>\n</html>\n"
        )
        body = (
            "        <p>\n"
            "            For instance: <code>blinds up</code>\n"
            "        </p>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    def test_misnested_tags_are_repaired(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n<head></head>\n<body>\n"
            "        <header>\n"
            '<a href="/index.html"><img src="/logo.svg" style="height: 4rem;"></a>\n'
            '            <div class="spacer">\n'
            "            </div>\n"
            "            <nav>\n"
            "                <ul>\n"
            "                    <li>\n"
            '<a href="/" class="">Home</a>                    </li>\n'
            "</nav>\n"
            "</ul>\n"
            "</header>\n"
            "</body>\n</html>\n"
        )
        body = (
            "        <header>\n"
            '            <a href="/index.html"><img src="/logo.svg" style="height: 4rem;"></a>\n'
            '            <div class="spacer">\n'
            "            </div>\n"
            "            <nav>\n"
            "                <ul>\n"
            "                    <li>\n"
            '                        <a href="/" class="">Home</a>\n'
            "                    </li>\n"
            "                </ul>\n"
            "            </nav>\n"
            "        </header>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    def test_block_hoisted_out_of_paragraph(self) -> None:
        """The parser closes <p> before a <div>; the stray </p> opens a new one."""
        source = (
            "<!DOCTYPE html>\n<html>\n    <head>\n    </head>\n    <body>\n"
            "        <div>\n"
            "            <p>\n"
            "                <div>\n"
            "                </div>\n"
            '                2. This <a href="#"><b>should</b></a>  be inline and normal, '
            "but because of html parsing, this gets hoisted.\n"
            "            </p>\n"
            "            <p>\n"
            '                3. This <a href="#"><b>should</b></a>  be inline and normal.  As\n'
            "\t\t\t\t\t\t\t\tshould this.\n"
            "            </p>\n"
            "        </div>\n"
            "    </body>\n</html>\n"
        )
        body = (
            "        <div>\n"
            "            <p>\n"
            "            </p>\n"
            "            <div>\n"
            "            </div>\n"
            '            2. This <a href="#"><b>should</b></a> be inline and normal, '
            "but because of html parsing, this gets hoisted.\n"
            "            <p>\n"
            "            </p>\n"
            "            <p>\n"
            '                3. This <a href="#"><b>should</b></a> be inline and normal. '
            "As should this.\n"
            "            </p>\n"
            "        </div>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    def test_comment_on_its_own_line(self) -> None:
        out = normalize_html("<body>\n<!-- note -->\n<div></div></body>")
        assert "        <!-- note -->\n        <div>\n" in out


# ---------------------------------------------------------------------------
# Void elements
# ---------------------------------------------------------------------------


class TestVoidElements:
    """Void elements are never closed."""

    def test_each_void_on_its_own_line(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n<head></head>\n<body>\n"
            '<img src="x.png">\n<br><br><br>\n<hr>\n'
            "</body>\n</html>\n"
        )
        body = (
            '        <img src="x.png">\n'
            "        <br>\n"
            "        <br>\n"
            "        <br>\n"
            "        <hr>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    @pytest.mark.parametrize("tag", ["br", "hr", "img", "input", "meta", "link", "wbr"])
    def test_never_closed(self, tag: str) -> None:
        out = normalize_html(f"<p>a<{tag}>b</p>")
        assert f"</{tag}>" not in out


# ---------------------------------------------------------------------------
# Verbatim content
# ---------------------------------------------------------------------------


class TestPreservedContent:
    """pre, textarea, script and style keep their interiors."""

    def test_whitespace_preserved(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n<head></head>\n<body>\n"
            "<pre>\n    line1\n    line2\n</pre>\n"
            "<code>   a   b   c   </code>\n"
            "<textarea>\n   hello\n     world\n</textarea>\n"
            "<div>\n<script>\n"
            "    if (true) {\n"
            '        console.log("hi");\n'
            "    }\n"
            "</script>\n</div>\n"
            "</body>\n</html>\n"
        )
        body = (
            "        <pre>\n    line1\n    line2\n</pre>\n"
            "        <code> a b c </code>\n"
            "        <textarea>\n   hello\n     world\n</textarea>\n"
            "        <div>\n"
            "            <script>\n"
            "    if (true) {\n"
            '        console.log("hi");\n'
            "    }\n"
            "</script>\n"
            "        </div>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    def test_style_preserved(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n<head></head>\n<body>\n"
            "<style>\n    body { color: red; }\n</style>\n"
            "</body>\n</html>\n"
        )
        body = "        <style>\n    body { color: red; }\n</style>\n"
        assert_normalizes(source, SKELETON.format(body=body))

    def test_pre_gets_single_leading_newline(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n    <head>\n    </head>\n    <body>\n"
            "        <pre>    <i>line1</i><b>bold</b> is a menace\n"
            "    line1 <b>  bold  </b> is a menace\n"
            "    line2\n"
            "</pre>\n"
            "    </body>\n</html>\n"
        )
        body = (
            "        <pre>\n"
            "    <i>line1</i><b>bold</b> is a menace\n"
            "    line1 <b>  bold  </b> is a menace\n"
            "    line2\n"
            "</pre>\n"
        )
        assert_normalizes(source, SKELETON.format(body=body))

    def test_pre_without_leading_newline(self) -> None:
        out = normalize_html("<body><pre>    line1\n    line2\n</pre></body>")
        assert "        <pre>\n    line1\n    line2\n</pre>\n" in out

    def test_pre_with_element_first_gets_no_newline(self) -> None:
        out = normalize_html("<body><pre><code>   a   b   </code></pre></body>")
        assert "        <pre><code>   a   b   </code></pre>\n" in out

    def test_textarea_second_newline_kept(self) -> None:
        """The parser eats the first newline; the second one is content."""
        out = normalize_html("<body><textarea>\n\n   hello\n</textarea></body>")
        assert "        <textarea>\n   hello\n</textarea>\n" in out
        assert normalize_html(out) == out

    def test_script_not_escaped(self) -> None:
        out = normalize_html("<body><script>if (a < b && c) {}</script></body>")
        assert "<script>\nif (a < b && c) {}</script>" in out


# ---------------------------------------------------------------------------
# Full document
# ---------------------------------------------------------------------------


class TestFullDocument:
    """Everything together, including comments inside the body."""

    def test_normalize_document(self) -> None:
        source = (
            "<!DOCTYPE html>\n<html>\n    <head>\n"
            "        <style>\n"
            "            p {\n"
            "                border: 1px solid black;\n"
            "            }\n"
            "    </style>\n"
            "\t\t</head>\n"
            "    <body>\n"
            "        <p>\n            simple text\n        </p>\n"
            "        <pre>\n    line1\n    line2\n</pre>\n"
            "        <!-- This second pre gets normalized to the first. -->\n"
            "        <pre>    line1\n    line2\n</pre>\n"
            "        <pre>    <i>line1</i><b>bold</b> is a menace\n"
            "    line1 <b>  bold  </b> is a menace\n"
            "    line2\n"
            "</pre>\n\n"
            "        <pre><code>   expect   triple   spaces   </code></pre>\n"
            "\t\t\t\t<!-- the first newline in a textarea is dropped, a second is kept. -->\n"
            "        <textarea>\n\n   hello\n     world\n</textarea>\n"
            "        <textarea>\n   hello\n     world\n</textarea>\n"
            "        <hr>\n"
            "        <div>\n"
            "            <script>\n"
            "    if (true) {\n"
            '        console.log("hi");\n'
            "    }\n"
            "</script>\n"
            "            <p>\n"
            '                1. This <a href="#"><b>should</b></a> be inline.\n'
            "            </p>\n"
            "            <p>\n"
            "                <div>\n"
            "                </div>\n"
            '                2. This <a href="#"><b>should</b></a>  be inline and normal, '
            "but because of html parsing, this gets hoisted.\n"
            "            </p>\n"
            "            <p>\n"
            '                3. This <a href="#"><b>should</b></a>  be inline and normal.  As\n'
            "\t\t\t\t\t\t\t\tshould this.\n"
            "            </p>\n"
            "        </div>\n"
            "    </body>\n</html>\n"
        )
        expected = (
            "<!DOCTYPE html>\n<html>\n    <head>\n"
            "        <style>\n"
            "            p {\n"
            "                border: 1px solid black;\n"
            "            }\n"
            "    </style>\n"
            "    </head>\n"
            "    <body>\n"
            "        <p>\n            simple text\n        </p>\n"
            "        <pre>\n    line1\n    line2\n</pre>\n"
            "        <!-- This second pre gets normalized to the first. -->\n"
            "        <pre>\n    line1\n    line2\n</pre>\n"
            "        <pre>\n"
            "    <i>line1</i><b>bold</b> is a menace\n"
            "    line1 <b>  bold  </b> is a menace\n"
            "    line2\n"
            "</pre>\n"
            "        <pre><code>   expect   triple   spaces   </code></pre>\n"
            "        <!-- the first newline in a textarea is dropped, a second is kept. -->\n"
            "        <textarea>\n   hello\n     world\n</textarea>\n"
            "        <textarea>\n   hello\n     world\n</textarea>\n"
            "        <hr>\n"
            "        <div>\n"
            "            <script>\n"
            "    if (true) {\n"
            '        console.log("hi");\n'
            "    }\n"
            "</script>\n"
            "            <p>\n"
            '                1. This <a href="#"><b>should</b></a> be inline.\n'
            "            </p>\n"
            "            <p>\n"
            "            </p>\n"
            "            <div>\n"
            "            </div>\n"
            '            2. This <a href="#"><b>should</b></a> be inline and normal, '
            "but because of html parsing, this gets hoisted.\n"
            "            <p>\n"
            "            </p>\n"
            "            <p>\n"
            '                3. This <a href="#"><b>should</b></a> be inline and normal. '
            "As should this.\n"
            "            </p>\n"
            "        </div>\n"
            "    </body>\n</html>\n"
        )
        assert_normalizes(source, expected)


# ---------------------------------------------------------------------------
# Escaping and stability
# ---------------------------------------------------------------------------


class TestEscaping:
    """Output re-parses to the same tree."""

    def test_text_entities_reencoded(self) -> None:
        out = normalize_html("<p>a &lt;b&gt; &amp; c</p>")
        assert "a &lt;b&gt; &amp; c" in out

    def test_attribute_quotes_escaped(self) -> None:
        out = normalize_html("<p title='say \"hi\" &amp; go'>x</p>")
        assert '<p title="say &quot;hi&quot; &amp; go">' in out

    def test_attribute_order_kept(self) -> None:
        out = normalize_html('<a id="x" href="/" class="c">t</a>')
        assert '<a id="x" href="/" class="c">t</a>' in out


class TestIdempotence:
    """Tidying tidy output is a no-op."""

    @pytest.mark.parametrize(
        "source",
        [
            "<ul><li>one<li>two</ul>",
            "<div><span> a </span><span> b </span></div>",
            "<table><tr><td>1</td><td> 2 </td></tr></table>",
            "<p>x <em>y</em></p><p>z</p>",
            "<section>\n\n<h1>Title</h1>\n<p>text <code>x</code></p>\n</section>",
        ],
    )
    def test_fixed_point(self, source: str) -> None:
        once = normalize_html(source)
        assert normalize_html(once) == once

    def test_unicode_whitespace_run(self) -> None:
        """No-break and em spaces collapse like ASCII whitespace."""
        out = normalize_html("<p>a\u00a0\u2003\n b</p>")
        assert "        <p>\n            a b\n        </p>\n" in out
        assert normalize_html(out) == out


class TestKnownUnstableShapes:
    """Shapes whose output changes again on a second pass.

    Text printed on its own line after a block, void or comment sibling is
    reparsed with a leading line break, which the second pass turns into a
    kept space.
    """

    @pytest.mark.parametrize(
        "source",
        [
            "<p>x<br>y</p>",
            "<p><!-- c -->text</p>",
            "<div>text<span>s</span><div>x</div>tail</div>",
            "<p>before<div>block</div>after</p>",
            "<p>t<pre>x</pre>u</p>",
        ],
    )
    @pytest.mark.xfail(strict=True, reason="not a fixed point under the two-pass rules")
    def test_not_a_fixed_point(self, source: str) -> None:
        once = normalize_html(source)
        assert normalize_html(once) == once
