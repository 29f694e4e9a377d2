"""Tests for HTML cleaning and code-block preservation."""

from tenable_docs.conversion.cleaner import CleaningOptions, HtmlCleaner, clean_html
from tenable_docs.conversion.preserver import (
    clean_html_preserving_code_blocks,
    preserve_code_blocks,
    restore_code_blocks,
)


class TestHtmlCleaner:
    """Tests for HtmlCleaner."""

    def test_narrows_to_main_content(self):
        """Test that boilerplate is removed and main content kept."""
        html = """<html><body>
            <nav>Navigation</nav>
            <main><h1>Title</h1><p>Body text</p></main>
            <footer>Footer</footer>
        </body></html>"""

        result = clean_html(html)

        assert "<h1>Title</h1>" in result
        assert "<p>Body text</p>" in result
        assert "Navigation" not in result
        assert "Footer" not in result
        assert "<main>" not in result

    def test_removes_scripts_and_styles(self):
        """Test that script, style and noscript are removed."""
        html = "<article><script>alert(1)</script><style>p{}</style><p>Kept</p></article>"
        assert clean_html(html) == "<p>Kept</p>"

    def test_removes_selector_matches_inside_content(self):
        """Test that remove-selectors apply inside the main region."""
        html = '<main><div class="cookie-banner">Accept</div><p>Docs</p></main>'
        assert clean_html(html) == "<p>Docs</p>"

    def test_prunes_empty_elements(self):
        """Test that elements with no children and no text are removed, bottom-up."""
        html = "<main><div><span> </span></div><p>Text</p></main>"
        assert clean_html(html) == "<p>Text</p>"

    def test_keeps_void_content_elements(self):
        """Test that images and rules survive pruning."""
        html = '<main><p>A</p><img src="a.png"/><hr/></main>'
        result = clean_html(html)
        assert "<img" in result
        assert "<hr" in result

    def test_whole_document_when_no_main_region(self):
        """Test fallback to the whole document."""
        html = "<div><p>Loose</p></div>"
        assert clean_html(html) == "<div><p>Loose</p></div>"

    def test_first_keep_selector_wins(self):
        """Test keep-selector priority order."""
        html = '<div class="content"><p>Content</p></div><main><p>Main</p></main>'
        assert clean_html(html) == "<p>Main</p>"

    def test_custom_selectors(self):
        """Test overriding the selector lists."""
        options = CleaningOptions(remove_selectors=[".promo"], keep_selectors=["#doc"])
        html = '<nav>Nav</nav><div id="doc"><p class="promo">Buy</p><p>Real</p></div>'
        assert HtmlCleaner.from_options(options).clean(html) == "<p>Real</p>"


class TestCodeBlockPreserver:
    """Tests for code-block preservation."""

    def test_placeholders_in_document_order(self):
        """Test that code blocks are replaced by numbered placeholders."""
        html = '<div><pre>first</pre><p>x</p><code class="hljs">second</code></div>'

        preserved = preserve_code_blocks(html)

        assert preserved.markup == "<div>__CODE_BLOCK_0__<p>x</p>__CODE_BLOCK_1__</div>"
        assert preserved.code_blocks == {
            "__CODE_BLOCK_0__": "<pre>first</pre>",
            "__CODE_BLOCK_1__": '<code class="hljs">second</code>',
        }

    def test_nested_code_stays_in_ancestor(self):
        """Test that code inside a preserved pre is not extracted separately."""
        html = '<pre><code class="language-python">x = 1</code></pre>'

        preserved = preserve_code_blocks(html)

        assert list(preserved.code_blocks.values()) == [html]

    def test_plain_inline_code_untouched(self):
        """Test that code without a highlighting class is not preserved."""
        preserved = preserve_code_blocks("<p>Use <code>pip</code></p>")
        assert preserved.code_blocks == {}

    def test_round_trip(self):
        """Test that restoring placeholders gives back the input."""
        html = (
            '<div><p>Intro</p><pre><code class="language-js">let a = 1;</code></pre>'
            '<code class="hljs">b()</code></div>'
        )

        preserved = preserve_code_blocks(html)

        assert restore_code_blocks(preserved.markup, preserved.code_blocks) == html

    def test_round_trip_keeps_source_bytes(self):
        """Test that unquoted attributes, void tags and entities are not reserialized."""
        html = "<p>Intro<br></p><pre class=shell>ls &amp;&amp; pwd</pre>"

        preserved = preserve_code_blocks(html)

        assert preserved.markup == "<p>Intro<br></p>__CODE_BLOCK_0__"
        assert preserved.code_blocks == {"__CODE_BLOCK_0__": "<pre class=shell>ls &amp;&amp; pwd</pre>"}
        assert restore_code_blocks(preserved.markup, preserved.code_blocks) == html

    def test_offsets_across_lines(self):
        """Test that blocks after line breaks are sliced at the right place."""
        html = "<div>\n  <p>a</p>\n  <PRE>b\n\n c</PRE>\n<code class=\"hljs\">d</code>\n</div>"

        preserved = preserve_code_blocks(html)

        assert list(preserved.code_blocks.values()) == ["<PRE>b\n\n c</PRE>", '<code class="hljs">d</code>']
        assert restore_code_blocks(preserved.markup, preserved.code_blocks) == html

    def test_nested_same_tag(self):
        """Test that the matching end tag is found past a nested block of the same name."""
        html = "<pre>a<pre>b</pre>c</pre><p>after</p>"

        preserved = preserve_code_blocks(html)

        assert preserved.markup == "__CODE_BLOCK_0__<p>after</p>"
        assert preserved.code_blocks == {"__CODE_BLOCK_0__": "<pre>a<pre>b</pre>c</pre>"}

    def test_unclosed_block_left_in_place(self):
        """Test that a block with no end tag in the source is not swapped out."""
        preserved = preserve_code_blocks("<div><pre>open")

        assert preserved.markup == "<div><pre>open"
        assert preserved.code_blocks == {}

    def test_cleaner_cannot_alter_code(self):
        """Test that whitespace and empty elements inside code survive cleaning."""
        code = '<pre><code class="language-python">def f():\n\n    return 1</code></pre>'
        html = f"<nav>Nav</nav><main><p>Example</p>{code}<pre><span></span></pre></main>"

        result = clean_html_preserving_code_blocks(html)

        assert code in result
        assert "<pre><span></span></pre>" in result
        assert "Nav" not in result
