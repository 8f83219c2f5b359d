"""Unit tests for the HTML rendering helpers and the code figure renderer."""

import pytest
from bs4 import BeautifulSoup

from llm_docs_builder.html_to_markdown.figures import FigureCodeBlockRenderer, class_tokens
from llm_docs_builder.html_to_markdown.helpers import (
    code_fence_for,
    leading_integer,
    longest_backtick_run,
    parse_integer,
    prune_trailing_unsafe_link_separator,
    squeeze_blank_lines_outside_fences,
)


def _figure(html: str) -> FigureCodeBlockRenderer:
    element = BeautifulSoup(html, "html.parser").find("figure")
    return FigureCodeBlockRenderer(
        element,
        inline_collapser=lambda node: " ".join(node.get_text().split()),
        fence_calculator=code_fence_for,
    )


@pytest.mark.unit
class TestIntegerParsing:
    """Test attribute integer parsing."""

    @pytest.mark.parametrize("raw,expected", [("2", 2), (" -1 ", -1), ("+3", 3), ("0", 0)])
    def test_valid(self, raw, expected):
        assert parse_integer(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "1.0", "abc", "2px"])
    def test_invalid(self, raw):
        assert parse_integer(raw) is None

    def test_leading_integer(self):
        assert leading_integer("2abc") == 2
        assert leading_integer("1.0") == 1
        assert leading_integer("abc") == 0


@pytest.mark.unit
class TestCodeFences:
    """Test fence sizing."""

    def test_longest_backtick_run(self):
        assert longest_backtick_run("a ``b`` ````c") == 4
        assert longest_backtick_run("none") == 0

    def test_minimum_fence(self):
        assert code_fence_for("print(1)") == "```"
        assert code_fence_for("a `b` c") == "```"

    def test_fence_longer_than_content_run(self):
        assert code_fence_for("```\nnested\n```") == "````"


@pytest.mark.unit
class TestBlankLineSqueezing:
    """Test blank line limiting outside code fences."""

    def test_squeezes_long_runs(self):
        assert squeeze_blank_lines_outside_fences("a\n\n\n\n\nb") == "a\n\n\nb"

    def test_custom_limit(self):
        assert squeeze_blank_lines_outside_fences("a\n\n\nb", max_blank=1) == "a\n\nb"

    def test_fenced_blank_lines_are_kept(self):
        text = "```\nx\n\n\n\n\ny\n```\n\n\n\n\nz"
        assert squeeze_blank_lines_outside_fences(text) == "```\nx\n\n\n\n\ny\n```\n\n\nz"

    def test_fence_closes_only_on_same_run(self):
        text = "````\n```\n\n\n\n````\n\n\n\nend"
        assert squeeze_blank_lines_outside_fences(text) == "````\n```\n\n\n\n````\n\n\nend"

    def test_tilde_fences(self):
        text = "~~~\n\n\n\n~~~"
        assert squeeze_blank_lines_outside_fences(text) == text

    def test_empty(self):
        assert squeeze_blank_lines_outside_fences("") == ""


@pytest.mark.unit
class TestUnsafeLinkSeparatorPruning:
    """Test removal of separators left by dropped links."""

    def test_trailing_separator_in_text(self):
        parts = ["Foo | "]
        prune_trailing_unsafe_link_separator(parts)
        assert parts == ["Foo"]

    def test_separator_part_and_whitespace(self):
        parts = ["Foo", " | ", "  "]
        prune_trailing_unsafe_link_separator(parts)
        assert parts == ["Foo"]

    def test_no_separator(self):
        parts = ["Foo", "Bar"]
        prune_trailing_unsafe_link_separator(parts)
        assert parts == ["Foo", "Bar"]

    def test_empty(self):
        parts: list[str] = []
        prune_trailing_unsafe_link_separator(parts)
        assert parts == []


@pytest.mark.unit
class TestFigureCodeBlockRenderer:
    """Test recovery of code from highlighted figures."""

    def test_non_code_figure(self):
        renderer = _figure("<figure><pre>x</pre></figure>")
        assert renderer.is_code_figure() is False
        assert renderer.render() is None

    def test_code_figure_without_pre(self):
        assert _figure('<figure class="code"><p>no code</p></figure>').render() is None

    def test_language_from_data_attribute(self):
        renderer = _figure('<figure class="code"><pre data-lang="rust">fn main() {}</pre></figure>')
        assert renderer.detect_language() == "rust"
        assert renderer.render() == "```rust\nfn main() {}\n```"

    def test_language_from_prefixed_class(self):
        renderer = _figure('<figure class="code"><pre><code class="language-python">x = 1</code></pre></figure>')
        assert renderer.detect_language() == "python"

    def test_generic_classes_are_not_languages(self):
        renderer = _figure('<figure class="highlight code"><pre class="line-numbers">x</pre></figure>')
        assert renderer.detect_language() is None

    def test_caption_joins_info_string(self):
        html = '<figure class="code lang-js"><figcaption>app.js</figcaption><pre>\n\nrun()\n\n</pre></figure>'
        assert _figure(html).render() == "```js app.js\nrun()\n```"

    def test_line_nodes_with_non_breaking_spaces(self):
        html = (
            '<figure class="code"><pre><span class="line">if x:</span>'
            '<span class="line">\u00a0\u00a0return 1  </span></pre></figure>'
        )
        assert _figure(html).render() == "```\nif x:\n  return 1\n```"

    def test_gutter_pre_is_skipped(self):
        html = (
            '<figure class="code"><table><tr><td class="line-numbers"><pre>1</pre></td>'
            "<td><pre>body()</pre></td></tr></table></figure>"
        )
        renderer = _figure(html)
        assert renderer.render() == "```\nbody()\n```"
        assert renderer.code_block_node.get_text() == "body()"

    def test_fence_grows_for_backticks(self):
        renderer = _figure('<figure class="code"><pre>```md\n```</pre></figure>')
        assert renderer.render() == "````\n```md\n```\n````"

    def test_class_tokens(self):
        element = BeautifulSoup('<div class="a  b"></div><p></p>', "html.parser")
        assert class_tokens(element.div) == ["a", "b"]
        assert class_tokens(element.p) == []
