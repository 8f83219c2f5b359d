"""Unit tests for llms.txt parsing."""

import pytest

from llm_docs_builder import parse
from llm_docs_builder.exceptions import FileNotFoundError
from llm_docs_builder.parser import ParsedContent, Parser, parse_section_content

LLMS_TXT = """# My Project

> A tool for things.

## Documentation

- [Guide](https://example.com/guide.md): The guide
- [API](api.md)

## Examples

* [Demo](demo.md): Demo app

## Optional

Extra notes here.

## Other   Stuff

text
"""


@pytest.fixture
def llms_file(temp_dir):
    path = temp_dir / "llms.txt"
    path.write_text(LLMS_TXT, encoding="utf-8")
    return path


@pytest.mark.unit
class TestParser:
    """Test parsing of llms.txt files."""

    def test_title_and_description(self, llms_file):
        parsed = Parser(llms_file).parse()
        assert parsed.title == "My Project"
        assert parsed.description == "A tool for things."

    def test_link_sections(self, llms_file):
        parsed = Parser(llms_file).parse()
        assert parsed.documentation_links == [
            {"title": "Guide", "url": "https://example.com/guide.md", "description": "The guide"},
            {"title": "API", "url": "api.md", "description": ""},
        ]
        assert parsed.example_links == [{"title": "Demo", "url": "demo.md", "description": "Demo app"}]

    def test_text_sections(self, llms_file):
        parsed = Parser(llms_file).parse()
        assert parsed.optional_links == "Extra notes here."
        assert parsed.sections["other_stuff"] == "text"

    def test_to_dict(self, llms_file):
        data = parse(llms_file).to_dict()
        assert list(data) == ["title", "description", "documentation", "examples", "optional", "other_stuff"]

    def test_to_xml(self, llms_file):
        xml = Parser(llms_file).parse().to_xml()
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<llms_context>\n  <title>My Project</title>')
        assert "      <url>https://example.com/guide.md</url>" in xml
        assert "  <optional>\n    Extra notes here.\n  </optional>" in xml
        assert "other_stuff" not in xml
        assert xml.endswith("</llms_context>")

    def test_xml_escaping(self):
        link = {"title": "<x>", "url": "a?b=1&c=2", "description": '"q"'}
        parsed = ParsedContent(title="A & B", sections={"documentation": [link]})
        xml = parsed.to_xml()
        assert "<title>A &amp; B</title>" in xml
        assert "<title>&lt;x&gt;</title>" in xml
        assert "<url>a?b=1&amp;c=2</url>" in xml
        assert "<description>&quot;q&quot;</description>" in xml

    def test_only_first_h1_is_title(self, temp_dir):
        path = temp_dir / "llms.txt"
        path.write_text("> early quote\n# First\n## Docs\n- [a](a.md)\n# Second\n", encoding="utf-8")
        parsed = Parser(path).parse()
        assert parsed.title == "First"
        assert parsed.description is None
        assert parsed.sections == {"docs": [{"title": "a", "url": "a.md", "description": ""}]}

    def test_empty_sections_are_skipped(self, temp_dir):
        path = temp_dir / "llms.txt"
        path.write_text("# T\n\n## Documentation\n\n## Optional\n\nText\n", encoding="utf-8")
        parsed = Parser(path).parse()
        assert "documentation" not in parsed.sections
        assert parsed.documentation_links == []

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            Parser(temp_dir / "missing.txt")

    def test_parse_section_content(self):
        assert parse_section_content("  - [A](a.md):   desc  \nnot a link\n") == [
            {"title": "A", "url": "a.md", "description": "desc"}
        ]
        assert parse_section_content("\n  Just text \n") == "Just text"
