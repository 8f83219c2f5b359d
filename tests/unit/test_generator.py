"""Unit tests for llms.txt generation."""

import re
from pathlib import Path

import pytest

from llm_docs_builder import generate_from_docs
from llm_docs_builder.generator import (
    Generator,
    calculate_priority,
    extract_description,
    extract_title,
    find_markdown_files,
    matches_excludes,
    path_matches_pattern,
    priority_label,
)
from llm_docs_builder.options import BuilderOptions

EXPECTED_INDEX = """# My Project

> A tool for things.

## Documentation

- [My Project](https://example.com/docs/README.md): A tool for things.
- [Getting Started](https://example.com/docs/getting-started.md): Install the tool first.
- [API Reference](https://example.com/docs/api.md): All public functions.
- [Advanced Usage](https://example.com/docs/guides/advanced_usage.md): Some advanced notes without a heading.
"""


def _entry_line(content: str, path: str) -> str:
    return next(line for line in content.splitlines() if f"]({path})" in line)


@pytest.mark.unit
class TestGenerator:
    """Test index generation for documentation trees."""

    def test_generate_and_write(self, docs_tree, temp_dir):
        output = temp_dir / "llms.txt"
        options = BuilderOptions(output=str(output), base_url="https://example.com/docs")

        content = Generator(docs_tree, options).generate()

        assert content == EXPECTED_INDEX
        assert output.read_text(encoding="utf-8") == EXPECTED_INDEX

    def test_relative_urls_without_base(self, docs_tree):
        content = Generator(docs_tree, BuilderOptions(output="")).generate()
        assert "- [Advanced Usage](guides/advanced_usage.md): Some advanced notes without a heading." in content

    def test_title_description_and_body_options(self, docs_tree):
        options = BuilderOptions(output="", title="Custom", description="Custom docs", body="Read this first.\n")
        content = Generator(docs_tree, options).generate()
        assert content.startswith("# Custom\n\n> Custom docs\n\nRead this first.\n\n## Documentation\n\n")

    def test_single_file(self, docs_tree):
        content = Generator(docs_tree / "api.md", BuilderOptions(output="", title="T")).generate()
        assert content == "# T\n\n## Documentation\n\n- [API Reference](api.md): All public functions.\n"

    def test_missing_path_yields_header_only(self, temp_dir):
        content = Generator(temp_dir / "nope", BuilderOptions(output="", title="T")).generate()
        assert content == "# T\n"

    def test_excludes(self, docs_tree):
        options = BuilderOptions(output="", excludes=("api.md", "**/guides/*"))
        content = Generator(docs_tree, options).generate()
        assert "api.md" not in content
        assert "advanced_usage" not in content
        assert "getting-started.md" in content

    def test_wildcard_excludes_do_not_match_parent_directories(self, temp_dir):
        docs = temp_dir / "myapi_docs"
        (docs / "guides").mkdir(parents=True)
        (docs / "README.md").write_text("# Project\n\nIntro.\n", encoding="utf-8")
        (docs / "guides" / "setup.md").write_text("# Setup\n\nSteps.\n", encoding="utf-8")
        (docs / "api.md").write_text("# API\n\nCalls.\n", encoding="utf-8")

        content = Generator(docs, BuilderOptions(output="", excludes=("*api*",))).generate()

        assert "- [Project](README.md): Intro." in content
        assert "- [Setup](guides/setup.md): Steps." in content
        assert "api.md" not in content

    def test_hidden_files(self, docs_tree):
        (docs_tree / ".draft.md").write_text("# Draft\n", encoding="utf-8")
        assert "Draft" not in Generator(docs_tree, BuilderOptions(output="")).generate()
        assert "Draft" in Generator(docs_tree, BuilderOptions(output="", include_hidden=True)).generate()

    def test_token_compression_and_priority_metadata(self, docs_tree):
        options = BuilderOptions(
            output="",
            include_metadata=True,
            include_tokens=True,
            calculate_compression=True,
            include_priority=True,
        )
        content = Generator(docs_tree, options).generate()

        assert _entry_line(content, "README.md").endswith(
            ": A tool for things. tokens:12 compression:0.92 priority:high"
        )
        assert _entry_line(content, "api.md").endswith("priority:medium")
        assert _entry_line(content, "guides/advanced_usage.md").endswith("priority:low")

    def test_timestamps(self, docs_tree):
        options = BuilderOptions(output="", include_metadata=True, include_timestamps=True)
        line = _entry_line(Generator(docs_tree, options).generate(), "README.md")
        assert re.search(r" updated:\d{4}-\d{2}-\d{2}$", line)

    def test_metadata_flags_need_include_metadata(self, docs_tree):
        options = BuilderOptions(output="", include_tokens=True, include_priority=True)
        assert "tokens:" not in Generator(docs_tree, options).generate()

    def test_public_function(self, docs_tree, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        content = generate_from_docs(docs_tree, {"output": "", "base_url": "https://example.com/docs"})
        assert content == EXPECTED_INDEX
        assert not (temp_dir / "llms.txt").exists()


@pytest.mark.unit
class TestGeneratorHelpers:
    """Test title, description and priority extraction."""

    def test_extract_title_from_heading(self):
        assert extract_title("Intro\n#  Real Title \n", "x.md") == "Real Title"

    def test_extract_title_from_file_name(self):
        assert extract_title("no heading", "docs/my-cool_file.md") == "My Cool File"

    def test_extract_description(self):
        content = "# T\n\n## Sub\n\nLine one\n  line two\n\nNext paragraph"
        assert extract_description(content) == "Line one line two"

    def test_extract_description_is_truncated(self):
        assert len(extract_description("x" * 500)) == 200
        assert extract_description("# Only a title\n") == ""

    @pytest.mark.parametrize(
        "name,priority",
        [
            ("README.md", 1),
            ("readme.txt.md", 1),
            ("getting-started.md", 2),
            ("user-guide.md", 3),
            ("Tutorial-intro.md", 4),
            ("api.md", 5),
            ("reference.md", 6),
            ("changelog.md", 7),
        ],
    )
    def test_calculate_priority(self, name, priority):
        assert calculate_priority(Path("docs") / name) == priority

    @pytest.mark.parametrize(
        "priority,label", [(1, "priority:high"), (4, "priority:medium"), (7, "priority:low"), (0, None)]
    )
    def test_priority_label(self, priority, label):
        assert priority_label(priority) == label

    def test_matches_excludes(self):
        assert matches_excludes(Path("/x/docs/a.md"), "a.md", ("**/a.md",))
        assert matches_excludes(Path("/x/docs/sub/b.md"), "sub/b.md", ("/x/docs/sub/*",))
        assert not matches_excludes(Path("/x/docs/a.md"), "a.md", ("b.md",))

    def test_star_does_not_cross_directories(self):
        assert not matches_excludes(Path("/x/docs/private/deep/a.md"), "private/deep/a.md", ("private/*",))
        assert matches_excludes(Path("/x/docs/private/a.md"), "private/a.md", ("private/*",))
        assert matches_excludes(Path("/x/docs/private/deep/a.md"), "private/deep/a.md", ("private/**",))

    @pytest.mark.parametrize(
        "path,pattern,expected",
        [
            ("a.md", "**/a.md", True),
            ("sub/deep/a.md", "**/a.md", True),
            ("sub/deep/a.md", "sub/**/a.md", True),
            ("sub/a.md", "sub/**/a.md", True),
            ("sub/a.md", "*.md", False),
            ("myapi_docs/guide.md", "*api*", False),
            ("api.md", "*api*", True),
            ("drafts/x.md", "**/drafts/**", True),
        ],
    )
    def test_path_matches_pattern(self, path, pattern, expected):
        assert path_matches_pattern(path, pattern) is expected

    def test_find_markdown_files_ignores_other_extensions(self, temp_dir):
        (temp_dir / "a.MD").write_text("x", encoding="utf-8")
        (temp_dir / "b.txt").write_text("x", encoding="utf-8")
        assert [path.name for path in find_markdown_files(temp_dir)] == ["a.MD"]
