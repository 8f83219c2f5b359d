"""Unit tests for bulk transformation of documentation trees."""

from pathlib import Path

import pytest

from llm_docs_builder import bulk_transform
from llm_docs_builder.bulk_transformer import BulkTransformer
from llm_docs_builder.exceptions import GenerationError
from llm_docs_builder.options import BuilderOptions


def _names(paths: list[str], root: Path) -> list[str]:
    return [Path(path).relative_to(root).as_posix() for path in paths]


@pytest.mark.unit
class TestBulkTransformer:
    """Test writing transformed copies of every Markdown file."""

    def test_transform_all(self, docs_tree):
        written = BulkTransformer(docs_tree).transform_all()

        assert _names(written, docs_tree) == [
            "README.llm.md",
            "api.llm.md",
            "getting-started.llm.md",
            "guides/advanced_usage.llm.md",
        ]
        assert (docs_tree / "README.llm.md").read_text(encoding="utf-8") == (
            "# My Project\n\nA tool for things.\n\nMore text here."
        )

    def test_second_run_skips_previous_output(self, docs_tree):
        BulkTransformer(docs_tree).transform_all()
        written = BulkTransformer(docs_tree).transform_all()
        assert len(written) == 4
        assert not (docs_tree / "README.llm.llm.md").exists()

    def test_empty_suffix_overwrites(self, docs_tree):
        source = docs_tree / "api.md"
        source.write_text("# API\n\n<!-- remove me -->\nText   \n", encoding="utf-8")

        written = BulkTransformer(docs_tree, BuilderOptions(suffix="", excludes=("README.md",))).transform_all()

        assert str(source) in written
        assert source.read_text(encoding="utf-8") == "# API\n\n\nText"

    def test_excludes(self, docs_tree):
        written = BulkTransformer(docs_tree, BuilderOptions(excludes=("**/guides/*",))).transform_all()
        assert "guides/advanced_usage.llm.md" not in _names(written, docs_tree)

    def test_excludes_match_file_segments_only(self, temp_dir):
        docs = temp_dir / "myapi_docs"
        (docs / "guides").mkdir(parents=True)
        (docs / "guides" / "setup.md").write_text("# Setup\n", encoding="utf-8")
        (docs / "api.md").write_text("# API\n", encoding="utf-8")

        written = BulkTransformer(docs, BuilderOptions(excludes=("*api*",))).transform_all()

        assert _names(written, docs) == ["guides/setup.llm.md"]

    def test_output_path_for(self, docs_tree):
        transformer = BulkTransformer(docs_tree, BuilderOptions(suffix=".ai"))
        assert transformer.output_path_for(docs_tree / "guide.md") == docs_tree / "guide.ai.md"

    def test_not_a_directory(self, docs_tree):
        with pytest.raises(GenerationError, match="Directory not found"):
            BulkTransformer(docs_tree / "README.md").transform_all()

    def test_public_function(self, docs_tree, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        written = bulk_transform(docs_tree, {"remove_images": True})
        assert len(written) == 4
