"""Unit tests for the package's public surface."""

import runpy
import sys

import pytest

import llm_docs_builder


@pytest.mark.unit
class TestPublicApi:
    """Test exports and the module entry point."""

    def test_all_names_exist(self):
        for name in llm_docs_builder.__all__:
            assert hasattr(llm_docs_builder, name), name

    def test_validate(self):
        assert llm_docs_builder.validate("# Project\n\n> Docs.\n") is True
        assert llm_docs_builder.validate("no title") is False

    def test_exceptions_share_base(self):
        for name in ("ValidationError", "ConfigurationError", "FileError", "GenerationError", "NetworkError"):
            assert issubclass(getattr(llm_docs_builder, name), llm_docs_builder.LlmDocsBuilderError)
        assert issubclass(llm_docs_builder.FileNotFoundError, llm_docs_builder.FileError)

    def test_module_entry_point(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["llm-docs-builder", "--version"])
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("llm_docs_builder", run_name="__main__")
        assert exc_info.value.code == 0
        assert "llm-docs-builder version" in capsys.readouterr().out
