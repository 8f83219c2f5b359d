"""Unit tests for stopword and duplicate removal."""

import pytest

from llm_docs_builder.text_compressor import TextCompressor, similarity


@pytest.mark.unit
class TestStopwordRemoval:
    """Test prose stopword removal."""

    def test_lowercase_stopwords_are_dropped(self):
        assert TextCompressor().remove_stopwords("Run the tests in the repo") == "Run  tests   repo"

    def test_capitalized_words_are_kept(self):
        assert TextCompressor().remove_stopwords("The cat and the dog") == "The cat   dog"

    @pytest.mark.parametrize(
        "line", ["# The title of it", "- the first item", "* and another", "see [the docs](x) in here"]
    )
    def test_structural_lines_are_kept(self, line):
        assert TextCompressor().remove_stopwords(line) == line

    def test_code_is_protected(self):
        content = "Use `the value` in the code\n```\nthe code\n```"
        assert TextCompressor().remove_stopwords(content) == "Use `the value`   code\n```\nthe code\n```"

    def test_code_is_not_protected_when_disabled(self):
        assert TextCompressor(preserve_technical=False).remove_stopwords("`the` x") == "`` x"

    def test_custom_stopwords(self):
        assert TextCompressor(custom_stopwords=["Foo"]).remove_stopwords("foo bar") == " bar"


@pytest.mark.unit
class TestDuplicateRemoval:
    """Test paragraph and sentence deduplication."""

    def test_duplicate_paragraphs(self):
        content = "Para one.\n\nPara  ONE.\n\nOther."
        assert TextCompressor().remove_duplicate_paragraphs(content) == "Para one.\n\nOther."

    def test_blank_paragraphs_are_dropped(self):
        assert TextCompressor().remove_duplicate_paragraphs("\n\n\n\nA\n\n  \n\nB") == "A\n\nB"

    def test_duplicate_sentences(self):
        content = "The cat sat. The cat sat. A dog ran"
        assert TextCompressor().remove_duplicate_sentences(content) == "The cat sat. A dog ran"

    def test_near_duplicate_sentences(self):
        content = "a b c d e. a b c d e f. x y"
        assert TextCompressor().remove_duplicate_sentences(content) == "a b c d e. x y"
        assert TextCompressor().remove_duplicate_sentences(content, similarity_threshold=0.9) == content

    def test_similarity(self):
        assert similarity("a b", "a b") == 1.0
        assert similarity("", "a") == 0.0
        assert similarity("a b", "b c") == pytest.approx(1 / 3)


@pytest.mark.unit
class TestCompress:
    """Test combined compression."""

    def test_no_methods_selected(self):
        assert TextCompressor().compress("the text") == "the text"

    def test_both_methods(self):
        content = "the cat\n\nthe cat\n\nDog"
        assert TextCompressor().compress(content, remove_stopwords=True, remove_duplicates=True) == " cat\n\nDog"
