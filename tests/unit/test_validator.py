"""Unit tests for llms.txt validation."""

import pytest

from llm_docs_builder import validate
from llm_docs_builder.validator import Validator

VALID = """# Project

> Documentation for the project.

## Documentation

- [Guide](https://example.com/guide.md): The guide
- [API](api.md)

## Optional

- [Changelog](docs/CHANGELOG.md)
"""


def _errors(content: str) -> list[str]:
    validator = Validator(content)
    validator.validate()
    return validator.errors


@pytest.mark.unit
class TestValidator:
    """Test structural checks on llms.txt content."""

    def test_valid_document(self):
        validator = Validator(VALID)
        assert validator.is_valid() is True
        assert validator.errors == []
        assert validate(VALID) is True

    @pytest.mark.parametrize("content", ["", "Project\n", "## Project\n"])
    def test_missing_title(self, content):
        assert 'Missing required H1 title (must start with "# ")' in _errors(content)

    def test_title_too_long(self):
        assert "Title is too long (max 80 characters)" in _errors("# " + "x" * 79 + "\n")

    def test_multiple_h1(self):
        assert "Multiple H1 headers found (only one allowed)" in _errors("# A\n# B\n")

    def test_description_too_long(self):
        assert "Description blockquote is too long (max 200 characters)" in _errors("# A\n> " + "d" * 199 + "\n")

    def test_description_only_checked_near_title(self):
        assert _errors("# A\n\n\n> " + "d" * 199 + "\n") == ["Line 4 exceeds maximum length (120 characters)"]

    def test_section_order(self):
        content = "# A\n\n## Optional\n\n## Documentation\n\n## Custom\n"
        assert _errors(content) == ["Section 'Documentation' is out of order"]

    def test_empty_link_parts(self):
        errors = _errors("# A\n\nSee [](a.md) and [b]().\n")
        assert "Empty link text found" in errors
        assert "Empty link URL found" in errors
        assert "Invalid URL format: " in errors

    def test_invalid_url_format(self):
        assert "Invalid URL format: ?query" in _errors("# A\n\n[x](?query)\n")

    def test_invalid_list_item(self):
        assert "Invalid list item format at line 3" in _errors("# A\n\n- [Guide] (guide.md)\n")

    def test_deep_headers(self):
        assert "Headers deeper than H2 not recommended (found H3)" in _errors("# A\n\n### Deep\n")

    def test_empty_h1_text(self):
        assert "Empty H1 header text" in _errors("# A\n\n#  \n")

    def test_link_warnings(self):
        errors = _errors("# A\n\n- [x](http://example.com)\n- [y](my file.md)\n")
        assert "Non-HTTPS URL found: http://example.com (consider using HTTPS)" in errors
        assert "URL contains spaces: my file.md" in errors

    def test_size_limit(self):
        content = "# A\n" + ("x" * 100 + "\n") * 600
        assert "File size exceeds maximum (50000 bytes)" in _errors(content)

    def test_errors_reset_between_runs(self):
        validator = Validator("bad")
        assert validator.validate() is False
        validator.content = VALID
        assert validator.validate() is True
        assert validator.errors == []
