# tests/test_utils.py
# Tests for title helpers and page-info stripping

from mwpreview.utils import clean_title, strip_page_info, validate_page_title


class TestStripPageInfo:
    """Tests for strip_page_info."""

    def test_removes_header_block(self):
        text = (
            "<%-- [PAGE_INFO]\n"
            "PageTitle=#Foo#\n"
            "PageID=#12#\n"
            "[END_PAGE_INFO] --%>\n"
            "'''Foo''' is a page."
        )
        assert strip_page_info(text) == "'''Foo''' is a page."

    def test_text_without_header_unchanged(self):
        assert strip_page_info("== Heading ==\nText") == "== Heading ==\nText"

    def test_only_first_block_removed(self):
        block = "<%--[PAGE_INFO] a [END_PAGE_INFO]--%>"
        assert strip_page_info(block + "x" + block) == "x" + block

    def test_header_only_becomes_empty(self):
        assert strip_page_info("<%-- [PAGE_INFO] [END_PAGE_INFO] --%>\n\n") == ""


class TestValidatePageTitle:
    """Tests for validate_page_title."""

    def test_valid_title(self):
        assert validate_page_title("Python (programming language)") == (True, None)

    def test_empty_title(self):
        is_valid, error = validate_page_title("   ")
        assert is_valid is False
        assert "required" in error.lower()

    def test_title_too_long(self):
        is_valid, error = validate_page_title("A" * 256, max_length=255)
        assert is_valid is False
        assert "255" in error

    def test_title_with_invalid_chars(self):
        for char in ["#", "<", ">", "[", "]", "|", "{", "}"]:
            is_valid, error = validate_page_title(f"Page{char}Title")
            assert is_valid is False
            assert "invalid character" in error.lower()


def test_clean_title():
    assert clean_title("  Foo bar ") == "Foo bar"
    assert clean_title(None) == ""
