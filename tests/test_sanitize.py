"""Tests for text sanitization."""

from stock_playbook.utils.sanitize import sanitize_text


class TestSanitizeText:
    """Tests for sanitize_text function."""

    def test_sanitize_none(self) -> None:
        """Test sanitize returns None for None input."""
        assert sanitize_text(None) is None

    def test_sanitize_basic(self) -> None:
        """Test basic text passthrough."""
        assert sanitize_text("RELIANCE.NS") == "RELIANCE.NS"

    def test_sanitize_strips_whitespace(self) -> None:
        """Test whitespace is stripped."""
        assert sanitize_text("  TCS.NS  ") == "TCS.NS"

    def test_sanitize_removes_control_chars(self) -> None:
        """Test control characters are removed."""
        assert sanitize_text("INFY\x00.NS\x1f") == "INFY.NS"

    def test_sanitize_removes_high_control_chars(self) -> None:
        """Test high control characters (0x7f-0x9f) are removed."""
        assert sanitize_text("ITC\x7f.NS\x9f") == "ITC.NS"

    def test_sanitize_truncates_long_text(self) -> None:
        """Test long text is cut at max_length."""
        result = sanitize_text("A" * 40, max_length=32)

        assert result == "A" * 32

    def test_sanitize_exact_max_length(self) -> None:
        """Test text at exact max length."""
        assert sanitize_text("Hello", max_length=5) == "Hello"

    def test_sanitize_empty_string(self) -> None:
        """Test empty string."""
        assert sanitize_text("") == ""
