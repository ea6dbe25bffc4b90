"""Unit tests for colored log output."""
import logging

from recently_used import Colors, CustomFormatter


class TestCustomFormatter:
    """Test level tags and colors."""

    def make_record(self, level: int, message: str) -> logging.LogRecord:
        return logging.LogRecord("test", level, __file__, 1, message, None, None)

    def test_info_tag(self):
        output = CustomFormatter().format(self.make_record(logging.INFO, "Removed 2 entries"))

        assert "INFO" in output
        assert Colors.GREEN in output
        assert output.endswith("Removed 2 entries")

    def test_error_tag(self):
        output = CustomFormatter().format(self.make_record(logging.ERROR, "Error: boom"))

        assert "ERRR" in output
        assert Colors.RED in output

    def test_background(self):
        """Test foreground codes convert to background codes."""
        assert Colors.background(Colors.RED) == "\033[41m"
