"""
Tests for the colored console formatter
"""

import logging
from unittest import TestCase
from unittest.mock import patch

from prisma_name_mapper.colored_logging import (
    ColoredFormatter,
    get_colored_logger,
    log_highlight,
    log_progress,
    log_section,
    log_success,
)


def _record(level, message):
    return logging.LogRecord("test", level, __file__, 1, message, None, None)


class TestColoredFormatter(TestCase):

    def test_plain_output_without_colors(self):
        formatter = ColoredFormatter(use_colors=False)

        assert formatter.format(_record(logging.WARNING, "careful")) == "WARNING: careful"

    def test_colors_by_level_and_marker(self):
        with patch("sys.stderr") as mock_stderr:
            mock_stderr.isatty.return_value = True
            formatter = ColoredFormatter()

        error = formatter.format(_record(logging.ERROR, "broken"))
        success = formatter.format(_record(logging.INFO, "✓ done"))
        plain = formatter.format(_record(logging.INFO, "Models: 3"))

        assert error.startswith(ColoredFormatter.COLORS["ERROR"])
        assert success.startswith(ColoredFormatter.MARKER_COLORS["✓"])
        assert plain == "INFO: Models: 3"


class TestLogHelpers(TestCase):

    def test_markers(self):
        logger = get_colored_logger("prisma_name_mapper.tests")

        with self.assertLogs(logger, level="INFO") as logs:
            log_success(logger, "saved")
            log_progress(logger, "loading")
            log_highlight(logger, "found 2 tables")
            log_section(logger, "Catalog")

        messages = [record.getMessage() for record in logs.records]
        assert messages[:3] == ["✓ saved", "→ loading", "• found 2 tables"]
        assert messages[4] == "  CATALOG"
