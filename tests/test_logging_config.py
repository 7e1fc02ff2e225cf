"""
Tests for the logging configuration module.

This test suite validates:
- ProgressLogger for training progress
- setup_logging configuration
- Context-aware logging
"""
import io
import logging
import os
import tempfile
import unittest
from datetime import datetime, timedelta
from unittest.mock import MagicMock

from sintakso.logging_config import ProgressLogger, log_with_context, setup_logging


def clear_root_handlers():
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()


class TestProgressLogger(unittest.TestCase):
    """Test suite for the ProgressLogger class."""

    def setUp(self):
        self.mock_logger = MagicMock()

    def test_logs_at_10_percent_intervals(self):
        """Tests that update() logs once per ten percent."""
        progress = ProgressLogger(total=100, logger=self.mock_logger)

        progress.update(5)
        self.assertEqual(self.mock_logger.info.call_count, 0)
        progress.update(10)
        self.assertEqual(self.mock_logger.info.call_count, 1)
        progress.update(3)
        self.assertEqual(self.mock_logger.info.call_count, 1)
        progress.update(7)
        self.assertEqual(self.mock_logger.info.call_count, 2)
        self.assertEqual(progress.current, 25)

    def test_item_description_forces_a_line(self):
        """Tests that an item description is always logged."""
        progress = ProgressLogger(total=100, desc="Epochs", logger=self.mock_logger)
        progress.update(1, item_desc="loss=0.4210")
        logged_message = self.mock_logger.info.call_args[0][0]
        self.assertIn("Epochs: 1/100 (1%)", logged_message)
        self.assertIn("loss=0.4210", logged_message)

    def test_eta_only_while_incomplete(self):
        """Tests that the ETA appears before completion and not after."""
        progress = ProgressLogger(total=100, logger=self.mock_logger)
        progress.start_time = datetime.now() - timedelta(seconds=10)
        progress.update(50)
        self.assertIn("ETA:", self.mock_logger.info.call_args[0][0])
        progress.update(50)
        self.assertNotIn("ETA:", self.mock_logger.info.call_args[0][0])

    def test_zero_total(self):
        """Tests that an empty job reports without dividing by zero."""
        progress = ProgressLogger(total=0, logger=self.mock_logger)
        progress.update(0, item_desc="nothing to do")
        self.assertIn("(100%)", self.mock_logger.info.call_args[0][0])

    def test_close_completes_progress(self):
        """Tests that close() jumps to the total once."""
        progress = ProgressLogger(total=100, logger=self.mock_logger)
        progress.update(50)
        progress.close()
        self.assertEqual(progress.current, 100)
        calls = self.mock_logger.info.call_count
        progress.close()
        self.assertEqual(self.mock_logger.info.call_count, calls)


class TestSetupLogging(unittest.TestCase):
    """Test suite for the setup_logging() function."""

    def setUp(self):
        clear_root_handlers()
        self.tmp = tempfile.TemporaryDirectory()
        self.log_file = os.path.join(self.tmp.name, "sintakso.log")

    def tearDown(self):
        clear_root_handlers()
        self.tmp.cleanup()

    def test_file_and_console_handlers(self):
        """Tests that setup_logging installs one file and one console handler."""
        setup_logging(log_file=self.log_file, stream=io.StringIO())
        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 2)
        self.assertEqual(len([h for h in handlers if isinstance(h, logging.FileHandler)]), 1)

    def test_console_only(self):
        """Tests that no log file means a single console handler."""
        stream = io.StringIO()
        setup_logging(log_file=None, stream=stream)
        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertIs(handlers[0].stream, stream)

    def test_levels(self):
        """Tests the default level, an explicit level and debug mode."""
        setup_logging(log_file=None, stream=io.StringIO())
        self.assertEqual(logging.getLogger().level, logging.INFO)
        setup_logging(log_file=None, level=logging.WARNING, stream=io.StringIO())
        self.assertEqual(logging.getLogger().level, logging.WARNING)
        setup_logging(log_file=None, level=logging.WARNING, debug=True, stream=io.StringIO())
        self.assertEqual(logging.getLogger().level, logging.DEBUG)

    def test_debug_format_has_location(self):
        """Tests that debug mode adds file and line to the format."""
        setup_logging(log_file=self.log_file, debug=True, stream=io.StringIO())
        for handler in logging.getLogger().handlers:
            self.assertIn("%(filename)s", handler.formatter._fmt)
            self.assertIn("%(lineno)d", handler.formatter._fmt)

    def test_writes_run_separator(self):
        """Tests that every run starts with a separator in the log file."""
        setup_logging(log_file=self.log_file, stream=io.StringIO())
        for handler in logging.getLogger().handlers:
            handler.flush()
        with open(self.log_file, encoding="utf-8") as f:
            content = f.read()
        self.assertIn("=" * 80, content)
        self.assertIn("NEW RUN STARTED", content)

    def test_clears_existing_handlers(self):
        """Tests that repeated setup does not duplicate handlers."""
        logging.getLogger().addHandler(logging.StreamHandler(io.StringIO()))
        setup_logging(log_file=self.log_file, stream=io.StringIO())
        setup_logging(log_file=self.log_file, stream=io.StringIO())
        self.assertEqual(len(logging.getLogger().handlers), 2)


class TestLogWithContext(unittest.TestCase):

    def test_context_lines_at_debug(self):
        """Tests that each context entry gets its own debug line."""
        mock_logger = MagicMock()
        mock_logger.isEnabledFor.return_value = True
        log_with_context("Tagging", {"mode": "hmm", "tokens": 4}, level=logging.INFO, logger=mock_logger)
        mock_logger.log.assert_called_once_with(logging.INFO, "Tagging")
        self.assertEqual(mock_logger.debug.call_count, 2)
        self.assertIn("mode: hmm", mock_logger.debug.call_args_list[0][0][0])

    def test_long_values_truncated(self):
        """Tests that long context values are cut at 200 characters."""
        mock_logger = MagicMock()
        mock_logger.isEnabledFor.return_value = True
        log_with_context("Tagging", {"tokens": "x" * 500}, logger=mock_logger)
        line = mock_logger.debug.call_args[0][0]
        self.assertTrue(line.endswith("..."))
        self.assertLess(len(line), 250)

    def test_no_context_lines_above_debug(self):
        """Tests that context is skipped when debug logging is off."""
        mock_logger = MagicMock()
        mock_logger.isEnabledFor.return_value = False
        log_with_context("Tagging", {"mode": "hmm"}, logger=mock_logger)
        mock_logger.debug.assert_not_called()


if __name__ == '__main__':
    unittest.main()
