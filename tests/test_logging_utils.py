#!/usr/bin/env python3
"""Tests for the logging helpers."""

import logging
import unittest

from speedrun_client.logging_utils import PACKAGE_LOGGER, setup_logging


class TestSetupLogging(unittest.TestCase):
    """Test setup_logging."""

    def setUp(self):
        """Remember the logger state touched by setup_logging."""
        self.package_logger = logging.getLogger(PACKAGE_LOGGER)
        self.urllib3_logger = logging.getLogger("urllib3")
        self.old_levels = (self.package_logger.level, self.urllib3_logger.level)
        self.root_handlers = list(logging.getLogger().handlers)

    def tearDown(self):
        """Restore the logger state."""
        for logger in (self.package_logger, self.urllib3_logger):
            for handler in list(logger.handlers):
                if isinstance(handler, logging.StreamHandler):
                    logger.removeHandler(handler)
        self.package_logger.setLevel(self.old_levels[0])
        self.urllib3_logger.setLevel(self.old_levels[1])

    def test_handler_is_installed_on_package_logger(self):
        """Test that the handler goes to the client's logger, not the root."""
        handler = setup_logging(logging.WARNING, "%(levelname)s: %(message)s")

        self.assertIn(handler, self.package_logger.handlers)
        self.assertNotIn(handler, logging.getLogger().handlers)
        self.assertEqual(logging.getLogger().handlers, self.root_handlers)
        self.assertEqual(handler.level, logging.WARNING)
        self.assertEqual(self.package_logger.level, logging.WARNING)
        self.assertEqual(handler.formatter._fmt, "%(levelname)s: %(message)s")
        self.assertEqual(self.urllib3_logger.level, logging.WARNING)

    def test_module_records_reach_handler(self):
        """Test that a client module's warning is emitted by the handler."""
        handler = setup_logging(logging.DEBUG)
        records = []
        handler.emit = records.append

        logging.getLogger("speedrun_client.client").warning("Could not follow link")
        self.assertEqual([r.getMessage() for r in records], ["Could not follow link"])

    def test_show_connections(self):
        """Test that urllib3 messages can be switched on."""
        handler = setup_logging(logging.DEBUG, show_connections=True)
        self.assertEqual(self.urllib3_logger.level, logging.DEBUG)
        self.assertIn(handler, self.urllib3_logger.handlers)


if __name__ == "__main__":
    unittest.main()
