import logging
import unittest

from rich.logging import RichHandler

from brew_provisioner.logging_service import LoggingService

class TestLoggingService(unittest.TestCase):

    def tearDown(self):
        root_logger = logging.getLogger()
        for h in root_logger.handlers[:]:
            root_logger.removeHandler(h)

    def test_get_logger_is_cached(self):
        first = LoggingService.get_logger("brew_provisioner.tests.cached")
        second = LoggingService.get_logger("brew_provisioner.tests.cached", level=logging.DEBUG)

        self.assertIs(first, second)
        self.assertEqual(first.level, logging.INFO)

    def test_root_logger_uses_rich_by_default(self):
        LoggingService.setup_root_logger()
        LoggingService.setup_root_logger()

        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], RichHandler)

    def test_verbose_level_reaches_module_loggers(self):
        logger = LoggingService.get_logger("brew_provisioner.tests.verbose")

        LoggingService.setup_root_logger(level=logging.DEBUG, handler=logging.NullHandler())
        self.assertEqual(logger.level, logging.DEBUG)

        LoggingService.setup_root_logger(level=logging.INFO, handler=logging.NullHandler())
        self.assertEqual(logger.level, logging.INFO)

if __name__ == '__main__':
    unittest.main()
