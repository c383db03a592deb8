import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ui.logging_utils import FILE_ENV, LEVEL_ENV, setup_logging


class TestSetupLogging(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.handlers[:], root.level)
        root.handlers = []
        self.addCleanup(self._restore)

    def _restore(self):
        root = logging.getLogger()
        for handler in root.handlers:
            handler.close()
        root.handlers, level = self._saved[0], self._saved[1]
        root.setLevel(level)

    def test_env_level_and_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "search.log"
            with mock.patch.dict(os.environ, {LEVEL_ENV: "debug", FILE_ENV: str(log_path)}):
                setup_logging()

            root = logging.getLogger()
            self.assertEqual(root.level, logging.DEBUG)
            self.assertTrue(log_path.parent.exists())
            self.assertEqual(
                sorted(type(handler).__name__ for handler in root.handlers),
                ["FileHandler", "StreamHandler"],
            )
            for handler in root.handlers:
                handler.close()

    def test_empty_file_disables_file_handler(self):
        with mock.patch.dict(os.environ, {LEVEL_ENV: "warning"}):
            setup_logging(log_file="")

        root = logging.getLogger()
        self.assertEqual(root.level, logging.WARNING)
        self.assertEqual([type(handler) for handler in root.handlers], [logging.StreamHandler])

    def test_explicit_level_wins(self):
        with mock.patch.dict(os.environ, {LEVEL_ENV: "debug"}):
            setup_logging("error", "")

        self.assertEqual(logging.getLogger().level, logging.ERROR)

    def test_existing_handlers_are_kept(self):
        root = logging.getLogger()
        existing = logging.NullHandler()
        root.addHandler(existing)

        setup_logging(log_file="")

        self.assertEqual(root.handlers, [existing])


if __name__ == "__main__":
    unittest.main()
