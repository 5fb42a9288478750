import logging
import random
import unittest

import attempt_log
from attempt_log import ATTEMPT_LOGGER, emit
from solver.orchestrator import generate


class _Capture(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


class AttemptLogTests(unittest.TestCase):
    def setUp(self):
        self.handler = _Capture()
        ATTEMPT_LOGGER.addHandler(self.handler)
        self._level = ATTEMPT_LOGGER.level
        ATTEMPT_LOGGER.setLevel(logging.INFO)

    def tearDown(self):
        ATTEMPT_LOGGER.removeHandler(self.handler)
        ATTEMPT_LOGGER.setLevel(self._level)

    def messages(self):
        return [r.getMessage() for r in self.records]

    @property
    def records(self):
        return self.handler.records

    def test_emit_formats_fields_and_drops_empty_ones(self):
        emit("Event", a=1, b=None, c="", d="x")
        self.assertEqual(self.messages(), ["Event | a=1 d=x"])

    def test_emit_without_fields(self):
        emit("Bare")
        self.assertEqual(self.messages(), ["Bare"])

    def test_emit_respects_level(self):
        emit("Warned", level=logging.WARNING, n=2)
        self.assertEqual(self.records[0].levelno, logging.WARNING)

    def test_generate_reports_success(self):
        generate({"numPieces": 2, "boardRows": 4, "boardCols": 4}, rng=random.Random(0))
        success = [m for m in self.messages() if m.startswith("Puzzle generated")]
        self.assertEqual(len(success), 1)
        self.assertIn("pieces=2", success[0])

    def test_generate_reports_failure(self):
        with self.assertRaises(Exception):
            generate({"numPieces": 6, "boardRows": 3, "boardCols": 3}, rng=random.Random(0), max_attempts=3)
        failed = [r for r in self.records if r.getMessage().startswith("Generation failed")]
        self.assertEqual(len(failed), 1)
        self.assertEqual(failed[0].levelno, logging.WARNING)
        self.assertIn("attempts=3", failed[0].getMessage())

    def test_logger_name(self):
        self.assertEqual(attempt_log.LOGGER_NAME, ATTEMPT_LOGGER.name)


if __name__ == "__main__":
    unittest.main()
