"""
asvprep Utility Tests

Timestamps, JSON serialization, logging setup.
"""

import json
import logging
import re

from asvprep import utils


class TestSerialization:
    """Deterministic JSON and timestamps."""

    def test_sorted_keys_trailing_newline(self):
        text = utils.serialize_json({"b": 1, "a": [2, 3]})
        assert text.endswith("}\n")
        assert list(json.loads(text)) == ["a", "b"]

    def test_now_iso_is_utc_seconds(self):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\+00:00", utils.now_iso())


class TestSetupLogging:
    """Handler installation on the asvprep logger."""

    def test_repeated_calls_add_one_handler(self, monkeypatch):
        monkeypatch.setattr(utils, "_handler", None)
        logger = logging.getLogger("asvprep")
        before = list(logger.handlers)
        level = logger.level
        try:
            utils.setup_logging("debug")
            utils.setup_logging("info")
            added = [h for h in logger.handlers if h not in before]
            assert added == [utils._handler]
            assert added[0].formatter._fmt == utils.LOG_FORMAT
            assert logger.level == logging.INFO
        finally:
            for handler in logger.handlers[:]:
                if handler not in before:
                    logger.removeHandler(handler)
            logger.setLevel(level)
