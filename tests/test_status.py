"""
asvprep Completion Marker Tests

Marker shape, schema validation, and the incomplete-directory warning.
"""

import json
import logging

import pytest

from asvprep.stages.base import log_skip
from asvprep.status import (
    MARKER_NAME,
    STAGE_STATUS_SCHEMA,
    build_stage_status,
    is_marked_complete,
    mark_complete,
    read_marker,
    validate_document,
)


class TestStageStatus:
    """Marker object and schema."""

    def test_marker_validates_against_schema(self, tmp_path, make_config):
        status = build_stage_status(2, "protocol", "2026-01-01T00:00:00+00:00", make_config(), ["a", "b"])
        marker = mark_complete(tmp_path, status)

        document = json.loads(marker.read_text())
        assert validate_document(document, STAGE_STATUS_SCHEMA) == []
        assert document["artifacts"] == ["a", "b"]
        assert document["config"]["n_proc"] == 8

    def test_marker_is_deterministic_json(self, tmp_path, make_config):
        status = build_stage_status(3, "trials", "2026-01-01T00:00:00+00:00", make_config())
        mark_complete(tmp_path, status)
        text = (tmp_path / MARKER_NAME).read_text()
        assert text.endswith("}\n")
        assert list(json.loads(text)) == sorted(json.loads(text))

    def test_invalid_status_rejected(self, tmp_path, make_config):
        status = build_stage_status(0, "bogus", "2026-01-01T00:00:00+00:00", make_config())
        with pytest.raises(ValueError, match="stage"):
            mark_complete(tmp_path, status)
        assert not is_marked_complete(tmp_path)

    def test_read_marker(self, tmp_path, make_config):
        mark_complete(tmp_path, build_stage_status(1, "download", "2026-01-01T00:00:00+00:00", make_config()))
        assert read_marker(tmp_path)["name"] == "download"


class TestLogSkip:
    """Skipping a guarded directory."""

    def test_warns_without_marker(self, tmp_path, caplog):
        caplog.set_level(logging.INFO, logger="asvprep")
        log_skip(tmp_path, "exists. Skip")
        assert "exists. Skip" in caplog.text
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_quiet_with_marker(self, tmp_path, make_config, caplog):
        mark_complete(tmp_path, build_stage_status(2, "protocol", "2026-01-01T00:00:00+00:00", make_config()))
        caplog.set_level(logging.INFO, logger="asvprep")
        log_skip(tmp_path, "exists. Skip")
        assert not any(r.levelno == logging.WARNING for r in caplog.records)
