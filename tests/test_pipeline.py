"""
asvprep Pipeline Tests

Stage selection, ordering, failure propagation.
"""

import logging

import pytest

from asvprep import pipeline
from asvprep.stages import augmentation, download, protocol, train, trials
from asvprep.stages.base import StageFailure, build_error


STAGE_MODULES = [download, protocol, trials, train, augmentation]


@pytest.fixture
def recorded_stages(monkeypatch):
    """Replace every stage body with a recorder; returns the call list."""
    calls = []
    for module in STAGE_MODULES:
        def fake_run(cfg, _number=module.NUMBER):
            calls.append(_number)
            return []
        monkeypatch.setattr(module, "run", fake_run)
    return calls


class TestStageSelection:
    """[stage, stop_stage] filtering."""

    @pytest.mark.parametrize(
        "stage,stop_stage,expected",
        [
            (1, 100000, [1, 2, 3, 4, 5]),
            (2, 3, [2, 3]),
            (4, 4, [4]),
            (5, 1, []),
            (6, 100000, []),
            (-3, 0, []),
        ],
    )
    def test_selected_stages(self, make_config, stage, stop_stage, expected):
        cfg = make_config(stage=stage, stop_stage=stop_stage)
        assert pipeline.selected_stages(cfg) == expected

    def test_registry_numbers_match_modules(self):
        for module in STAGE_MODULES:
            name, module_path = pipeline.STAGES[module.NUMBER]
            assert module.NAME == name
            assert module.__name__ == module_path


class TestRunPipeline:
    """run_pipeline execution semantics."""

    def test_runs_in_ascending_order(self, make_config, recorded_stages):
        assert pipeline.run_pipeline(make_config(stage=2, stop_stage=5)) == 0
        assert recorded_stages == [2, 3, 4, 5]

    def test_out_of_range_stages_not_run(self, make_config, recorded_stages):
        assert pipeline.run_pipeline(make_config(stage=3, stop_stage=3)) == 0
        assert recorded_stages == [3]

    def test_out_of_range_has_no_side_effects_or_stage_logs(self, tmp_path, make_config, caplog):
        caplog.set_level(logging.INFO, logger="asvprep")
        assert pipeline.run_pipeline(make_config(stage=6, stop_stage=10)) == 0
        assert list(tmp_path.iterdir()) == []
        messages = [r.getMessage() for r in caplog.records]
        assert not any(m.startswith("stage ") for m in messages)
        assert any("Successfully finished" in m for m in messages)

    def test_failure_stops_and_propagates_exit_code(self, make_config, recorded_stages, monkeypatch):
        def failing_run(cfg):
            recorded_stages.append(4)
            error = build_error("COMMAND_FAILED", "boom", "train")
            raise StageFailure("train", [error], exit_code=7)

        monkeypatch.setattr(train, "run", failing_run)
        assert pipeline.run_pipeline(make_config(stage=3, stop_stage=5)) == 7
        assert recorded_stages == [3, 4]

    def test_failure_is_logged(self, make_config, recorded_stages, monkeypatch, caplog):
        def failing_run(cfg):
            raise StageFailure("protocol", [build_error("PROTOCOL_INPUT_MISSING", "gone", "protocol")])

        monkeypatch.setattr(protocol, "run", failing_run)
        caplog.set_level(logging.INFO, logger="asvprep")
        assert pipeline.run_pipeline(make_config(stage=2, stop_stage=2)) == 1
        assert "PROTOCOL_INPUT_MISSING" in caplog.text
        assert "Successfully finished" not in caplog.text

    def test_stage_title_logged_before_body(self, make_config, recorded_stages, caplog):
        caplog.set_level(logging.INFO, logger="asvprep")
        pipeline.run_pipeline(make_config(stage=4, stop_stage=4))
        assert "stage 4: Data Preparation for train" in caplog.text
