"""
asvprep Pipeline Orchestrator

PIPELINE STAGES (FIXED ORDER):

    1. Download LA.zip            → asvprep.stages.download
    2. Protocol modification      → asvprep.stages.protocol
    3. Kaldi test dir + trials    → asvprep.stages.trials
    4. Kaldi train dir            → asvprep.stages.train
    5. Augmentation corpora       → asvprep.stages.augmentation

INVARIANTS:
    - Stages execute in ascending number order
    - Only stages inside [stage, stop_stage] are imported or run
    - Stages never call each other (only orchestrator sequences)
    - Each stage exposes exactly one entrypoint: run(cfg) -> artifacts
    - Pipeline stops on first stage failure, nothing is rolled back
"""

import importlib
import logging
import time

from asvprep.context import PrepConfig
from asvprep.stages.base import StageFailure


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0


# Stage registry: number -> (name, module_path)
STAGES = {
    1: ("download", "asvprep.stages.download"),
    2: ("protocol", "asvprep.stages.protocol"),
    3: ("trials", "asvprep.stages.trials"),
    4: ("train", "asvprep.stages.train"),
    5: ("augmentation", "asvprep.stages.augmentation"),
}


def selected_stages(cfg: PrepConfig) -> list[int]:
    """Stage numbers to run, ascending."""
    return [number for number in sorted(STAGES) if cfg.selects(number)]


def run_pipeline(cfg: PrepConfig) -> int:
    """
    Execute the selected stages in order.

    Args:
        cfg: Immutable run configuration.

    Returns:
        0 if all selected stages succeeded, otherwise the exit status
        carried by the failing stage.
    """
    started = time.monotonic()

    for number in selected_stages(cfg):
        name, module_path = STAGES[number]
        module = importlib.import_module(module_path)
        logger.info("stage %d: %s", number, module.TITLE)
        try:
            module.run(cfg)
        except StageFailure as e:
            for error in e.errors:
                logger.error("[%s] %s: %s", error["stage"], error["code"], error["message"])
            logger.error("Stage %d (%s) failed with exit status %d", number, name, e.exit_code)
            return e.exit_code

    elapsed = int(time.monotonic() - started)
    logger.info("Successfully finished. [elapsed=%ds]", elapsed)
    return EXIT_SUCCESS
