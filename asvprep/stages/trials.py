"""
Stage 3: Making Kaldi style files and trials

Responsibilities:
    - Build wav.scp / utt2spk / spk2utt for <trg_dir>/test from LA_asv_eval/flac
    - Sort them by key and validate the directory
    - Rewrite protocol.txt into trial files keyed against wav.scp

Invariants:
    - The whole stage is skipped once <trg_dir>/test exists
    - A directory that fails validation aborts the run
"""

import logging

from asvprep import commands
from asvprep.context import PrepConfig
from asvprep.layout import CANONICAL_FILES, TRIAL_FILES
from asvprep.manifest import sort_in_place
from asvprep.stages.base import log_skip
from asvprep.status import build_stage_status, mark_complete
from asvprep.utils import now_iso


logger = logging.getLogger(__name__)

NUMBER = 3
NAME = "trials"
TITLE = "Making Kaldi style files and trials"


def run(cfg: PrepConfig) -> list[str]:
    """
    Execute stage 3.

    Raises:
        StageFailure: If an external script or the validator fails.
    """
    started_at = now_iso()
    corpus = cfg.corpus
    test_dir = cfg.target.test_dir

    if test_dir.exists():
        log_skip(test_dir, f"{test_dir} exists. Skip making Kaldi style files and trials")
        logger.info("Stage 3, DONE.")
        return [str(test_dir)]

    logger.info("Making Kaldi style files and making trials")
    test_dir.mkdir(parents=True)

    commands.run_local(
        cfg, "asv_data_prep",
        "--src", corpus.asv_eval_flac_dir,
        "--dst", test_dir,
        stage=NAME,
    )
    for name in CANONICAL_FILES:
        sort_in_place(test_dir / name)
    commands.run_local(cfg, "validate_data_dir", "--no-feats", "--no-text", test_dir, stage=NAME)

    logger.info("Making the trial compatible with ESPnet")
    commands.run_local(
        cfg, "convert_trial",
        "--trial", corpus.asv_eval_protocol,
        "--scp", test_dir / "wav.scp",
        "--out", test_dir,
        stage=NAME,
    )

    artifacts = [str(test_dir / name) for name in CANONICAL_FILES + TRIAL_FILES]
    mark_complete(test_dir, build_stage_status(NUMBER, NAME, started_at, cfg, artifacts))
    logger.info("Stage 3, DONE.")
    return artifacts
