"""
Stage 4: Data Preparation for train

Responsibilities:
    - Build wav.scp / utt2spk for <trg_dir>/train from the CM train protocol
    - Sort them, derive spk2utt, validate the directory

Invariants:
    - Runs unconditionally when selected; outputs are rebuilt every time
"""

import logging

from asvprep import commands
from asvprep.context import PrepConfig
from asvprep.layout import CANONICAL_FILES
from asvprep.manifest import sort_in_place


logger = logging.getLogger(__name__)

NUMBER = 4
NAME = "train"
TITLE = "Data Preparation for train"


def run(cfg: PrepConfig) -> list[str]:
    """
    Execute stage 4.

    Raises:
        StageFailure: If an external script or the validator fails.
    """
    train_dir = cfg.target.train_dir
    train_dir.mkdir(parents=True, exist_ok=True)

    extra = ["--include_spoof"] if cfg.include_spoof else []
    commands.run_local(
        cfg, "cm_data_prep",
        "--src", cfg.data_dir_prefix,
        "--dst", train_dir,
        *extra,
        stage=NAME,
    )
    for name in ("wav.scp", "utt2spk"):
        sort_in_place(train_dir / name)
    commands.run_local(
        cfg, "utt2spk_to_spk2utt", train_dir / "utt2spk",
        stage=NAME,
        stdout=train_dir / "spk2utt",
    )
    commands.run_local(cfg, "validate_data_dir", "--no-feats", "--no-text", train_dir, stage=NAME)

    logger.info("Stage 4, DONE.")
    return [str(train_dir / name) for name in CANONICAL_FILES]
