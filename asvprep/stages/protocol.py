"""
Stage 2: Protocol modification for conformity with ESPnet

Responsibilities:
    - Merge female and male eval enrollment lists into LA_asv_eval/trn.txt
    - Build one concatenated enrollment recording per speaker
    - Gather every eval .flac next to the concatenated recordings
    - Rewrite the ASV trial protocol into LA_asv_eval/protocol.txt

Invariants:
    - trn.txt holds the female lines first, then the male lines
    - The whole stage is skipped once LA_asv_eval/ exists
"""

import logging
import shutil

from asvprep import commands
from asvprep.context import PrepConfig
from asvprep.stages.base import StageFailure, build_error, log_skip
from asvprep.status import build_stage_status, mark_complete
from asvprep.utils import now_iso


logger = logging.getLogger(__name__)

NUMBER = 2
NAME = "protocol"
TITLE = "Protocol modification for conformity with ESPnet"


def merge_enrollment_lists(sources, dest) -> int:
    """
    Concatenate enrollment list files into dest, in the given order.

    A missing final newline in one source never glues two records together.

    Returns:
        Number of lines written.
    """
    count = 0
    with open(dest, "w", encoding="utf-8") as out:
        for source in sources:
            with open(source, encoding="utf-8") as f:
                for line in f:
                    out.write(line if line.endswith("\n") else line + "\n")
                    count += 1
    return count


def copy_flac_files(src_dir, dest_dir) -> int:
    """Copy every .flac below src_dir (flattened) into dest_dir."""
    dest_dir.mkdir(parents=True, exist_ok=True)
    copied = 0
    for path in sorted(src_dir.rglob("*.flac")):
        shutil.copy2(path, dest_dir / path.name)
        copied += 1
    return copied


def run(cfg: PrepConfig) -> list[str]:
    """
    Execute stage 2.

    Raises:
        StageFailure: If an input is missing or an external script fails.
    """
    started_at = now_iso()
    corpus = cfg.corpus

    if corpus.asv_eval_dir.exists():
        log_skip(corpus.asv_eval_dir, "LA_asv_eval exists. Skipping protocol modification")
        logger.info("Stage 2, DONE.")
        return [str(corpus.asv_eval_dir)]

    missing = [
        str(p)
        for p in (corpus.female_enroll, corpus.male_enroll, corpus.eval_trials, corpus.eval_flac_dir)
        if not p.exists()
    ]
    if missing:
        error = build_error(
            code="PROTOCOL_INPUT_MISSING",
            message="LA corpus is incomplete; run stage 1 first",
            stage=NAME,
            detail={"missing": missing},
        )
        raise StageFailure(NAME, [error])

    corpus.asv_eval_dir.mkdir(parents=True)

    # Combine male and female eval speaker enrollment utterances to one new file
    n_lines = merge_enrollment_lists(
        [corpus.female_enroll, corpus.male_enroll], corpus.asv_eval_enroll
    )
    logger.info("Merged %d enrollment lines into %s", n_lines, corpus.asv_eval_enroll)

    # Concatenated enrollment utterances approximate an averaged speaker embedding
    commands.run_local(
        cfg, "cat_spk_utt",
        "--in_dir", corpus.eval_flac_dir,
        "--in_file", corpus.asv_eval_enroll,
        "--out_dir", corpus.asv_eval_flac_dir,
        stage=NAME,
    )

    logger.info("Making single dir for eval...")
    n_copied = copy_flac_files(corpus.eval_flac_dir, corpus.asv_eval_flac_dir)
    logger.info("Copied %d eval files", n_copied)

    commands.run_local(
        cfg, "convert_protocol",
        "--in_file", corpus.eval_trials,
        "--out_file", corpus.asv_eval_protocol,
        stage=NAME,
    )

    artifacts = [
        str(corpus.asv_eval_enroll),
        str(corpus.asv_eval_flac_dir),
        str(corpus.asv_eval_protocol),
    ]
    mark_complete(corpus.asv_eval_dir, build_stage_status(NUMBER, NAME, started_at, cfg, artifacts))
    logger.info("Stage 2, DONE.")
    return artifacts
