"""
Stage 5: Download Musan and RIR_NOISES for augmentation

Responsibilities:
    - Fetch rirs_noises.zip and musan.tar.gz (continuable)
    - Extract them into data_dir_prefix
    - Write musan_{music,noise,speech}.scp and rirs.scp under trg_dir

Invariants:
    - Each download and each extraction is skipped independently
    - The scp lists are rebuilt on every run
    - rirs.scp lists mediumroom before smallroom, never largeroom
"""

import logging
from pathlib import Path

from asvprep import commands
from asvprep.context import PrepConfig
from asvprep.layout import MUSAN_CATEGORIES, MUSAN_URL, RIR_ROOMS, RIRS_NOISES_URL
from asvprep.manifest import write_lines
from asvprep.stages.base import StageFailure, build_error, log_skip
from asvprep.status import build_stage_status, mark_complete
from asvprep.utils import now_iso


logger = logging.getLogger(__name__)

NUMBER = 5
NAME = "augmentation"
TITLE = "Download Musan and RIR_NOISES for augmentation."


def find_wavs(directory: Path) -> list[str]:
    """
    Absolute paths of every .wav (any case) below directory, sorted.

    Raises:
        StageFailure: If the directory does not exist.
    """
    if not directory.is_dir():
        error = build_error(
            code="AUGMENT_DIR_MISSING",
            message=f"Directory not found: {directory}",
            stage=NAME,
            detail={"path": str(directory)},
        )
        raise StageFailure(NAME, [error])
    return sorted(
        str(p)
        for p in directory.resolve().rglob("*")
        if p.suffix.lower() == ".wav" and p.is_file()
    )


def _fetch_and_extract(cfg: PrepConfig, url, archive, extracted, extract, label, started_at) -> None:
    if archive.exists() or extracted.exists():
        logger.info("%s exists. Skip download.", label)
    else:
        commands.fetch(cfg, url, NAME, directory=cfg.data_dir_prefix)

    if extracted.exists():
        log_skip(extracted, f"Skip extracting {label}")
    else:
        logger.info("Extracting %s augmentation data.", label)
        extract(archive, cfg.data_dir_prefix, NAME)
        if extracted.is_dir():
            mark_complete(
                extracted,
                build_stage_status(NUMBER, NAME, started_at, cfg, [str(extracted)]),
            )


def run(cfg: PrepConfig) -> list[str]:
    """
    Execute stage 5.

    Raises:
        ToolUnavailable: If a download is needed and the tool is missing.
        StageFailure: If download, extraction or scanning fails.
    """
    started_at = now_iso()
    corpus = cfg.corpus
    target = cfg.target
    corpus.root.mkdir(parents=True, exist_ok=True)

    _fetch_and_extract(
        cfg, RIRS_NOISES_URL, corpus.rirs_zip, corpus.rirs_dir,
        commands.unzip, "RIRS_NOISES", started_at,
    )
    _fetch_and_extract(
        cfg, MUSAN_URL, corpus.musan_tar, corpus.musan_dir,
        commands.untar, "Musan", started_at,
    )

    target.root.mkdir(parents=True, exist_ok=True)
    artifacts = []

    logger.info("Making scp files for musan")
    for category in MUSAN_CATEGORIES:
        scp = target.musan_scp(category)
        write_lines(scp, find_wavs(corpus.musan_category_dir(category)))
        artifacts.append(str(scp))

    logger.info("Making scp files for RIRS_NOISES")
    rirs = []
    for room in RIR_ROOMS:
        rirs.extend(find_wavs(corpus.rir_room_dir(room)))
    write_lines(target.rirs_scp, rirs)
    artifacts.append(str(target.rirs_scp))

    logger.info("Stage 5, DONE.")
    return artifacts
