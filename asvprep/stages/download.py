"""
Stage 1: Download ASVspoof LA.zip

Responsibilities:
    - Require the download tool before touching the network
    - Fetch LA.zip into data_dir_prefix
    - Extract it next to the archive and delete the archive

Invariants:
    - Download is skipped when LA.zip or LA/ already exists
    - Extraction is skipped when LA/ already exists
    - LA.zip is only deleted after a successful extraction
"""

import logging

from asvprep import commands
from asvprep.context import PrepConfig
from asvprep.layout import LA_URL
from asvprep.stages.base import StageFailure, build_error, log_skip
from asvprep.status import build_stage_status, mark_complete
from asvprep.utils import now_iso


logger = logging.getLogger(__name__)

NUMBER = 1
NAME = "download"
TITLE = "Download ASVspoof LA.zip"


def run(cfg: PrepConfig) -> list[str]:
    """
    Execute stage 1.

    Returns:
        Paths of the artifacts this stage is responsible for.

    Raises:
        ToolUnavailable: If the download tool is missing (exit code 3).
        StageFailure: If download or extraction fails.
    """
    started_at = now_iso()
    corpus = cfg.corpus
    commands.require_tool(cfg.download_tool, NAME)
    corpus.root.mkdir(parents=True, exist_ok=True)

    if corpus.la_zip.exists() or corpus.la_dir.exists():
        logger.info("LA.zip or LA exists. Skip downloading ASVspoof LA.zip")
    else:
        logger.info("Downloading ASVspoof LA.zip...")
        commands.fetch(cfg, LA_URL, NAME, output=corpus.la_zip)

    if corpus.la_dir.exists():
        log_skip(corpus.la_dir, "LA exists. Skip unzipping ASVspoof LA.zip")
    else:
        logger.info("Unzipping LA.zip...")
        commands.unzip(corpus.la_zip, corpus.root, NAME)
        if not corpus.la_dir.is_dir():
            error = build_error(
                code="EXTRACT_MISSING_DIR",
                message="LA.zip did not contain an LA/ directory",
                stage=NAME,
                detail={"archive": str(corpus.la_zip)},
            )
            raise StageFailure(NAME, [error])
        corpus.la_zip.unlink()
        mark_complete(
            corpus.la_dir,
            build_stage_status(NUMBER, NAME, started_at, cfg, [str(corpus.la_dir)]),
        )

    logger.info("Stage 1, DONE.")
    return [str(corpus.la_dir)]
