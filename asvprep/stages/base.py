"""
asvprep Stage Base Utilities.

Responsibilities:
- StageFailure exception for pipeline control flow
- Error object builder
- Skip logging for guarded target directories

Invariants:
- A StageFailure carries the exit status the run must end with
- An existing target directory is never re-entered, complete or not
"""

import logging
from pathlib import Path

from asvprep.status import MARKER_NAME, is_marked_complete


logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_TOOL_UNAVAILABLE = 3


class StageFailure(Exception):
    """
    Raised when a stage fails.

    The orchestrator catches this to stop pipeline execution and the CLI
    exits with `exit_code`. Nothing the stage created is removed.
    """

    def __init__(self, stage: str, errors: list[dict], exit_code: int = EXIT_FAILURE):
        self.stage = stage
        self.errors = errors
        self.exit_code = exit_code
        super().__init__(f"Stage '{stage}' failed")


class ToolUnavailable(StageFailure):
    """Raised when a required external tool cannot be executed."""

    def __init__(self, stage: str, tool: str):
        error = build_error(
            code="TOOL_UNAVAILABLE",
            message=f"Cannot execute {tool}. {tool} is required.",
            stage=stage,
            detail={"tool": tool},
        )
        super().__init__(stage, [error], exit_code=EXIT_TOOL_UNAVAILABLE)
        self.tool = tool


def build_error(
    code: str,
    message: str,
    stage: str,
    detail: dict | None = None,
) -> dict:
    """
    Build structured error object.

    Args:
        code: Error code (e.g., "COMMAND_FAILED")
        message: Human-readable error message
        stage: Stage name where error occurred
        detail: Optional additional details

    Returns:
        Structured error dictionary.
    """
    error: dict = {
        "code": code,
        "message": message,
        "stage": stage,
    }
    if detail is not None:
        error["detail"] = detail
    return error


def log_skip(target_dir: Path, message: str) -> None:
    """Log a skipped step; warn when the directory has no completion marker."""
    logger.info(message)
    if not is_marked_complete(target_dir):
        logger.warning(
            "%s has no %s; it may be left over from an interrupted run. "
            "Remove it to rebuild.",
            target_dir,
            MARKER_NAME,
        )
