"""
asvprep External Commands.

Responsibilities:
- Run external tools (wget, unzip, tar) and asvprep.local scripts
- Turn non-zero exits into StageFailure carrying the command's status
- Check tool availability before any network access

Invariants:
- Every call blocks until the child exits (no timeouts)
- The child's own diagnostics go straight to the terminal
- Nothing is retried
"""

import logging
import shutil
import subprocess
from pathlib import Path

from asvprep.context import PrepConfig
from asvprep.stages.base import StageFailure, ToolUnavailable, build_error


logger = logging.getLogger(__name__)

LOCAL_PACKAGE = "asvprep.local"


def require_tool(tool: str, stage: str) -> str:
    """
    Resolve an executable on PATH.

    Returns:
        Absolute path of the tool.

    Raises:
        ToolUnavailable: If the tool is missing or not executable.
    """
    resolved = shutil.which(tool)
    if resolved is None:
        logger.error("Cannot execute %s. %s is required for download.", tool, tool)
        raise ToolUnavailable(stage, tool)
    return resolved


def run_command(argv: list[str], stage: str, stdout: Path | None = None) -> None:
    """
    Run a command to completion.

    Args:
        argv: Command and arguments
        stage: Stage name for error reporting
        stdout: Optional file receiving the command's standard output

    Raises:
        ToolUnavailable: If argv[0] cannot be executed
        StageFailure: If the command exits non-zero
    """
    argv = [str(a) for a in argv]
    logger.debug("Running: %s", " ".join(argv))
    try:
        if stdout is None:
            result = subprocess.run(argv)
        else:
            with open(stdout, "w") as out:
                result = subprocess.run(argv, stdout=out)
    except FileNotFoundError:
        raise ToolUnavailable(stage, argv[0])

    if result.returncode != 0:
        error = build_error(
            code="COMMAND_FAILED",
            message=f"Command exited with status {result.returncode}",
            stage=stage,
            detail={"argv": argv, "returncode": result.returncode},
        )
        # Killed by a signal: report it the way a shell would (128 + signum)
        exit_code = result.returncode if result.returncode > 0 else 128 - result.returncode
        raise StageFailure(stage, [error], exit_code=exit_code)


def run_local(cfg: PrepConfig, script: str, *args, stage: str, stdout: Path | None = None) -> None:
    """Run one of the asvprep.local scripts in a separate interpreter."""
    run_command([cfg.python, "-m", f"{LOCAL_PACKAGE}.{script}", *args], stage, stdout=stdout)


def fetch(cfg: PrepConfig, url: str, stage: str, output: Path | None = None,
          directory: Path | None = None) -> None:
    """
    Download url with the configured tool.

    `output` names the file (``-O``); `directory` downloads into a folder
    with a continuable fetch (``-P ... -c``).
    """
    tool = require_tool(cfg.download_tool, stage)
    if output is not None:
        run_command([tool, "-O", output, url], stage)
    elif directory is not None:
        run_command([tool, "-P", directory, "-c", url], stage)
    else:
        raise ValueError("fetch() needs output or directory")


def unzip(archive: Path, dest: Path, stage: str) -> None:
    run_command(["unzip", "-q", archive, "-d", dest], stage)


def untar(archive: Path, dest: Path, stage: str) -> None:
    run_command(["tar", "-zxf", archive, "-C", dest], stage)
