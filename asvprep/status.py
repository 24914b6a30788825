"""
asvprep Completion Markers.

Responsibilities:
- Build the stage completion marker object
- Validate against schemas/stage_status.schema.json
- Write it as the last action of a stage body
- Tell a complete target directory from an interrupted one

Forbidden:
- No skip decisions (directory existence stays the skip criterion)
"""

import json
from pathlib import Path
from typing import Any

import jsonschema

from asvprep.context import PrepConfig
from asvprep.utils import now_iso, serialize_json


SCHEMA_DIR = Path(__file__).parent / "schemas"
STAGE_STATUS_SCHEMA = SCHEMA_DIR / "stage_status.schema.json"
MARKER_NAME = ".asvprep_complete.json"


def load_schema(path: Path) -> dict[str, Any]:
    with open(path) as f:
        return json.load(f)


def validate_document(document: dict[str, Any], schema_path: Path) -> list[str]:
    """
    Validate a document against one of the bundled schemas.

    Args:
        document: Parsed JSON object.
        schema_path: Path to the schema file.

    Returns:
        List of validation error messages (empty if valid).
    """
    validator = jsonschema.Draft7Validator(load_schema(schema_path))
    errors = []
    for error in validator.iter_errors(document):
        path = ".".join(str(p) for p in error.absolute_path) or "(root)"
        errors.append(f"{path}: {error.message}")
    return errors


def build_stage_status(
    stage: int,
    name: str,
    started_at: str,
    cfg: PrepConfig,
    artifacts: list[str] | None = None,
) -> dict[str, Any]:
    """
    Build a completion marker object.

    Args:
        stage: Stage number
        name: Stage name
        started_at: ISO-8601 timestamp when the stage body started
        cfg: Run configuration (recorded verbatim)
        artifacts: Paths produced by the stage (default: [])
    """
    return {
        "stage": stage,
        "name": name,
        "version": "v1",
        "started_at": started_at,
        "completed_at": now_iso(),
        "artifacts": [] if artifacts is None else list(artifacts),
        "config": cfg.to_dict(),
    }


def mark_complete(target_dir: Path, status: dict[str, Any]) -> Path:
    """
    Write the completion marker into target_dir.

    Raises:
        ValueError: If the status object does not match the schema.
    """
    errors = validate_document(status, STAGE_STATUS_SCHEMA)
    if errors:
        raise ValueError(f"Invalid stage status: {errors}")
    marker = target_dir / MARKER_NAME
    marker.write_text(serialize_json(status))
    return marker


def is_marked_complete(target_dir: Path) -> bool:
    return (target_dir / MARKER_NAME).is_file()


def read_marker(target_dir: Path) -> dict[str, Any]:
    return json.loads((target_dir / MARKER_NAME).read_text())
