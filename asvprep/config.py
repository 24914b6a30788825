"""
asvprep Configuration Resolution.

Responsibilities:
- Load and validate the optional JSON config file
- Resolve data_dir_prefix from options and environment
- Merge command line > config file > defaults into a PrepConfig

Forbidden:
- No filesystem writes
- No stage logic
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

from asvprep.context import (
    DEFAULT_N_PROC,
    DEFAULT_STAGE,
    DEFAULT_STOP_STAGE,
    DEFAULT_TRG_DIR,
    PrepConfig,
)
from asvprep.status import SCHEMA_DIR, validate_document


logger = logging.getLogger(__name__)

CONFIG_SCHEMA = SCHEMA_DIR / "config.schema.json"
FALLBACK_DATA_DIR = "downloads"


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Read a JSON config file and validate it against config.schema.json.

    Raises:
        ConfigError: If the file is missing or unreadable, not UTF-8 JSON,
            or violates the schema.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}")
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file {path} is not UTF-8: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e.strerror or e}")

    errors = validate_document(data, CONFIG_SCHEMA)
    if errors:
        raise ConfigError(f"Invalid config {path}: " + "; ".join(errors))
    return data


def resolve_data_dir_prefix(value: str | None, env: Mapping[str, str]) -> Path:
    """
    Pick the corpus root.

    Order: explicit value, $ASVSPOOF_LA, $MAIN_ROOT/egs2/asvspoof, ./downloads.
    """
    if value:
        logger.info("Root dir set to %s", value)
        return Path(value)
    if env.get("ASVSPOOF_LA"):
        logger.info("Root dir set to %s (ASVSPOOF_LA)", env["ASVSPOOF_LA"])
        return Path(env["ASVSPOOF_LA"])
    if env.get("MAIN_ROOT"):
        root = Path(env["MAIN_ROOT"]) / "egs2" / "asvspoof"
    else:
        root = Path(FALLBACK_DATA_DIR)
    logger.info("Root dir for dataset not defined, setting to %s", root)
    return root


def build_config(
    cli_values: Mapping[str, Any],
    file_values: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> PrepConfig:
    """
    Merge option sources into a PrepConfig.

    Args:
        cli_values: Options given on the command line (None = not given)
        file_values: Options from the config file
        env: Environment (default: os.environ)
    """
    env = os.environ if env is None else env
    file_values = file_values or {}

    def pick(key: str, default: Any) -> Any:
        if cli_values.get(key) is not None:
            return cli_values[key]
        if file_values.get(key) is not None:
            return file_values[key]
        return default

    return PrepConfig(
        data_dir_prefix=resolve_data_dir_prefix(pick("data_dir_prefix", None), env),
        trg_dir=Path(pick("trg_dir", DEFAULT_TRG_DIR)),
        stage=int(pick("stage", DEFAULT_STAGE)),
        stop_stage=int(pick("stop_stage", DEFAULT_STOP_STAGE)),
        n_proc=int(pick("n_proc", DEFAULT_N_PROC)),
        include_spoof=bool(pick("include_spoof", False)),
        download_tool=pick("download_tool", "wget"),
    )
