"""
asvprep PrepConfig - Pipeline execution configuration.

Responsibilities:
- Hold all options and roots for a preparation run
- Serialization for status files and debugging

Invariants:
- Immutable during pipeline execution
- Passed explicitly to every stage (no process-wide state)
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from asvprep.layout import CorpusLayout, TargetLayout


DEFAULT_STAGE = 1
DEFAULT_STOP_STAGE = 100000
DEFAULT_N_PROC = 8
DEFAULT_TRG_DIR = "data"


@dataclass(frozen=True)
class PrepConfig:
    """Configuration passed to all pipeline stages."""

    data_dir_prefix: Path
    trg_dir: Path = Path(DEFAULT_TRG_DIR)
    stage: int = DEFAULT_STAGE
    stop_stage: int = DEFAULT_STOP_STAGE
    # Accepted and recorded, not consumed by any stage.
    n_proc: int = DEFAULT_N_PROC
    include_spoof: bool = False
    download_tool: str = "wget"
    python: str = field(default=sys.executable)

    @property
    def corpus(self) -> CorpusLayout:
        return CorpusLayout(self.data_dir_prefix)

    @property
    def target(self) -> TargetLayout:
        return TargetLayout(self.trg_dir)

    def selects(self, stage_number: int) -> bool:
        """True if stage_number falls inside [stage, stop_stage]."""
        return self.stage <= stage_number <= self.stop_stage

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "data_dir_prefix": str(self.data_dir_prefix),
            "trg_dir": str(self.trg_dir),
            "stage": self.stage,
            "stop_stage": self.stop_stage,
            "n_proc": self.n_proc,
            "include_spoof": self.include_spoof,
            "download_tool": self.download_tool,
            "python": self.python,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PrepConfig":
        """Deserialize from dictionary (missing keys take defaults)."""
        return cls(
            data_dir_prefix=Path(data["data_dir_prefix"]),
            trg_dir=Path(data.get("trg_dir", DEFAULT_TRG_DIR)),
            stage=int(data.get("stage", DEFAULT_STAGE)),
            stop_stage=int(data.get("stop_stage", DEFAULT_STOP_STAGE)),
            n_proc=int(data.get("n_proc", DEFAULT_N_PROC)),
            include_spoof=bool(data.get("include_spoof", False)),
            download_tool=data.get("download_tool", "wget"),
            python=data.get("python", sys.executable),
        )
