"""
asvprep Layout - Corpus URLs and on-disk paths.

Responsibilities:
- Download URLs for LA, MUSAN and RIRS_NOISES
- Paths inside the corpus root (data_dir_prefix)
- Paths inside the canonical-layout root (trg_dir)

Forbidden:
- No filesystem access (pure path arithmetic)
"""

from dataclasses import dataclass
from pathlib import Path


LA_URL = "https://datashare.ed.ac.uk/bitstream/handle/10283/3336/LA.zip?sequence=3&isAllowed=y"
RIRS_NOISES_URL = "http://www.openslr.org/resources/28/rirs_noises.zip"
MUSAN_URL = "http://www.openslr.org/resources/17/musan.tar.gz"

# Order matters: rirs.scp lists mediumroom entries before smallroom ones.
# largeroom is left out on purpose (same setup as Kaldi and VoxCeleb_trainer).
RIR_ROOMS = ("mediumroom", "smallroom")
MUSAN_CATEGORIES = ("music", "noise", "speech")

CANONICAL_FILES = ("wav.scp", "utt2spk", "spk2utt")
TRIAL_FILES = ("trial.scp", "trial2.scp", "trial_label")


@dataclass(frozen=True)
class CorpusLayout:
    """Paths under data_dir_prefix."""

    root: Path

    # --- Stage 1: LA ---------------------------------------------------------

    @property
    def la_zip(self) -> Path:
        return self.root / "LA.zip"

    @property
    def la_dir(self) -> Path:
        return self.root / "LA"

    @property
    def asv_protocols_dir(self) -> Path:
        return self.la_dir / "ASVspoof2019_LA_asv_protocols"

    @property
    def cm_protocols_dir(self) -> Path:
        return self.la_dir / "ASVspoof2019_LA_cm_protocols"

    @property
    def eval_flac_dir(self) -> Path:
        return self.la_dir / "ASVspoof2019_LA_eval" / "flac"

    @property
    def train_flac_dir(self) -> Path:
        return self.la_dir / "ASVspoof2019_LA_train" / "flac"

    @property
    def female_enroll(self) -> Path:
        return self.asv_protocols_dir / "ASVspoof2019.LA.asv.eval.female.trn.txt"

    @property
    def male_enroll(self) -> Path:
        return self.asv_protocols_dir / "ASVspoof2019.LA.asv.eval.male.trn.txt"

    @property
    def eval_trials(self) -> Path:
        return self.asv_protocols_dir / "ASVspoof2019.LA.asv.eval.gi.trl.txt"

    @property
    def train_protocol(self) -> Path:
        return self.cm_protocols_dir / "ASVspoof2019.LA.cm.train.trn.txt"

    # --- Stage 2: normalized eval dir ---------------------------------------

    @property
    def asv_eval_dir(self) -> Path:
        return self.root / "LA_asv_eval"

    @property
    def asv_eval_flac_dir(self) -> Path:
        return self.asv_eval_dir / "flac"

    @property
    def asv_eval_enroll(self) -> Path:
        return self.asv_eval_dir / "trn.txt"

    @property
    def asv_eval_protocol(self) -> Path:
        return self.asv_eval_dir / "protocol.txt"

    # --- Stage 5: augmentation corpora --------------------------------------

    @property
    def rirs_zip(self) -> Path:
        return self.root / "rirs_noises.zip"

    @property
    def rirs_dir(self) -> Path:
        return self.root / "RIRS_NOISES"

    @property
    def musan_tar(self) -> Path:
        return self.root / "musan.tar.gz"

    @property
    def musan_dir(self) -> Path:
        return self.root / "musan"

    def rir_room_dir(self, room: str) -> Path:
        return self.rirs_dir / "simulated_rirs" / room

    def musan_category_dir(self, category: str) -> Path:
        return self.musan_dir / category


@dataclass(frozen=True)
class TargetLayout:
    """Paths under trg_dir (canonical layout)."""

    root: Path

    @property
    def test_dir(self) -> Path:
        return self.root / "test"

    @property
    def train_dir(self) -> Path:
        return self.root / "train"

    @property
    def rirs_scp(self) -> Path:
        return self.root / "rirs.scp"

    def musan_scp(self, category: str) -> Path:
        return self.root / f"musan_{category}.scp"
