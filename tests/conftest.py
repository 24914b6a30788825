"""
asvprep Test Configuration

Provides a miniature ASVspoof 2019 LA corpus and a fake download tool.
"""

import os
import sys
import textwrap
from pathlib import Path

import numpy as np
import pytest

from asvprep import audio
from asvprep.context import PrepConfig


SAMPLE_RATE = 16000

EVAL_UTTS = [f"LA_E_100000{i}" for i in range(1, 7)]
TRAIN_UTTS = [f"LA_T_100000{i}" for i in range(1, 5)]

FEMALE_ENROLL = "LA_0001 LA_E_1000001,LA_E_1000002\nLA_0002 LA_E_1000003\n"
# No trailing newline on purpose
MALE_ENROLL = "LA_0003 LA_E_1000004,LA_E_1000005"

EVAL_TRIALS = (
    "LA_0001 LA_E_1000003 - nontarget\n"
    "LA_0001 LA_E_1000006 - target\n"
    "LA_0002 LA_E_1000006 A13 spoof\n"
    "LA_0003 LA_E_1000001 - nontarget\n"
)

# Deliberately unsorted
TRAIN_PROTOCOL = (
    "LA_0081 LA_T_1000004 - - bonafide\n"
    "LA_0079 LA_T_1000001 - - bonafide\n"
    "LA_0080 LA_T_1000002 - A01 spoof\n"
    "LA_0079 LA_T_1000003 - - bonafide\n"
)


def write_tone(path: Path, duration_sec: float = 0.1, freq: float = 200.0, sr: int = SAMPLE_RATE) -> None:
    """Write a short deterministic tone as FLAC/WAV (by suffix)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    t = np.arange(int(sr * duration_sec)) / sr
    samples = (0.3 * np.sin(2 * np.pi * freq * t)).astype(np.float32)
    audio.write_audio(path, samples, sr)


def build_la_tree(root: Path) -> Path:
    """Create <root>/LA with eval/train audio and protocols. Returns LA dir."""
    la = root / "LA"
    for i, utt in enumerate(EVAL_UTTS):
        write_tone(la / "ASVspoof2019_LA_eval" / "flac" / f"{utt}.flac", freq=200.0 + 50 * i)
    for i, utt in enumerate(TRAIN_UTTS):
        write_tone(la / "ASVspoof2019_LA_train" / "flac" / f"{utt}.flac", freq=300.0 + 50 * i)

    asv = la / "ASVspoof2019_LA_asv_protocols"
    asv.mkdir(parents=True)
    (asv / "ASVspoof2019.LA.asv.eval.female.trn.txt").write_text(FEMALE_ENROLL)
    (asv / "ASVspoof2019.LA.asv.eval.male.trn.txt").write_text(MALE_ENROLL)
    (asv / "ASVspoof2019.LA.asv.eval.gi.trl.txt").write_text(EVAL_TRIALS)

    cm = la / "ASVspoof2019_LA_cm_protocols"
    cm.mkdir(parents=True)
    (cm / "ASVspoof2019.LA.cm.train.trn.txt").write_text(TRAIN_PROTOCOL)
    return la


def build_augmentation_tree(root: Path) -> None:
    """Create extracted musan/ and RIRS_NOISES/ trees (file contents are never read)."""
    def touch(path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"RIFF")

    for category in ("music", "noise", "speech"):
        touch(root / "musan" / category / "src-a" / f"{category}-0001.wav")
        touch(root / "musan" / category / "src-b" / f"{category}-0002.WAV")
        touch(root / "musan" / category / "LICENSE")
    for room in ("smallroom", "mediumroom", "largeroom"):
        for n in (1, 2):
            touch(root / "RIRS_NOISES" / "simulated_rirs" / room / "Room001" / f"{room}-{n}.wav")


FAKE_WGET = '''\
#!{python}
"""Fake wget: serves files from $FAKE_WGET_SOURCE, logs URLs to $FAKE_WGET_LOG."""
import os, shutil, sys
from urllib.parse import urlparse

args = sys.argv[1:]
url = args[-1]
name = os.path.basename(urlparse(url).path)
with open(os.environ["FAKE_WGET_LOG"], "a") as log:
    log.write(url + "\\n")
source = os.path.join(os.environ["FAKE_WGET_SOURCE"], name)
if not os.path.exists(source):
    sys.exit(8)
if "-O" in args:
    dest = args[args.index("-O") + 1]
else:
    dest = os.path.join(args[args.index("-P") + 1], name)
shutil.copyfile(source, dest)
'''


@pytest.fixture
def fake_wget(tmp_path, monkeypatch):
    """
    Put a fake wget first on PATH.

    Returns:
        Dict with "source" (directory served by the tool) and "log"
        (file listing requested URLs).
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    source = tmp_path / "served"
    source.mkdir()
    log = tmp_path / "wget.log"
    log.write_text("")

    script = bin_dir / "wget"
    script.write_text(textwrap.dedent(FAKE_WGET.format(python=sys.executable)))
    script.chmod(0o755)

    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv("FAKE_WGET_SOURCE", str(source))
    monkeypatch.setenv("FAKE_WGET_LOG", str(log))
    return {"source": source, "log": log}


@pytest.fixture
def data_dir_prefix(tmp_path) -> Path:
    """Corpus root holding an extracted miniature LA tree."""
    prefix = tmp_path / "corpus"
    build_la_tree(prefix)
    return prefix


@pytest.fixture
def make_config(tmp_path):
    """Factory for PrepConfig rooted in tmp_path."""
    def _make(**overrides) -> PrepConfig:
        values = {
            "data_dir_prefix": tmp_path / "corpus",
            "trg_dir": tmp_path / "data",
            "python": sys.executable,
        }
        values.update(overrides)
        return PrepConfig(**values)
    return _make
