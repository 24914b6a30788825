"""
asvprep Audio Utilities

Deterministic primitives used by the enrollment concatenation script.

Library Stack:
    - soundfile: FLAC/WAV I/O (libsndfile-backed)
    - numpy: Array operations
    - scipy.signal.resample_poly: Deterministic resampling

INVARIANTS:
    - Same inputs → identical output
    - Multi-channel input is downmixed to mono by mean
    - Output is PCM 16-bit, hard clipped to [-1, 1]
"""

from math import gcd
from pathlib import Path

import numpy as np
import soundfile as sf
from scipy.signal import resample_poly


def read_audio(path: Path) -> tuple[np.ndarray, int]:
    """
    Read an audio file as mono float32.

    Returns:
        Tuple of (samples in [-1, 1], sample_rate)
    """
    samples, sr = sf.read(path, dtype="float32", always_2d=False)
    if samples.ndim > 1:
        samples = np.mean(samples, axis=1).astype(np.float32)
    return samples, sr


def write_audio(path: Path, samples: np.ndarray, sample_rate: int) -> None:
    """
    Write samples as PCM 16-bit; the container follows the file suffix.

    Note:
        - Hard clips to [-1, 1] before writing
        - No dithering
    """
    clipped = np.clip(samples, -1.0, 1.0)
    sf.write(path, clipped, sample_rate, subtype="PCM_16")


def resample(samples: np.ndarray, sr_from: int, sr_to: int) -> np.ndarray:
    """Resample with integer up/down factors (no-op when rates match)."""
    if sr_from == sr_to:
        return samples
    g = gcd(sr_from, sr_to)
    return resample_poly(samples, sr_to // g, sr_from // g).astype(np.float32)


def concatenate(paths: list[Path]) -> tuple[np.ndarray, int]:
    """
    Concatenate recordings end to end.

    The first recording's sample rate wins; later ones are resampled to it.

    Raises:
        ValueError: If paths is empty.
    """
    if not paths:
        raise ValueError("Nothing to concatenate")
    pieces = []
    target_sr = None
    for path in paths:
        samples, sr = read_audio(path)
        if target_sr is None:
            target_sr = sr
        pieces.append(resample(samples, sr, target_sr))
    return np.concatenate(pieces), target_sr
