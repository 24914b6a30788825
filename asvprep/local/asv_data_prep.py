#!/usr/bin/env python3
"""
Build a Kaldi-style directory from a folder of .flac files.

Usage:
    python -m asvprep.local.asv_data_prep --src LA_asv_eval/flac --dst data/test

Each file becomes one utterance keyed by its stem and is its own speaker,
so wav.scp, utt2spk and spk2utt share the same key set.
"""

import argparse
import sys
from pathlib import Path

from asvprep.manifest import write_map


def collect(src: Path) -> list[tuple[str, Path]]:
    """
    (utt id, absolute path) for every .flac directly or recursively below src.

    Raises:
        ValueError: If two files share a stem.
    """
    entries: dict[str, Path] = {}
    for path in sorted(src.resolve().rglob("*.flac")):
        if path.stem in entries:
            raise ValueError(f"Duplicate utterance id {path.stem!r}: {entries[path.stem]} and {path}")
        entries[path.stem] = path
    return sorted(entries.items())


def prepare(src: Path, dst: Path) -> int:
    entries = collect(src)
    dst.mkdir(parents=True, exist_ok=True)
    write_map(dst / "wav.scp", {utt: str(path) for utt, path in entries})
    for name in ("utt2spk", "spk2utt"):
        write_map(dst / name, {utt: utt for utt, _ in entries})
    return len(entries)


def main():
    parser = argparse.ArgumentParser(description="Kaldi-style files for ASV evaluation")
    parser.add_argument("--src", type=Path, required=True, help="Directory of .flac files")
    parser.add_argument("--dst", type=Path, required=True, help="Output data directory")
    args = parser.parse_args()

    if not args.src.is_dir():
        sys.exit(f"Error: Source directory not found: {args.src}")
    try:
        n = prepare(args.src, args.dst)
    except (OSError, ValueError) as e:
        sys.exit(f"Error: {e}")
    if n == 0:
        sys.exit(f"Error: No .flac files found in {args.src}")

    print(f"Wrote {n} utterances to {args.dst}", file=sys.stderr)


if __name__ == "__main__":
    main()
