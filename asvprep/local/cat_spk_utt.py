#!/usr/bin/env python3
"""
Concatenate each speaker's enrollment utterances into one recording.

Usage:
    python -m asvprep.local.cat_spk_utt --in_dir FLAC_DIR --in_file trn.txt --out_dir OUT_DIR

Input lines look like ``LA_0001 LA_E_1000001,LA_E_1000002,...``. For every
speaker, <in_dir>/<utt>.flac files are joined in listed order and written
to <out_dir>/<speaker>.flac. A speaker listed on several lines gets all of
its utterances, in file order.
"""

import argparse
import sys
from pathlib import Path

from asvprep.audio import concatenate, write_audio
from asvprep.manifest import read_lines


def parse_enrollment(path: Path) -> dict[str, list[str]]:
    """Map speaker -> enrollment utterance ids, in file order."""
    enroll: dict[str, list[str]] = {}
    for line in read_lines(path):
        fields = line.split()
        if len(fields) < 2:
            raise ValueError(f"Malformed enrollment line: {line!r}")
        spk = fields[0]
        utts = [u for field in fields[1:] for u in field.split(",") if u]
        enroll.setdefault(spk, []).extend(utts)
    return enroll


def cat_speakers(in_dir: Path, enroll: dict[str, list[str]], out_dir: Path) -> list[Path]:
    """
    Write one concatenated .flac per speaker.

    Raises:
        FileNotFoundError: If an enrollment utterance is missing.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for spk, utts in enroll.items():
        paths = [in_dir / f"{utt}.flac" for utt in utts]
        for path in paths:
            if not path.is_file():
                raise FileNotFoundError(f"Enrollment utterance not found: {path}")
        samples, sr = concatenate(paths)
        out_path = out_dir / f"{spk}.flac"
        write_audio(out_path, samples, sr)
        written.append(out_path)
    return written


def main():
    parser = argparse.ArgumentParser(
        description="Concatenate per-speaker enrollment utterances"
    )
    parser.add_argument("--in_dir", type=Path, required=True, help="Directory of eval .flac files")
    parser.add_argument("--in_file", type=Path, required=True, help="Enrollment list (trn.txt)")
    parser.add_argument("--out_dir", type=Path, required=True, help="Output directory")
    args = parser.parse_args()

    try:
        enroll = parse_enrollment(args.in_file)
        written = cat_speakers(args.in_dir, enroll, args.out_dir)
    except (OSError, ValueError) as e:
        sys.exit(f"Error: {e}")

    print(f"Wrote {len(written)} enrollment recordings to {args.out_dir}", file=sys.stderr)


if __name__ == "__main__":
    main()
