#!/usr/bin/env python3
"""
Validate a Kaldi-style data directory.

Usage:
    python -m asvprep.local.validate_data_dir [--no-feats] [--no-text] DATA_DIR

Checks:
    - wav.scp, utt2spk and spk2utt exist and are non-empty
    - every line has a key and a value, keys are unique and sorted (C order)
    - wav.scp and utt2spk list the same utterances
    - utt2spk is also sorted by speaker (speaker ids prefix utterance ids)
    - spk2utt is exactly the inverse of utt2spk
    - text / feats.scp exist and match utt2spk unless disabled

Exits 1 and prints every problem found when the directory is invalid.
"""

import argparse
import sys
from pathlib import Path

from asvprep.manifest import format_spk2utt, read_lines, utt2spk_to_spk2utt


def _check_keyed_file(path: Path, errors: list[str], exact_fields: int | None = None) -> list[list[str]]:
    """Parse a keyed file, appending problems to errors. Returns split lines."""
    if not path.is_file():
        errors.append(f"{path.name} does not exist")
        return []
    lines = read_lines(path)
    if not lines:
        errors.append(f"{path.name} is empty")
        return []

    rows = []
    for n, line in enumerate(lines, start=1):
        fields = line.split()
        if len(fields) < 2:
            errors.append(f"{path.name}:{n}: expected a key and a value")
            continue
        if exact_fields is not None and len(fields) != exact_fields:
            errors.append(f"{path.name}:{n}: expected {exact_fields} fields, got {len(fields)}")
            continue
        rows.append(fields)

    keys = [row[0].encode("utf-8") for row in rows]
    if len(set(keys)) != len(keys):
        errors.append(f"{path.name} has duplicate keys")
    elif keys != sorted(keys):
        errors.append(f"{path.name} is not sorted by key")
    return rows


def validate(data_dir: Path, no_feats: bool = False, no_text: bool = False) -> list[str]:
    """
    Validate data_dir.

    Returns:
        List of problems (empty if valid).
    """
    if not data_dir.is_dir():
        return [f"{data_dir} is not a directory"]

    errors: list[str] = []
    wav_rows = _check_keyed_file(data_dir / "wav.scp", errors)
    utt2spk_rows = _check_keyed_file(data_dir / "utt2spk", errors, exact_fields=2)
    _check_keyed_file(data_dir / "spk2utt", errors)
    if errors:
        return errors

    utts = [row[0] for row in utt2spk_rows]
    if {row[0] for row in wav_rows} != set(utts):
        errors.append("wav.scp and utt2spk do not list the same utterances")

    pairs = [(row[0], row[1]) for row in utt2spk_rows]
    by_speaker = sorted(pairs, key=lambda p: (p[1].encode("utf-8"), p[0].encode("utf-8")))
    if by_speaker != pairs:
        errors.append(
            "utt2spk is not in sorted order when sorted first on speaker-id "
            "(make speaker-ids prefixes of utt-ids)"
        )

    expected = format_spk2utt(utt2spk_to_spk2utt(pairs))
    actual = [" ".join(line.split()) for line in read_lines(data_dir / "spk2utt")]
    if actual != expected:
        errors.append("spk2utt is not the inverse of utt2spk")

    optional = []
    if not no_text:
        optional.append("text")
    if not no_feats:
        optional.append("feats.scp")
    for name in optional:
        rows = _check_keyed_file(data_dir / name, errors)
        if rows and {row[0] for row in rows} != set(utts):
            errors.append(f"{name} and utt2spk do not list the same utterances")

    return errors


def main():
    parser = argparse.ArgumentParser(description="Validate a Kaldi-style data directory")
    parser.add_argument("--no-feats", action="store_true", help="Do not require feats.scp")
    parser.add_argument("--no-text", action="store_true", help="Do not require text")
    parser.add_argument("data_dir", type=Path, help="Data directory")
    args = parser.parse_args()

    errors = validate(args.data_dir, no_feats=args.no_feats, no_text=args.no_text)
    if errors:
        print(f"INVALID: {args.data_dir}: {len(errors)} error(s) found:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        sys.exit(1)

    print(f"Successfully validated data-directory {args.data_dir}", file=sys.stderr)


if __name__ == "__main__":
    main()
