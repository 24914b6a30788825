#!/usr/bin/env python3
"""
Rewrite the ASVspoof 2019 ASV trial protocol into a VoxCeleb-style trial list.

Usage:
    python -m asvprep.local.convert_protocol --in_file ASVspoof2019.LA.asv.eval.gi.trl.txt --out_file protocol.txt

Input:  ``<claimed speaker> <utt> <system id or -> <target|nontarget|spoof>``
Output: ``<label> <claimed speaker> <utt>`` with label 1 for target and 0
otherwise. Spoofed trials stay in the list as non-target trials.
"""

import argparse
import sys
from pathlib import Path

from asvprep.manifest import read_lines, write_lines


KEYS = {"target": 1, "nontarget": 0, "spoof": 0}


def convert_line(line: str) -> str:
    """
    Convert one protocol line.

    Raises:
        ValueError: On a short line or an unknown key.
    """
    fields = line.split()
    if len(fields) < 3:
        raise ValueError(f"Malformed protocol line: {line!r}")
    spk, utt, key = fields[0], fields[1], fields[-1].lower()
    if key not in KEYS:
        raise ValueError(f"Unknown trial key {fields[-1]!r} in line: {line!r}")
    return f"{KEYS[key]} {spk} {utt}"


def convert(in_file: Path, out_file: Path) -> int:
    lines = [convert_line(line) for line in read_lines(in_file)]
    write_lines(out_file, lines)
    return len(lines)


def main():
    parser = argparse.ArgumentParser(description="Convert the ASV trial protocol")
    parser.add_argument("--in_file", type=Path, required=True, help="ASV trial protocol")
    parser.add_argument("--out_file", type=Path, required=True, help="Output trial list")
    args = parser.parse_args()

    try:
        n = convert(args.in_file, args.out_file)
    except (OSError, ValueError) as e:
        sys.exit(f"Error: {e}")

    print(f"Wrote {n} trials to {args.out_file}", file=sys.stderr)


if __name__ == "__main__":
    main()
