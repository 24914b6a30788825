#!/usr/bin/env python3
"""
Invert utt2spk into spk2utt.

Usage:
    python -m asvprep.local.utt2spk_to_spk2utt data/train/utt2spk > data/train/spk2utt

Speakers appear in first-seen order, utterances in input order.
"""

import argparse
import sys
from pathlib import Path

from asvprep.manifest import format_spk2utt, read_pairs, utt2spk_to_spk2utt


def main():
    parser = argparse.ArgumentParser(description="Convert utt2spk to spk2utt")
    parser.add_argument("utt2spk", type=Path, help="utt2spk file")
    args = parser.parse_args()

    try:
        pairs = read_pairs(args.utt2spk)
    except (OSError, ValueError) as e:
        sys.exit(f"Error: {e}")

    for line in format_spk2utt(utt2spk_to_spk2utt(pairs)):
        print(line)


if __name__ == "__main__":
    main()
