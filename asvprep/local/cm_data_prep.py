#!/usr/bin/env python3
"""
Build the Kaldi-style training directory from the ASVspoof 2019 LA CM train set.

Usage:
    python -m asvprep.local.cm_data_prep --src DATA_DIR_PREFIX --dst data/train [--include_spoof]

Reads LA/ASVspoof2019_LA_cm_protocols/ASVspoof2019.LA.cm.train.trn.txt
(``<speaker> <utt> - <system id or -> <bonafide|spoof>``) and writes
wav.scp and utt2spk in protocol order. Utterance ids are prefixed with the
speaker id so that sorting by utterance also sorts by speaker. Spoofed
utterances are dropped unless --include_spoof is given, in which case they
are attributed to the pseudo-speaker ``spoof``.
"""

import argparse
import sys
from pathlib import Path

from asvprep.layout import CorpusLayout
from asvprep.manifest import read_lines, write_lines


SPOOF_SPEAKER = "spoof"


def parse_protocol(lines: list[str], include_spoof: bool = False) -> list[tuple[str, str, str]]:
    """
    Returns:
        List of (utt id, speaker, source utt) in protocol order.

    Raises:
        ValueError: On a short line or an unknown key.
    """
    entries = []
    for line in lines:
        fields = line.split()
        if len(fields) < 3:
            raise ValueError(f"Malformed protocol line: {line!r}")
        spk, utt, key = fields[0], fields[1], fields[-1].lower()
        if key == "bonafide":
            entries.append((f"{spk}-{utt}", spk, utt))
        elif key == "spoof":
            if include_spoof:
                entries.append((f"{SPOOF_SPEAKER}-{utt}", SPOOF_SPEAKER, utt))
        else:
            raise ValueError(f"Unknown key {fields[-1]!r} in line: {line!r}")
    return entries


def prepare(src: Path, dst: Path, include_spoof: bool = False) -> int:
    """
    Write wav.scp and utt2spk for the train set.

    Raises:
        FileNotFoundError: If the protocol or a listed recording is missing.
    """
    corpus = CorpusLayout(src)
    entries = parse_protocol(read_lines(corpus.train_protocol), include_spoof)
    flac_dir = corpus.train_flac_dir.resolve()

    wav_lines, utt2spk_lines = [], []
    for utt_id, spk, utt in entries:
        path = flac_dir / f"{utt}.flac"
        if not path.is_file():
            raise FileNotFoundError(f"Training recording not found: {path}")
        wav_lines.append(f"{utt_id} {path}")
        utt2spk_lines.append(f"{utt_id} {spk}")

    dst.mkdir(parents=True, exist_ok=True)
    write_lines(dst / "wav.scp", wav_lines)
    write_lines(dst / "utt2spk", utt2spk_lines)
    return len(entries)


def main():
    parser = argparse.ArgumentParser(description="Kaldi-style files for CM training")
    parser.add_argument("--src", type=Path, required=True, help="data_dir_prefix holding LA/")
    parser.add_argument("--dst", type=Path, required=True, help="Output data directory")
    parser.add_argument("--include_spoof", action="store_true", help="Keep spoofed utterances")
    args = parser.parse_args()

    try:
        n = prepare(args.src, args.dst, args.include_spoof)
    except (OSError, ValueError) as e:
        sys.exit(f"Error: {e}")
    if n == 0:
        sys.exit("Error: No training utterances selected")

    print(f"Wrote {n} utterances to {args.dst}", file=sys.stderr)


if __name__ == "__main__":
    main()
