#!/usr/bin/env python3
"""
Turn a trial list into ESPnet speaker-verification trial files.

Usage:
    python -m asvprep.local.convert_trial --trial protocol.txt --scp data/test/wav.scp --out data/test

Input lines: ``<label> <enroll> <test>``. Enroll and test ids are looked
up in wav.scp; an id given as a path or with an extension is re-keyed by
its file stem. Writes, keyed by ``<enroll>*<test>``:

    trial.scp    -> enrollment audio path
    trial2.scp   -> test audio path
    trial_label  -> 0 / 1
"""

import argparse
import sys
from pathlib import Path

from asvprep.manifest import read_lines, read_map, write_map


def rekey(utt: str, scp: dict[str, str]) -> str:
    """
    Map a protocol id onto a wav.scp key.

    Raises:
        KeyError: If neither the id nor its stem is a wav.scp key.
    """
    if utt in scp:
        return utt
    stem = Path(utt).stem
    if stem in scp:
        return stem
    raise KeyError(f"{utt!r} is not in wav.scp")


def build_trials(lines: list[str], scp: dict[str, str]) -> dict[str, tuple[str, str, str]]:
    """
    Key every trial against wav.scp.

    Returns:
        Mapping trial key -> (enroll path, test path, label).

    Raises:
        KeyError: If an id is missing from wav.scp.
        ValueError: On malformed lines or a key listed with two labels.
    """
    trials: dict[str, tuple[str, str, str]] = {}
    for line in lines:
        fields = line.split()
        if len(fields) != 3 or fields[0] not in ("0", "1"):
            raise ValueError(f"Malformed trial line: {line!r}")
        label, enroll, test = fields
        enroll, test = rekey(enroll, scp), rekey(test, scp)
        key = f"{enroll}*{test}"
        entry = (scp[enroll], scp[test], label)
        if key in trials and trials[key] != entry:
            raise ValueError(f"Trial {key} listed with conflicting labels")
        trials[key] = entry
    return trials


def write_trials(trials: dict[str, tuple[str, str, str]], out_dir: Path) -> None:
    for column, name in enumerate(("trial.scp", "trial2.scp", "trial_label")):
        write_map(out_dir / name, {key: entry[column] for key, entry in trials.items()})


def main():
    parser = argparse.ArgumentParser(description="Make ESPnet trial files")
    parser.add_argument("--trial", type=Path, required=True, help="Trial list (label enroll test)")
    parser.add_argument("--scp", type=Path, required=True, help="wav.scp of the test set")
    parser.add_argument("--out", type=Path, required=True, help="Output directory")
    args = parser.parse_args()

    try:
        scp = read_map(args.scp)
        trials = build_trials(read_lines(args.trial), scp)
        write_trials(trials, args.out)
    except KeyError as e:
        sys.exit(f"Error: {e.args[0]}")
    except (OSError, ValueError) as e:
        sys.exit(f"Error: {e}")

    print(f"Wrote {len(trials)} trials to {args.out}", file=sys.stderr)


if __name__ == "__main__":
    main()
