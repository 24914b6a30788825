"""
asvprep Kaldi-style manifest helpers.

Responsibilities:
- Read/write key-value manifests (wav.scp, utt2spk, spk2utt, trial files)
- Sort manifests by key in place
- Invert utt2spk into spk2utt

Invariants:
- Keys are the first whitespace-separated field of a line
- Sorting is by key in byte (C locale) order and is stable
- Files are written with one entry per line and a trailing newline
"""

from pathlib import Path


def read_lines(path: Path) -> list[str]:
    """Non-empty lines of a text file, without line terminators."""
    with open(path, encoding="utf-8") as f:
        return [line.rstrip("\n") for line in f if line.strip()]


def write_lines(path: Path, lines: list[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


def split_entry(line: str) -> tuple[str, str]:
    """Split a manifest line into (key, rest)."""
    parts = line.strip().split(maxsplit=1)
    if len(parts) != 2:
        raise ValueError(f"Malformed manifest line: {line!r}")
    return parts[0], parts[1]


def read_map(path: Path) -> dict[str, str]:
    """
    Read a key -> value manifest.

    Raises:
        ValueError: On malformed lines or duplicate keys.
    """
    mapping: dict[str, str] = {}
    for line in read_lines(path):
        key, value = split_entry(line)
        if key in mapping:
            raise ValueError(f"Duplicate key {key!r} in {path}")
        mapping[key] = value
    return mapping


def write_map(path: Path, mapping: dict[str, str]) -> None:
    """Write a key -> value manifest sorted by key."""
    write_lines(path, [f"{key} {mapping[key]}" for key in sorted(mapping)])


def sort_key(line: str) -> bytes:
    return line.split(maxsplit=1)[0].encode("utf-8")


def sort_in_place(path: Path) -> None:
    """Sort a manifest file by key."""
    write_lines(path, sorted(read_lines(path), key=sort_key))


def utt2spk_to_spk2utt(utt2spk: list[tuple[str, str]]) -> list[tuple[str, list[str]]]:
    """
    Invert (utt, spk) pairs.

    Speakers keep the order in which they are first seen, utterances keep
    input order, so a sorted speaker-prefixed utt2spk yields a sorted spk2utt.
    """
    spk2utt: dict[str, list[str]] = {}
    for utt, spk in utt2spk:
        spk2utt.setdefault(spk, []).append(utt)
    return list(spk2utt.items())


def format_spk2utt(spk2utt: list[tuple[str, list[str]]]) -> list[str]:
    return [f"{spk} {' '.join(utts)}" for spk, utts in spk2utt]


def read_pairs(path: Path) -> list[tuple[str, str]]:
    """Read (key, value) pairs in file order, duplicates kept."""
    return [split_entry(line) for line in read_lines(path)]
