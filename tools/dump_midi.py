#!/usr/bin/env python3
"""Decode Standard MIDI Files and print their header, tracks and events."""

from __future__ import annotations

import argparse
import glob
import logging
from pathlib import Path
import sys
from typing import Iterable, List

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from smf.container import read_midi_file  # noqa: E402
from smf.errors import MidiDecodeError  # noqa: E402
from smf.pretty import format_midi_file, summarize_header  # noqa: E402


def collect_paths(patterns: Iterable[str]) -> List[Path]:
    paths: List[Path] = []
    for pattern in patterns:
        matches = sorted(Path(p) for p in glob.glob(pattern, recursive=True))
        if matches:
            paths.extend(matches)
        else:
            candidate = Path(pattern)
            if candidate.exists():
                paths.append(candidate)
    seen: set[Path] = set()
    unique_paths: List[Path] = []
    for path in paths:
        resolved = path.resolve()
        if resolved not in seen:
            seen.add(resolved)
            unique_paths.append(path)
    return unique_paths


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Show the decoded contents of Standard MIDI Files."
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="File paths or glob patterns (quotes recommended for wildcards).",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print one line per file instead of every event.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log decoder progress to stderr.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    targets = collect_paths(args.paths)
    if not targets:
        parser.error("No files matched the provided paths/patterns.")

    failures = 0
    for path in targets:
        try:
            midi = read_midi_file(path)
        except MidiDecodeError as err:
            print(f"{path}: ERR {err}", file=sys.stderr)
            failures += 1
            continue

        if args.summary:
            events = sum(len(track.events) for track in midi.tracks)
            print(f"{path}: {summarize_header(midi.header)}, {events} event(s)")
        else:
            if len(targets) > 1:
                print(f"== {path}")
            print(format_midi_file(midi))

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
