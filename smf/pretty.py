"""Human-readable text rendering of a decoded ``MidiFile``."""

from __future__ import annotations

from dataclasses import fields
from typing import List

from .container import FileFormat, MidiFile, MidiHeader
from .messages import Message

FILE_FORMAT_LABELS = {
    FileFormat.SINGLE_TRACK: "Single Track",
    FileFormat.MULTIPLE_SYNCHRONOUS: "Multiple track, synchronous",
    FileFormat.MULTIPLE_ASYNCHRONOUS: "Multiple track, asynchronous",
}


def describe_message(message: Message) -> str:
    """One-line description, e.g. ``NoteOn -- channel: 2, key: 60, velocity: 100``."""

    name = type(message).__name__
    parts = [f"{f.name}: {getattr(message, f.name)}" for f in fields(message)]
    if not parts:
        return name
    return f"{name} -- {', '.join(parts)}"


def summarize_header(header: MidiHeader) -> str:
    return (
        f"{FILE_FORMAT_LABELS[header.file_format]}, "
        f"{header.track_count} track(s), "
        f"{header.ticks_per_quarter_note} ticks/quarter"
    )


def format_midi_file(midi: MidiFile) -> str:
    lines: List[str] = ["----- MIDI FILE -----", "*****", "Header:"]
    header = midi.header
    lines.append(f"  File format: {FILE_FORMAT_LABELS[header.file_format]}")
    lines.append(f"  Number of tracks: {header.track_count}")
    lines.append(f"  Ticks per quarter note: {header.ticks_per_quarter_note}")

    lines.extend(["*****", "Tracks:"])
    for number, track in enumerate(midi.tracks, start=1):
        lines.append(f"  Track {number}")
        lines.append(f"  Track length: {track.byte_length}")
        for event in track.events:
            lines.append("    --")
            lines.append(f"    Delta time: {event.delta_time}")
            lines.append(f"    Message: {describe_message(event.message)}")
    lines.append("---------------------")
    return "\n".join(lines)
