"""Tests for decoding MTrk chunks."""

from pathlib import Path
import sys

import mido
import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from smf.errors import (  # noqa: E402
    MalformedTrackHeader,
    MalformedVlq,
    TruncatedData,
    UnrecognizedStatus,
    UnsupportedMessage,
)
from smf.messages import Aftertouch, MidiClock, NoteOff, NoteOn, PitchWheel  # noqa: E402
from smf.track_reader import (  # noqa: E402
    MidiEvent,
    TrackReadContext,
    read_event,
    read_track,
    read_track_header,
)


def _track(payload: bytes) -> bytes:
    return b"MTrk" + len(payload).to_bytes(4, "big") + payload


def test_all_status_bytes_present():
    buf = _track(
        bytes(
            [
                0x50, 0x92, 0x05, 0x04,  # 80: NoteOn ch2
                0x50, 0xE2, 0x06, 0x03,  # 80: PitchWheel ch2
                0x83, 0x60, 0xA2, 0x05, 0x04,  # 480: Aftertouch ch2
                0x50, 0x82, 0x05, 0x04,  # 80: NoteOff ch2
            ]
        )
    )
    track = read_track(buf, 0)
    assert track.byte_length == 17
    assert track.events == (
        MidiEvent(80, NoteOn(channel=2, key=5, velocity=4)),
        MidiEvent(80, PitchWheel(channel=2, lsb=6, msb=3)),
        MidiEvent(480, Aftertouch(channel=2, key=5, velocity=4)),
        MidiEvent(80, NoteOff(channel=2, key=5, velocity=4)),
    )


def test_running_status_omits_repeated_status():
    buf = _track(
        bytes(
            [
                0x50, 0x92, 0x05, 0x04,  # NoteOn ch2
                0x83, 0x60, 0x26, 0x00,  # running NoteOn
                0x50, 0xA2, 0x05, 0x04,  # Aftertouch ch2
                0x50, 0x13, 0x05,  # running Aftertouch
            ]
        )
    )
    track = read_track(buf, 0)
    assert track.byte_length == 15
    assert [event.delta_time for event in track.events] == [80, 480, 80, 80]
    assert track.events[1].message == NoteOn(channel=2, key=38, velocity=0)
    assert track.events[3].message == Aftertouch(channel=2, key=19, velocity=5)


def test_running_status_from_mido_messages():
    first = bytes(mido.Message("note_on", channel=6, note=60, velocity=100).bytes())
    second = bytes(mido.Message("note_on", channel=6, note=64, velocity=90).bytes())
    buf = _track(b"\x00" + first + b"\x60" + second[1:])
    track = read_track(buf, 0)
    assert [event.message for event in track.events] == [
        NoteOn(channel=6, key=60, velocity=100),
        NoteOn(channel=6, key=64, velocity=90),
    ]


def test_track_at_nonzero_offset():
    buf = b"\xAA" * 14 + _track(bytes([0x00, 0xF8]))
    track = read_track(buf, 14)
    assert track.events == (MidiEvent(0, MidiClock()),)


def test_empty_track():
    track = read_track(_track(b""), 0)
    assert track.byte_length == 0
    assert track.events == ()


def test_bytes_after_declared_length_are_not_decoded():
    buf = _track(bytes([0x00, 0xF8])) + bytes([0x00, 0xF0, 0x01])
    track = read_track(buf, 0)
    assert len(track.events) == 1


def test_bad_magic():
    buf = b"MTrx" + bytes([0, 0, 0, 2, 0x00, 0xF8])
    with pytest.raises(MalformedTrackHeader, match="offset 0"):
        read_track(buf, 0)


def test_truncated_chunk_header():
    with pytest.raises(TruncatedData):
        read_track_header(b"MTrk\x00\x00", 0)


def test_read_track_header_returns_length():
    assert read_track_header(b"xx" + _track(b"\x00\xF8\x00\xF8"), 2) == 4


@pytest.mark.parametrize(
    "payload, error",
    [
        (bytes([0x00, 0x90, 0x3C, 0x40, 0x00, 0xF0, 0x01, 0xF7]), UnsupportedMessage),
        (bytes([0x00, 0x90, 0x3C, 0x40, 0xFF, 0xFF, 0xFF, 0xFF, 0x7F]), MalformedVlq),
        (bytes([0x00, 0x3C, 0x40]), UnrecognizedStatus),
        (bytes([0x00, 0x90, 0x3C, 0x40, 0x00, 0xFD]), UnrecognizedStatus),
        (bytes([0x00, 0x90, 0x3C, 0x40, 0x00, 0x90]), TruncatedData),
    ],
    ids=["sysex", "long-vlq", "no-running-status", "undefined-status", "truncated"],
)
def test_any_bad_event_fails_whole_track(payload, error):
    with pytest.raises(error):
        read_track(_track(payload), 0)


def test_read_event_carries_status_forward():
    buf = bytes([0x00, 0xB3, 0x07, 0x64, 0x10, 0x0A, 0x20])
    event, context = read_event(buf, TrackReadContext(offset=0))
    assert context == TrackReadContext(offset=4, last_status=0xB3)

    event, context = read_event(buf, context)
    assert event.delta_time == 0x10
    assert event.message.controller == 0x0A
    assert event.message.channel == 3
    assert context == TrackReadContext(offset=7, last_status=0xB3)


def test_context_is_not_mutated():
    start = TrackReadContext(offset=0, last_status=0x90)
    read_event(bytes([0x00, 0x3C, 0x40]), start)
    assert start == TrackReadContext(offset=0, last_status=0x90)
