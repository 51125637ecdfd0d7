"""Read one ``MTrk`` chunk into a list of timed events.

Chunk layout::

  "MTrk"  u32 BE payload length  payload...

The payload is a run of ``(VLQ delta time, message)`` pairs.  A message
may omit its status byte ("running status"), so events are decoded
strictly in order with the previous status carried forward in a
``TrackReadContext``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .errors import MalformedTrackHeader, TruncatedData
from .messages import Message, decode_message, status_byte
from .structs import CHUNK_HEADER_SIZE, TRACK_MAGIC, u32_at
from .vlq import read_vlq

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MidiEvent:
    delta_time: int  # ticks since the previous event in this track
    message: Message


@dataclass(frozen=True)
class MidiTrack:
    byte_length: int  # declared payload length, not counting the 8-byte chunk header
    events: Tuple[MidiEvent, ...]


@dataclass(frozen=True)
class TrackReadContext:
    offset: int
    last_status: int = 0x00


def read_track_header(buf: bytes, offset: int) -> int:
    """Validate the chunk header at `offset` and return its payload length."""

    if offset + CHUNK_HEADER_SIZE > len(buf):
        raise TruncatedData(
            f"track chunk header at offset {offset} runs past end of buffer "
            f"({len(buf)} bytes)"
        )
    magic = bytes(buf[offset : offset + 4])
    if magic != TRACK_MAGIC:
        raise MalformedTrackHeader(
            f"bad track magic at offset {offset}: {magic!r} (expected {TRACK_MAGIC!r})"
        )
    return u32_at(buf, offset + 4)


def read_event(buf: bytes, context: TrackReadContext) -> Tuple[MidiEvent, TrackReadContext]:
    """Decode the event at ``context.offset`` and return it with the next context."""

    delta_time, offset = read_vlq(buf, context.offset)
    message, offset = decode_message(buf, offset, context.last_status)
    event = MidiEvent(delta_time=delta_time, message=message)
    return event, TrackReadContext(offset=offset, last_status=status_byte(message))


def read_track(buf: bytes, offset: int) -> MidiTrack:
    """Decode the track chunk starting at `offset`.

    Any failure aborts the whole track; no partial event list is returned.
    """
    byte_length = read_track_header(buf, offset)
    events_start = offset + CHUNK_HEADER_SIZE
    events_end = events_start + byte_length

    events: List[MidiEvent] = []
    context = TrackReadContext(offset=events_start)
    while context.offset < events_end:
        event, context = read_event(buf, context)
        events.append(event)

    logger.debug(
        "track at offset %d: %d bytes declared, %d events", offset, byte_length, len(events)
    )
    return MidiTrack(byte_length=byte_length, events=tuple(events))
