from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from .errors import MalformedHeader, MidiDecodeError, TrackDecodeError, TruncatedData
from .structs import (
    CHUNK_HEADER_SIZE,
    HEADER_MAGIC,
    HEADER_PAYLOAD_LENGTH,
    HEADER_SIZE,
    u16_at,
    u32_at,
)
from .track_reader import MidiTrack, read_track

logger = logging.getLogger(__name__)


class FileFormat(enum.IntEnum):
    SINGLE_TRACK = 1
    MULTIPLE_SYNCHRONOUS = 2
    MULTIPLE_ASYNCHRONOUS = 3


@dataclass(frozen=True)
class MidiHeader:
    file_format: FileFormat
    track_count: int
    ticks_per_quarter_note: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "MidiHeader":
        """Parse the fixed 14-byte ``MThd`` chunk at the start of `data`."""
        if len(data) < HEADER_SIZE:
            raise TruncatedData(
                f"file too short for header ({len(data)} bytes, need {HEADER_SIZE})"
            )
        magic = bytes(data[:4])
        if magic != HEADER_MAGIC:
            raise MalformedHeader(f"bad magic: {bytes(data[:8]).hex()}")
        length = u32_at(data, 4)
        if length != HEADER_PAYLOAD_LENGTH:
            raise MalformedHeader(
                f"header length field is {length}, expected {HEADER_PAYLOAD_LENGTH}"
            )

        format_code = u16_at(data, 8)
        try:
            file_format = FileFormat(format_code)
        except ValueError:
            raise MalformedHeader(f"unknown file format {format_code}") from None

        header = cls(
            file_format=file_format,
            track_count=u16_at(data, 10),
            ticks_per_quarter_note=u16_at(data, 12),
        )
        logger.debug(
            "header: format=%s tracks=%d ticks/quarter=%d",
            header.file_format.name,
            header.track_count,
            header.ticks_per_quarter_note,
        )
        return header


@dataclass(frozen=True)
class MidiFile:
    """A decoded file: header plus tracks in on-disk order.

    Built all at once; if any track fails nothing is returned and the
    failing track's index is reported on ``TrackDecodeError``.
    """

    header: MidiHeader
    tracks: Tuple[MidiTrack, ...]

    @classmethod
    def from_bytes(cls, data: bytes) -> "MidiFile":
        header = MidiHeader.from_bytes(data)

        tracks: List[MidiTrack] = []
        offset = HEADER_SIZE
        for index in range(header.track_count):
            try:
                track = read_track(data, offset)
            except MidiDecodeError as err:
                raise TrackDecodeError(index, offset, err) from err
            tracks.append(track)
            offset += CHUNK_HEADER_SIZE + track.byte_length

        return cls(header=header, tracks=tuple(tracks))


def read_midi_file(path: Union[str, Path]) -> MidiFile:
    """Read the whole file at `path` into memory and decode it."""

    data = Path(path).read_bytes()
    logger.debug("decoding %s (%d bytes)", path, len(data))
    return MidiFile.from_bytes(data)
