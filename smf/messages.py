"""MIDI messages and the status-byte table they are decoded from.

Status byte layout:

  0x8n-0xEn  channel voice; high nibble selects the message, n is the channel
  0xF0-0xFF  system common / realtime; the whole byte selects the message

Both directions (status -> message class for decoding, message -> status
for running status) are derived from ``CHANNEL_VOICE`` and ``SYSTEM``
below, so a new entry only has to be added once.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Tuple, Type, Union

from .errors import UnrecognizedStatus, UnsupportedMessage
from .structs import byte_at, is_running_status_byte, lower_seven_bits

INVALID_STATUS = 0xFD  # undefined system status, reserved for InvalidStatus


# ── channel voice ─────────────────────────────────────────────────


@dataclass(frozen=True)
class NoteOff:
    """Release a note and stop playing it."""

    channel: int
    key: int
    velocity: int


@dataclass(frozen=True)
class NoteOn:
    """Play a note and start sounding it."""

    channel: int
    key: int
    velocity: int


@dataclass(frozen=True)
class Aftertouch:
    """Pressure applied to a note that is already sounding."""

    channel: int
    key: int
    velocity: int


@dataclass(frozen=True)
class ControlChange:
    channel: int
    controller: int
    value: int


@dataclass(frozen=True)
class ProgramChange:
    """Assign an instrument, patch or preset to a channel."""

    channel: int
    new_program: int


@dataclass(frozen=True)
class ChannelPressure:
    channel: int
    value: int


@dataclass(frozen=True)
class PitchWheel:
    channel: int
    lsb: int
    msb: int

    @property
    def value(self) -> int:
        """14-bit bend amount, 0x2000 is centred."""
        return (self.msb << 7) | self.lsb


# ── system common / realtime ──────────────────────────────────────


@dataclass(frozen=True)
class SystemExclusive:
    """Device-specific payload.  Never produced by the decoder: the body
    length cannot be determined, so decoding raises ``UnsupportedMessage``."""


@dataclass(frozen=True)
class MidiTimeCode:
    message_type: int
    values: int


@dataclass(frozen=True)
class SongPositionPointer:
    lsb: int
    msb: int

    @property
    def position(self) -> int:
        """Position in MIDI beats (16th notes) from the start of the song."""
        return (self.msb << 7) | self.lsb


@dataclass(frozen=True)
class SongSelect:
    song: int


@dataclass(frozen=True)
class TuneRequest:
    pass


@dataclass(frozen=True)
class MidiClock:
    pass


@dataclass(frozen=True)
class MidiStart:
    pass


@dataclass(frozen=True)
class MidiContinue:
    pass


@dataclass(frozen=True)
class MidiStop:
    pass


@dataclass(frozen=True)
class ActiveSense:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class InvalidStatus:
    """Status byte that matches no known message.  Never returned by
    ``decode_message`` and never used as running status."""


Message = Union[
    NoteOff,
    NoteOn,
    Aftertouch,
    ControlChange,
    ProgramChange,
    ChannelPressure,
    PitchWheel,
    SystemExclusive,
    MidiTimeCode,
    SongPositionPointer,
    SongSelect,
    TuneRequest,
    MidiClock,
    MidiStart,
    MidiContinue,
    MidiStop,
    ActiveSense,
    Reset,
    InvalidStatus,
]


CHANNEL_VOICE: Tuple[Tuple[int, Type], ...] = (
    (0x80, NoteOff),
    (0x90, NoteOn),
    (0xA0, Aftertouch),
    (0xB0, ControlChange),
    (0xC0, ProgramChange),
    (0xD0, ChannelPressure),
    (0xE0, PitchWheel),
)

SYSTEM: Tuple[Tuple[int, Type], ...] = (
    (0xF0, SystemExclusive),
    (0xF1, MidiTimeCode),
    (0xF2, SongPositionPointer),
    (0xF3, SongSelect),
    (0xF6, TuneRequest),
    (0xF8, MidiClock),
    (0xFA, MidiStart),
    (0xFB, MidiContinue),
    (0xFC, MidiStop),
    (0xFE, ActiveSense),
    (0xFF, Reset),
)

UNSUPPORTED = frozenset({SystemExclusive})

_VOICE_BY_NIBBLE: Dict[int, Type] = dict(CHANNEL_VOICE)
_SYSTEM_BY_STATUS: Dict[int, Type] = dict(SYSTEM)
_STATUS_BY_TYPE: Dict[Type, int] = {
    cls: status for status, cls in CHANNEL_VOICE + SYSTEM
}
_STATUS_BY_TYPE[InvalidStatus] = INVALID_STATUS

# Data bytes that follow the status; the channel comes from the status itself.
_DATA_WIDTH: Dict[Type, int] = {
    cls: len(fields(cls)) - (1 if cls in _VOICE_BY_NIBBLE.values() else 0)
    for _, cls in CHANNEL_VOICE + SYSTEM
}


def is_channel_voice(message: Message) -> bool:
    return type(message) in _VOICE_BY_NIBBLE.values()


def classify_status(status: int) -> Type:
    """Map a status byte to its message class (``InvalidStatus`` if none)."""

    high = status & 0xF0
    if high == 0xF0:
        return _SYSTEM_BY_STATUS.get(status, InvalidStatus)
    return _VOICE_BY_NIBBLE.get(high, InvalidStatus)


def status_byte(message: Message) -> int:
    """Return the status byte that governs `message` (inverse of decoding)."""

    status = _STATUS_BY_TYPE[type(message)]
    if is_channel_voice(message):
        status |= message.channel & 0x0F
    return status


def decode_message(buf: bytes, offset: int, last_status: int) -> Tuple[Message, int]:
    """Decode one message at `offset`.

    `offset` points at a status byte or, under running status, at the first
    data byte, in which case `last_status` is reused.  Data bytes are masked
    to 7 bits.  Returns ``(message, next_offset)``.
    """
    first = byte_at(buf, offset)
    if is_running_status_byte(first):
        status = last_status
        data_offset = offset
    else:
        status = first
        data_offset = offset + 1

    cls = classify_status(status)
    if cls is InvalidStatus:
        if data_offset == offset:
            raise UnrecognizedStatus(
                f"data byte 0x{first:02X} at offset {offset} with no running status "
                f"(last status 0x{last_status:02X})"
            )
        raise UnrecognizedStatus(f"unknown status 0x{status:02X} at offset {offset}")
    if cls in UNSUPPORTED:
        raise UnsupportedMessage(
            f"{cls.__name__} (0x{status:02X}) at offset {offset} is not supported"
        )

    width = _DATA_WIDTH[cls]
    data = [lower_seven_bits(byte_at(buf, data_offset + i)) for i in range(width)]
    if cls in _VOICE_BY_NIBBLE.values():
        message = cls(status & 0x0F, *data)
    else:
        message = cls(*data)
    return message, data_offset + width
