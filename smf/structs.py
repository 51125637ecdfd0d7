from __future__ import annotations

from .errors import TruncatedData


HEADER_MAGIC = b"MThd"
TRACK_MAGIC = b"MTrk"
HEADER_PAYLOAD_LENGTH = 6  # MThd payload never varies
HEADER_SIZE = 14
CHUNK_HEADER_SIZE = 8  # 4-byte magic + u32 BE length

# Bytes with the high bit set that still do not start a message; the
# decoder treats them like data bytes under running status.
RESERVED_STATUS_BYTES = frozenset({0xF4, 0xF5, 0xF7, 0xF9})


def byte_at(buf: bytes, offset: int) -> int:
    if offset < 0 or offset >= len(buf):
        raise TruncatedData(
            f"read at offset {offset} past end of buffer ({len(buf)} bytes)"
        )
    return buf[offset]


def u16_at(buf: bytes, offset: int) -> int:
    """Return the big-endian u16 starting at `offset`."""

    return (byte_at(buf, offset) << 8) | byte_at(buf, offset + 1)


def u32_at(buf: bytes, offset: int) -> int:
    """Return the big-endian u32 starting at `offset`."""

    if offset < 0 or offset + 4 > len(buf):
        raise TruncatedData(
            f"u32 at offset {offset} runs past end of buffer ({len(buf)} bytes)"
        )
    return int.from_bytes(buf[offset : offset + 4], "big")


def msb_is_set(value: int) -> bool:
    return value > 0x7F


def lower_seven_bits(value: int) -> int:
    return value & 0x7F


def is_running_status_byte(value: int) -> bool:
    """True when `value` cannot start a message and the previous status applies."""

    return value < 0x80 or value in RESERVED_STATUS_BYTES
