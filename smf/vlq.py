"""Variable-length quantities, the 1-4 byte integers used for delta times.

Each byte carries 7 payload bits, most significant group first.  A set
high bit means another byte follows; the final byte has it clear::

    50     -> 80
    83 60  -> (0x03 << 7) | 0x60 = 480
"""

from __future__ import annotations

from typing import Tuple

from .errors import MalformedVlq
from .structs import lower_seven_bits, msb_is_set

MAX_VLQ_BYTES = 4
MAX_VLQ_VALUE = (1 << (7 * MAX_VLQ_BYTES)) - 1


def read_vlq(buf: bytes, offset: int) -> Tuple[int, int]:
    """Decode the quantity at `offset`.

    Returns ``(value, next_offset)`` where ``next_offset`` points just past
    the final byte.  Raises ``MalformedVlq`` when a fifth byte would be
    needed or the buffer ends mid-quantity.
    """
    value = 0
    pos = offset
    for _ in range(MAX_VLQ_BYTES):
        if pos < 0 or pos >= len(buf):
            raise MalformedVlq(
                f"variable-length quantity at offset {offset} runs past end of buffer"
            )
        current = buf[pos]
        pos += 1
        value = (value << 7) | lower_seven_bits(current)
        if not msb_is_set(current):
            return value, pos
    raise MalformedVlq(
        f"variable-length quantity at offset {offset} longer than {MAX_VLQ_BYTES} bytes"
    )
