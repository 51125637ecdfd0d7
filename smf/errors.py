"""Exceptions raised while decoding Standard MIDI Files."""

from __future__ import annotations


class MidiDecodeError(ValueError):
    """Decoding failed; the input is either damaged or not a MIDI file."""


class TruncatedData(MidiDecodeError, EOFError):
    """A read would run past the end of the buffer."""


class MalformedHeader(MidiDecodeError):
    pass


class MalformedTrackHeader(MidiDecodeError):
    pass


class MalformedVlq(MidiDecodeError):
    pass


class UnsupportedMessage(MidiDecodeError):
    """The status is known but its body cannot be decoded (System Exclusive)."""


class UnrecognizedStatus(MidiDecodeError):
    pass


class TrackDecodeError(MidiDecodeError):
    """A single track failed; the original error is chained as ``__cause__``."""

    def __init__(self, track_index: int, offset: int, cause: MidiDecodeError) -> None:
        super().__init__(f"track {track_index} at offset {offset}: {cause}")
        self.track_index = track_index
        self.offset = offset
