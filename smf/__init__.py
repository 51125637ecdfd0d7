"""Decoder for the Standard MIDI File format."""

from .container import (  # noqa: F401
    FileFormat,
    MidiFile,
    MidiHeader,
    read_midi_file,
)
from .errors import (  # noqa: F401
    MalformedHeader,
    MalformedTrackHeader,
    MalformedVlq,
    MidiDecodeError,
    TrackDecodeError,
    TruncatedData,
    UnrecognizedStatus,
    UnsupportedMessage,
)
from .messages import (  # noqa: F401
    INVALID_STATUS,
    ActiveSense,
    Aftertouch,
    ChannelPressure,
    ControlChange,
    InvalidStatus,
    Message,
    MidiClock,
    MidiContinue,
    MidiStart,
    MidiStop,
    MidiTimeCode,
    NoteOff,
    NoteOn,
    PitchWheel,
    ProgramChange,
    Reset,
    SongPositionPointer,
    SongSelect,
    SystemExclusive,
    TuneRequest,
    classify_status,
    decode_message,
    status_byte,
)
from .pretty import describe_message, format_midi_file  # noqa: F401
from .structs import CHUNK_HEADER_SIZE, HEADER_MAGIC, HEADER_SIZE, TRACK_MAGIC  # noqa: F401
from .track_reader import MidiEvent, MidiTrack, read_track  # noqa: F401
from .vlq import read_vlq  # noqa: F401
