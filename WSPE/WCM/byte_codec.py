# =============================================================================
# byte_codec.py - Little-endian field codec
# =============================================================================
#
# Reads and writes exactly 2 or 4 bytes, least-significant byte first, on any
# binary file-like object.  Knows nothing about WAV.
#
# A short read or short write is fatal: IoError, never a partial value.
# Underlying OSErrors are re-raised as IoError with the original chained.
# =============================================================================

from __future__ import annotations

import struct
from typing import BinaryIO

from WSPE.errors import InvalidParameterError, IoError
from WSPE.SMM.constants import TAG_SIZE, U16_MAX, U32_MAX

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_S16 = struct.Struct("<h")


# ── Raw I/O ──────────────────────────────────────────────────────────────────

def read_exact(source: BinaryIO, size: int, what: str = "bytes") -> bytes:
    """Read exactly `size` bytes or raise IoError."""
    try:
        data = source.read(size)
    except (OSError, ValueError) as exc:     # ValueError: closed file
        raise IoError(f"read {what}: {exc}") from exc
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise IoError(f"read {what}: short read ({got} of {size} bytes)")
    return data


def write_exact(sink: BinaryIO, data: bytes, what: str = "bytes") -> None:
    """Write all of `data` or raise IoError."""
    try:
        written = sink.write(data)
    except (OSError, ValueError) as exc:
        raise IoError(f"write {what}: {exc}") from exc
    if written is not None and written != len(data):
        raise IoError(f"write {what}: short write ({written} of {len(data)} bytes)")


# ── Unsigned fields ──────────────────────────────────────────────────────────

def write_u16_le(sink: BinaryIO, value: int) -> None:
    if not 0 <= value <= U16_MAX:
        raise InvalidParameterError(f"u16 out of range: {value}")
    write_exact(sink, _U16.pack(value), "u16")


def write_u32_le(sink: BinaryIO, value: int) -> None:
    if not 0 <= value <= U32_MAX:
        raise InvalidParameterError(f"u32 out of range: {value}")
    write_exact(sink, _U32.pack(value), "u32")


def read_u16_le(source: BinaryIO) -> int:
    return _U16.unpack(read_exact(source, 2, "u16"))[0]


def read_u32_le(source: BinaryIO) -> int:
    return _U32.unpack(read_exact(source, 4, "u32"))[0]


# ── Signed samples ───────────────────────────────────────────────────────────

def write_s16_le(sink: BinaryIO, value: int) -> None:
    """Write one int16 sample (two's complement, same bytes as the u16 view)."""
    write_exact(sink, _S16.pack(value), "sample")


def read_s16_le(source: BinaryIO) -> int:
    return _S16.unpack(read_exact(source, 2, "sample"))[0]


# ── Chunk tags ───────────────────────────────────────────────────────────────

def write_tag(sink: BinaryIO, tag: bytes) -> None:
    if len(tag) != TAG_SIZE:
        raise InvalidParameterError(f"chunk tag must be {TAG_SIZE} bytes, got {tag!r}")
    write_exact(sink, tag, f"tag {tag!r}")


def read_tag(source: BinaryIO) -> bytes:
    return read_exact(source, TAG_SIZE, "chunk tag")
