# =============================================================================
# container.py - RIFF/WAVE header writer and chunk-scanning reader
# =============================================================================
#
# WRITE: always the canonical 44-byte PCM16 mono header (see the layout table
#        in SMM/constants.py).  The header is written BEFORE any sample, so the
#        data length must be known up front: num_samples * BLOCK_ALIGN.
#
# READ:  "RIFF" <size, not validated> "WAVE", then chunk headers
#        (4-byte tag + u32 size) until both "fmt " and "data" have been seen.
#
#          fmt   validated (PCM / mono / 16-bit), bytes past 16 skipped
#          data  length + stream position recorded, payload NOT consumed
#          other skipped, size rounded up to even (RIFF word alignment)
#
#        Chunk order is not assumed.  If "data" comes before "fmt " its
#        payload is skipped so the scan can continue; the recorded offset is
#        still the start of the payload.
# =============================================================================

from __future__ import annotations

import io
import os
from typing import BinaryIO, NamedTuple

from WSPE.errors import (
    FormatError, InvalidParameterError, IoError,
    TruncatedFileError, UnsupportedFormatError,
)
from WSPE.logging_utils import get_logger
from WSPE.SMM.constants import (
    RIFF_TAG, WAVE_TAG, FMT_TAG, DATA_TAG,
    FMT_CHUNK_SIZE, RIFF_SIZE_OVERHEAD, U32_MAX,
    FORMAT_PCM, CHANNELS, BITS_PER_SAMPLE, BLOCK_ALIGN,
)
from .byte_codec import (
    read_exact, read_tag, read_u16_le, read_u32_le,
    write_tag, write_u16_le, write_u32_le,
)

logger = get_logger(__name__)


class WavHeaderDescriptor(NamedTuple):
    sample_rate:      int              # Hz
    channels:         int              # always 1 once validated
    bits_per_sample:  int              # always 16 once validated
    data_byte_length: int              # payload bytes declared by the data chunk
    data_offset:      int | None = None   # payload start in the source (read only)

    @property
    def block_align(self) -> int:
        return self.channels * (self.bits_per_sample // 8)

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align

    @property
    def num_samples(self) -> int:
        return self.data_byte_length // self.block_align

    @property
    def duration_seconds(self) -> float:
        return self.num_samples / self.sample_rate


# =============================================================================
# Writer
# =============================================================================

def write_header(sink: BinaryIO, sample_rate: int, num_samples: int) -> WavHeaderDescriptor:
    """
    Write the canonical 44-byte PCM16 mono header.

    Args:
        sink:        Binary stream positioned where the file should start.
        sample_rate: Hz, must be positive.
        num_samples: Number of samples that will follow the header.

    Returns:
        The descriptor of the header just written (data_offset = None).

    Raises:
        InvalidParameterError if the sizes do not fit the u32 fields.
        IoError on a short or failed write.
    """
    if sample_rate <= 0:
        raise InvalidParameterError(f"sample_rate must be > 0, got {sample_rate}")
    if num_samples < 0:
        raise InvalidParameterError(f"num_samples must be >= 0, got {num_samples}")

    data_bytes = num_samples * BLOCK_ALIGN
    byte_rate  = sample_rate * BLOCK_ALIGN
    if RIFF_SIZE_OVERHEAD + data_bytes > U32_MAX:
        raise InvalidParameterError(
            f"{num_samples} samples do not fit a RIFF container (u32 size overflow)"
        )
    if byte_rate > U32_MAX:
        raise InvalidParameterError(f"sample_rate too large for the byte-rate field: {sample_rate}")

    # RIFF header
    write_tag(sink, RIFF_TAG)
    write_u32_le(sink, RIFF_SIZE_OVERHEAD + data_bytes)
    write_tag(sink, WAVE_TAG)

    # fmt chunk
    write_tag(sink, FMT_TAG)
    write_u32_le(sink, FMT_CHUNK_SIZE)
    write_u16_le(sink, FORMAT_PCM)
    write_u16_le(sink, CHANNELS)
    write_u32_le(sink, sample_rate)
    write_u32_le(sink, byte_rate)
    write_u16_le(sink, BLOCK_ALIGN)
    write_u16_le(sink, BITS_PER_SAMPLE)

    # data chunk header; samples follow
    write_tag(sink, DATA_TAG)
    write_u32_le(sink, data_bytes)

    return WavHeaderDescriptor(
        sample_rate=sample_rate,
        channels=CHANNELS,
        bits_per_sample=BITS_PER_SAMPLE,
        data_byte_length=data_bytes,
    )


# =============================================================================
# Reader
# =============================================================================

def read_header(source: BinaryIO) -> WavHeaderDescriptor:
    """
    Parse a RIFF/WAVE stream up to the start of its sample payload.

    On return the stream position is unspecified; seek to the returned
    data_offset before streaming samples.

    Raises:
        FormatError             missing / wrong RIFF or WAVE tag, malformed fmt
        UnsupportedFormatError  not PCM, not mono, not 16-bit
        TruncatedFileError      stream ended before fmt and data were found
        IoError                 seek / tell failure on the underlying file
    """
    try:
        riff = read_tag(source)
    except IoError as exc:
        raise FormatError("Not a RIFF file (fewer than 4 bytes)") from exc
    if riff != RIFF_TAG:
        raise FormatError(f"Not a RIFF file (tag {riff!r})")

    try:
        read_u32_le(source)          # riff size, deliberately not validated
        wave = read_tag(source)
    except IoError as exc:
        raise FormatError("Bad RIFF header (truncated before WAVE tag)") from exc
    if wave != WAVE_TAG:
        raise FormatError(f"Not a WAVE file (form type {wave!r})")

    fmt: tuple[int, int, int] | None = None     # (sample_rate, channels, bits)
    data: tuple[int, int] | None = None         # (byte_length, offset)

    while fmt is None or data is None:
        try:
            tag = read_tag(source)
            chunk_size = read_u32_le(source)
        except IoError as exc:
            missing = " and ".join(
                name for name, seen in (("fmt", fmt), ("data", data)) if seen is None
            )
            raise TruncatedFileError(f"Unexpected end of file: no {missing} chunk") from exc

        logger.debug("chunk %r size=%d", tag, chunk_size)

        if tag == FMT_TAG:
            fmt = _read_fmt_body(source, chunk_size)
        elif tag == DATA_TAG:
            data = (chunk_size, _tell(source))
            if fmt is None:
                # Payload precedes fmt: step over it to keep scanning.
                _skip(source, _padded(chunk_size))
        else:
            _skip(source, _padded(chunk_size))

    sample_rate, channels, bits = fmt
    data_bytes, data_offset = data
    if data_bytes % BLOCK_ALIGN:
        logger.warning(
            "data chunk length %d is not a multiple of %d; trailing byte ignored",
            data_bytes, BLOCK_ALIGN,
        )

    return WavHeaderDescriptor(
        sample_rate=sample_rate,
        channels=channels,
        bits_per_sample=bits,
        data_byte_length=data_bytes,
        data_offset=data_offset,
    )


def read_wav_info(path: str | os.PathLike) -> WavHeaderDescriptor:
    """Open `path` and return its validated header."""
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise IoError(f"Could not open input file {os.fspath(path)!r}: {exc}") from exc
    with f:
        return read_header(f)


# ── Internal helpers ─────────────────────────────────────────────────────────

def _read_fmt_body(source: BinaryIO, chunk_size: int) -> tuple[int, int, int]:
    if chunk_size < FMT_CHUNK_SIZE:
        raise FormatError(f"fmt chunk too small: {chunk_size} bytes (need {FMT_CHUNK_SIZE})")

    try:
        audio_format = read_u16_le(source)
        channels     = read_u16_le(source)
        sample_rate  = read_u32_le(source)
        read_u32_le(source)                  # byte rate
        read_u16_le(source)                  # block align
        bits         = read_u16_le(source)
    except IoError as exc:
        raise TruncatedFileError("Unexpected end of file inside fmt chunk") from exc

    if audio_format != FORMAT_PCM:
        raise UnsupportedFormatError(f"Only PCM supported (format tag {audio_format})")
    if channels != CHANNELS:
        raise UnsupportedFormatError(f"Only mono supported ({channels} channels)")
    if bits != BITS_PER_SAMPLE:
        raise UnsupportedFormatError(f"Only 16-bit supported ({bits} bits per sample)")
    if sample_rate == 0:
        raise UnsupportedFormatError("Sample rate of 0 Hz")

    # Extended fmt (cbSize etc.): skip whatever follows the 16 canonical bytes.
    extra = chunk_size - FMT_CHUNK_SIZE
    if extra:
        _skip(source, extra + (chunk_size & 1))

    return sample_rate, channels, bits


def _padded(size: int) -> int:
    """RIFF chunks are word-aligned: odd sizes carry one pad byte."""
    return size + (size & 1)


def _tell(source: BinaryIO) -> int:
    try:
        return source.tell()
    except OSError as exc:
        raise IoError(f"tell failed: {exc}") from exc


def _skip(source: BinaryIO, count: int) -> None:
    """Advance `count` bytes; seek when possible, read-and-discard otherwise."""
    if count <= 0:
        return
    try:
        source.seek(count, io.SEEK_CUR)
        return
    except io.UnsupportedOperation:
        pass
    except OSError as exc:
        raise IoError(f"seek failed: {exc}") from exc

    # Non-seekable stream (pipe): consume in blocks.
    remaining = count
    try:
        while remaining:
            block = min(remaining, 64 * 1024)
            read_exact(source, block, "skipped chunk")
            remaining -= block
    except IoError as exc:
        raise TruncatedFileError("Unexpected end of file inside skipped chunk") from exc
