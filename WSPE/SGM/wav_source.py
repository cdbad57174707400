# =============================================================================
# wav_source.py - Decoded-file signal source
# =============================================================================
#
# Wraps an open PCM16 mono stream as a SignalSource: the header is parsed on
# construction, iteration seeks to data_offset and yields decode(sample) for
# data_byte_length // 2 samples.  Nothing is buffered beyond one sample.
# =============================================================================

from __future__ import annotations

import io
from typing import BinaryIO, Iterator

from WSPE.errors import IoError
from WSPE.SMM.sample_codec import decode
from WSPE.WCM.byte_codec import read_s16_le
from WSPE.WCM.container import WavHeaderDescriptor, read_header


class WavFileSource:
    """
    Usage:
        with open("in.wav", "rb") as f:
            src = WavFileSource(f)
            for x in src:
                ...
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self.header: WavHeaderDescriptor = read_header(stream)
        self.sample_rate = self.header.sample_rate
        self.num_samples = self.header.num_samples

    def __len__(self) -> int:
        return self.num_samples

    def __iter__(self) -> Iterator[float]:
        try:
            self._stream.seek(self.header.data_offset, io.SEEK_SET)
        except OSError as exc:
            raise IoError(f"fseek to data failed: {exc}") from exc

        stream = self._stream
        for _ in range(self.num_samples):
            yield decode(read_s16_le(stream))
