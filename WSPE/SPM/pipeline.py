# =============================================================================
# pipeline.py - Generation and processing runs
# =============================================================================
#
#   generate:  GeneratorSpec ──> source ──> stages ──> encode ──> out.wav
#   process:   in.wav ──> decode ──> stages ──> encode ──> out.wav
#
# ORDER OF OPERATIONS (both runs):
#   1. resolve every mode to its source / stage object (validation happens here)
#   2. open the output file
#   3. write the 44-byte header; the data length is known before sample 0
#   4. stream samples, one at a time
#
# Processing never changes sample rate or duration: the output header copies
# the input's rate and sample count.
#
# Nothing here is atomic.  A failed run can leave a partial output file.
# =============================================================================

from __future__ import annotations

import os
from typing import BinaryIO, Iterable, NamedTuple, Sequence

import numpy as np

from WSPE.errors import InvalidParameterError, IoError
from WSPE.logging_utils import get_logger
from WSPE.SFM.stages import StageSpec, make_stage
from WSPE.SGM.generators import GeneratorSpec, make_source
from WSPE.SGM.wav_source import WavFileSource
from WSPE.SMM.sample_codec import encode, is_clipped
from WSPE.WCM.byte_codec import write_s16_le
from WSPE.WCM.container import WavHeaderDescriptor, write_header

logger = get_logger(__name__)


class RunReport(NamedTuple):
    out_path:        str
    header:          WavHeaderDescriptor
    samples_written: int
    clipped:         int        # samples clamped by the sample codec


# =============================================================================
# Public runs
# =============================================================================

def generate(
    spec: GeneratorSpec,
    out_path: str | os.PathLike,
    stages: Sequence[StageSpec] = (),
    rng: np.random.Generator | None = None,
) -> RunReport:
    """
    Synthesize `spec` into a new PCM16 mono WAV file.

    Args:
        spec:     Generator request (mode, rate, duration, amplitude, f1, f2).
        out_path: Destination file; created or truncated.
        stages:   Optional stages applied after the generator, in order.
        rng:      numpy Generator for noise; overrides spec.seed.

    Raises:
        InvalidParameterError  bad parameters, or a duration that rounds to 0 samples
        IoError                output could not be opened or written
    """
    source = make_source(spec, rng)
    if source.num_samples == 0:
        raise InvalidParameterError("Duration too short.")
    chain = [make_stage(s, source.sample_rate) for s in stages]

    logger.info(
        "[START] generate mode=%s rate=%dHz seconds=%g samples=%d stages=%s -> %s",
        spec.mode.value, source.sample_rate, spec.duration_seconds,
        source.num_samples, chain or "[]", os.fspath(out_path),
    )

    with _ManagedFile(out_path, "wb", "output") as out:
        header = write_header(out, source.sample_rate, source.num_samples)
        written, clipped = _render(source, chain, out, source.num_samples)

    return _finish(out_path, header, written, clipped)


def process(
    in_path: str | os.PathLike,
    out_path: str | os.PathLike,
    stages: Sequence[StageSpec],
) -> RunReport:
    """
    Run every sample of `in_path` through `stages` into `out_path`.

    Raises:
        FormatError (and subclasses)  input is not a PCM16 mono WAV
        InvalidParameterError         bad stage parameter (e.g. cutoff <= 0)
        IoError                       open / seek / short read / short write
    """
    with _ManagedFile(in_path, "rb", "input") as fin:
        source = WavFileSource(fin)
        chain = [make_stage(s, source.sample_rate) for s in stages]

        logger.info(
            "[START] process %s rate=%dHz samples=%d stages=%s -> %s",
            os.fspath(in_path), source.sample_rate, source.num_samples,
            chain or "[]", os.fspath(out_path),
        )

        with _ManagedFile(out_path, "wb", "output") as out:
            header = write_header(out, source.sample_rate, source.num_samples)
            written, clipped = _render(source, chain, out, source.num_samples)

    return _finish(out_path, header, written, clipped)


# =============================================================================
# Internal helpers
# =============================================================================

def _render(
    samples: Iterable[float],
    chain: list,
    sink: BinaryIO,
    expected: int,
) -> tuple[int, int]:
    """Stream samples through the stage chain into the sink."""
    written = 0
    clipped = 0
    for x in samples:
        for stage in chain:
            x = stage.process(x)
        if is_clipped(x):
            clipped += 1
        write_s16_le(sink, encode(x))
        written += 1

    if written != expected:
        raise IoError(f"source produced {written} samples, header declared {expected}")
    return written, clipped


def _finish(out_path, header: WavHeaderDescriptor, written: int, clipped: int) -> RunReport:
    if clipped:
        logger.warning(
            "%d of %d samples clipped to full scale (%.2f%%)",
            clipped, written, 100.0 * clipped / written,
        )
    logger.info("[DONE] wrote %d samples (%d bytes of data) to %s",
                written, header.data_byte_length, os.fspath(out_path))
    return RunReport(os.fspath(out_path), header, written, clipped)


class _ManagedFile:
    """Context manager around open(); every OSError (open, close, flush) becomes IoError."""

    def __init__(self, path, mode: str, role: str) -> None:
        self.path = path
        self.mode = mode
        self.role = role
        self.f: BinaryIO | None = None

    def __enter__(self) -> BinaryIO:
        try:
            self.f = open(self.path, self.mode)
        except OSError as exc:
            raise IoError(f"Could not open {self.role} file {os.fspath(self.path)!r}: {exc}") from exc
        return self.f

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.f.close()
        except OSError as close_exc:
            if exc is None:
                raise IoError(
                    f"Could not close {self.role} file {os.fspath(self.path)!r}: {close_exc}"
                ) from close_exc
            # The original error wins; the close failure is only logged.
            logger.error("close of %s failed after error: %s", self.path, close_exc)
