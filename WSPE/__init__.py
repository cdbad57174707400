# =============================================================================
# WAV Signal Processing Engine (WSPE)
# =============================================================================
#
# Reads and writes uncompressed PCM16 mono RIFF/WAVE files and streams
# per-sample signal work over them: five generators and two filters.
#
# ── WHAT IS EXACT, WHAT IS NOT ───────────────────────────────────────────────
#
# EXACT:
#   - Container bytes.  Every header is the canonical 44-byte PCM layout,
#     little-endian, written before the first sample.
#   - Sample counts.  num_samples = round(seconds * rate), half away from
#     zero; processing copies rate and length from the input unchanged.
#   - Quantization bounds.  encode() always lands in [-32768, 32767] and
#     decode(-32768) is exactly -1.0.
#
# LOSSY (by nature, not by accident):
#   - int16 -> float -> int16 may move a sample by one step.
#   - Anything louder than full scale after gain / filtering is clipped.
#
# ── DATA FLOW ─────────────────────────────────────────────────────────────────
#
#   generate:  GeneratorSpec ─> SGM source ─> SFM stages ─> SMM encode ─> WCM
#   process:   WCM read_header ─> SMM decode ─> SFM stages ─> SMM encode ─> WCM
#
#   One sample at a time, one pass, constant memory.
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   SMM/  constants.py, sample_codec.py   - format constants, int16 <-> float
#   WCM/  byte_codec.py, container.py     - little-endian fields, RIFF chunks
#   SGM/  generators.py, wav_source.py    - synthetic and decoded-file sources
#   SFM/  stages.py                       - gain, one-pole low-pass
#   SPM/  pipeline.py                     - generate() / process() runs
#   SVM/  inspect_wav.py                  - header + level inspector
#   cli.py                                - wavgen / wavproc entry points
#   errors.py, logging_utils.py           - error hierarchy, loggers
# =============================================================================

from WSPE.errors import (
    FormatError, InvalidParameterError, IoError, SignalError,
    TruncatedFileError, UnsupportedFormatError, UsageError,
)
from WSPE.SFM.stages import StageMode, StageSpec
from WSPE.SGM.generators import GeneratorMode, GeneratorSpec
from WSPE.SPM.pipeline import RunReport, generate, process
from WSPE.WCM.container import WavHeaderDescriptor, read_header, read_wav_info, write_header

__version__ = "0.1.0"

__all__ = [
    "FormatError", "GeneratorMode", "GeneratorSpec", "InvalidParameterError",
    "IoError", "RunReport", "SignalError", "StageMode", "StageSpec",
    "TruncatedFileError", "UnsupportedFormatError", "UsageError",
    "WavHeaderDescriptor", "generate", "process", "read_header",
    "read_wav_info", "write_header",
]
