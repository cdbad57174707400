# =============================================================================
# SGM - Signal Generation Module
# Subfolder of WSPE (WAV Signal Processing Engine)
# =============================================================================
#
# Produces finite, ordered streams of normalized float samples.
#
# Modules:
#   generators.py - synthetic sources: sine, noise, impulse, silence, chirp
#   wav_source.py - decodes an existing PCM16 mono file sample by sample
#
# Constants live in WSPE/SMM/constants.py
# =============================================================================

from .generators import (
    GeneratorMode, GeneratorSpec, PhaseAccumulator, SignalSource,
    make_source, num_samples_for,
)
from .wav_source import WavFileSource

__all__ = [
    "GeneratorMode", "GeneratorSpec", "PhaseAccumulator", "SignalSource",
    "WavFileSource", "make_source", "num_samples_for",
]
