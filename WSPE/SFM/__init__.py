# =============================================================================
# SFM - Signal Filter Module
# Subfolder of WSPE (WAV Signal Processing Engine)
# =============================================================================
#
# One-sample-in, one-sample-out stages with at most one float of history.
#
# Modules:
#   stages.py - gain (stateless) and one-pole low-pass (y[n-1] state)
# =============================================================================

from .stages import (
    FilterState, GainStage, LowPassStage, StageMode, StageSpec,
    gain, lowpass, lowpass_coefficient, make_stage,
)

__all__ = [
    "FilterState", "GainStage", "LowPassStage", "StageMode", "StageSpec",
    "gain", "lowpass", "lowpass_coefficient", "make_stage",
]
