# =============================================================================
# sample_codec.py - int16 <-> normalized float sample map
# =============================================================================
#
# decode:  int16 -> float in [-1, 1)
#            -32768 maps to exactly -1.0, everything else is s / 32767.
#
# encode:  float -> int16, in four fixed steps:
#            1. hard-clip x into [-1.0, 1.0]
#            2. scale by 32767.0
#            3. round half away from zero (never truncate: truncation adds a
#               DC bias toward zero and extra distortion)
#            4. clip the integer into [-32768, 32767], then narrow
#
#          Steps 1 and 4 overlap on purpose.  Step 4 absorbs any residual
#          float overshoot at the boundary; do NOT collapse them into one clip.
#
# Out-of-range input after gain / filter stages is clamped silently.  That is
# policy, not an error.
# =============================================================================

from __future__ import annotations

import math

from .constants import (
    PCM_MAX, PCM_MIN, PCM_SCALE,
    FLOAT_MAX, FLOAT_MIN,
)


def decode(sample: int) -> float:
    """Map one signed 16-bit sample onto [-1.0, 1.0)."""
    if sample == PCM_MIN:
        return -1.0
    return sample / PCM_SCALE


def round_half_away(value: float) -> int:
    """Round to nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    if value >= 0.0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def encode(x: float) -> int:
    """Quantize one float sample to int16 using clip-round-clip."""
    if math.isnan(x):
        return 0

    # 1. clip in the float domain
    if x > FLOAT_MAX:
        x = FLOAT_MAX
    elif x < FLOAT_MIN:
        x = FLOAT_MIN

    # 2 + 3. scale, round half away from zero
    v = round_half_away(x * PCM_SCALE)

    # 4. clip in the integer domain
    if v > PCM_MAX:
        v = PCM_MAX
    elif v < PCM_MIN:
        v = PCM_MIN
    return v


def is_clipped(x: float) -> bool:
    """True if encode() has to clamp x (the value lies outside [-1, 1])."""
    return x > FLOAT_MAX or x < FLOAT_MIN
