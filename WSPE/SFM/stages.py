# =============================================================================
# stages.py - Gain and one-pole low-pass stages
# =============================================================================
#
# GAIN:     y = g * x.  No clipping here; the sample codec clamps on encode.
#
# LOW-PASS: discretized RC filter
#
#             y[n] = y[n-1] + a * (x[n] - y[n-1])
#
#             a  = dt / (rc + dt)
#             dt = 1 / sample_rate
#             rc = 1 / (2π · cutoff_hz)
#
#           0 < a < 1 for any positive cutoff and rate, so the filter is
#           stable and a step input approaches its target from below without
#           overshoot.  `a` is computed once per run; y[n-1] starts at 0 and is
#           never reset mid-stream.
# =============================================================================

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from WSPE.errors import InvalidParameterError, UsageError


class StageMode(str, Enum):
    GAIN = "gain"
    LPF  = "lpf"


@dataclass(frozen=True)
class StageSpec:
    """A stage request: mode plus its single parameter (multiplier or cutoff Hz)."""
    mode:  StageMode
    param: float

    def __post_init__(self) -> None:
        if not isinstance(self.mode, StageMode):
            try:
                object.__setattr__(self, "mode", StageMode(self.mode))
            except ValueError as exc:
                raise UsageError(f"Unknown mode: {self.mode}") from exc


@dataclass
class FilterState:
    y1: float = 0.0        # previous output sample


# ── Plain functions ──────────────────────────────────────────────────────────

def gain(x: float, g: float) -> float:
    return g * x


def lowpass_coefficient(cutoff_hz: float, sample_rate: float) -> float:
    """Smoothing coefficient `a` of the one-pole low-pass."""
    if not (math.isfinite(cutoff_hz) and cutoff_hz > 0.0):
        raise InvalidParameterError(f"cutoff_hz must be > 0, got {cutoff_hz}")
    if sample_rate <= 0:
        raise InvalidParameterError(f"sample_rate must be > 0, got {sample_rate}")
    dt = 1.0 / sample_rate
    rc = 1.0 / (2.0 * math.pi * cutoff_hz)
    return dt / (rc + dt)


def lowpass(x: float, state: FilterState, cutoff_hz: float, sample_rate: float) -> float:
    """One low-pass step.  Recomputes `a`; use LowPassStage inside a loop."""
    a = lowpass_coefficient(cutoff_hz, sample_rate)
    state.y1 = state.y1 + a * (x - state.y1)
    return state.y1


# ── Stage objects (parameters resolved once per run) ─────────────────────────

class GainStage:
    mode = StageMode.GAIN

    def __init__(self, g: float) -> None:
        if not math.isfinite(g):
            raise InvalidParameterError(f"gain must be finite, got {g}")
        self.g = g

    def process(self, x: float) -> float:
        return self.g * x

    def __repr__(self) -> str:
        return f"GainStage(g={self.g})"


class LowPassStage:
    mode = StageMode.LPF

    def __init__(self, cutoff_hz: float, sample_rate: float) -> None:
        self.cutoff_hz   = cutoff_hz
        self.sample_rate = sample_rate
        self.a           = lowpass_coefficient(cutoff_hz, sample_rate)
        self.state       = FilterState()

    def process(self, x: float) -> float:
        s = self.state
        s.y1 = s.y1 + self.a * (x - s.y1)
        return s.y1

    def __repr__(self) -> str:
        return f"LowPassStage(cutoff_hz={self.cutoff_hz}, a={self.a:.6f})"


def make_stage(spec: StageSpec, sample_rate: float) -> GainStage | LowPassStage:
    """Resolve a StageSpec into a fresh stage bound to the stream's sample rate."""
    if spec.mode is StageMode.GAIN:
        return GainStage(spec.param)
    return LowPassStage(spec.param, sample_rate)
