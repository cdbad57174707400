# =============================================================================
# generators.py - Synthetic signal sources
# =============================================================================
#
# Every source yields exactly num_samples floats, where
#
#     num_samples = round_half_away(duration_seconds * sample_rate)
#
# Per-sample rules:
#
#   silence  0.0 everywhere (amplitude ignored)
#   impulse  amplitude at n = 0, 0.0 afterwards
#   sine     amplitude * sin(phase);  phase += 2π·f/rate
#   chirp    amplitude * sin(phase);  phase += 2π·f(t)/rate,
#              f(t) = f1 + (f2 - f1) * t / T,  t = n / rate
#   noise    amplitude * U[-1, 1] from the source's own numpy Generator
#
# PHASE DISCIPLINE:
#   The phase accumulator is kept in [0, 2π) by subtracting 2π, never by
#   modulo.  Frequencies are bounded below the sample rate, so every step is
#   shorter than 2π and one subtraction per sample is enough.  The value is
#   emitted BEFORE the increment, so sample 0 of every oscillator is sin(0) = 0.
#
# The mode string is resolved ONCE (GeneratorSpec -> make_source) into a
# concrete source class; the per-sample loop never looks at it again.
# =============================================================================

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

import numpy as np

from WSPE.errors import InvalidParameterError, UsageError
from WSPE.SMM.constants import MAX_SAMPLES, SAMPLE_RATE_MIN, SAMPLE_RATE_MAX
from WSPE.SMM.sample_codec import round_half_away

TWO_PI = 2.0 * math.pi

NOISE_BLOCK = 4096          # samples drawn from the RNG per call


class GeneratorMode(str, Enum):
    SINE    = "sine"
    NOISE   = "noise"
    IMPULSE = "impulse"
    SILENCE = "silence"
    CHIRP   = "chirp"


def num_samples_for(duration_seconds: float, sample_rate: int) -> int:
    """Sample count for a duration; the real-valued product is rounded half away from zero."""
    return round_half_away(duration_seconds * sample_rate)


@dataclass(frozen=True)
class GeneratorSpec:
    """
    Fully-resolved generator request.

    Args:
        mode:             GeneratorMode (or its string value).
        sample_rate:      Hz, SAMPLE_RATE_MIN..SAMPLE_RATE_MAX.
        duration_seconds: > 0.
        amplitude:        Peak value in normalized units (not clipped here).
        f1:               Sine frequency / chirp start frequency (Hz).
        f2:               Chirp end frequency (Hz); required for chirp only.
        seed:             Optional noise seed; None = wall-clock seed.
    """
    mode:             GeneratorMode
    sample_rate:      int
    duration_seconds: float
    amplitude:        float = 1.0
    f1:               float = 0.0
    f2:               float | None = None
    seed:             int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.mode, GeneratorMode):
            try:
                object.__setattr__(self, "mode", GeneratorMode(self.mode))
            except ValueError as exc:
                raise UsageError(f"Unknown mode: {self.mode}") from exc

    @property
    def num_samples(self) -> int:
        return num_samples_for(self.duration_seconds, self.sample_rate)


# =============================================================================
# Generator state
# =============================================================================

class PhaseAccumulator:
    """
    Oscillator phase in radians, kept in [0, 2π).

    Wrapping is by subtraction so the accumulated value never passes through
    a modulo; long runs keep the same precision as short ones.  Each increment
    must lie in (-2π, 2π); the sources guarantee that by rejecting frequencies
    at or above the sample rate.
    """

    def __init__(self, phase: float = 0.0) -> None:
        self.phase = phase

    def advance(self, increment: float) -> float:
        self.phase += increment
        if self.phase >= TWO_PI:
            self.phase -= TWO_PI
        elif self.phase < 0.0:
            self.phase += TWO_PI
        return self.phase


# =============================================================================
# Sources
# =============================================================================

class SignalSource:
    """
    Base class: a finite, ordered stream of normalized float samples.

    Iterating an oscillator starts a fresh run from phase 0.  NoiseSource keeps
    drawing from its generator, so a second pass yields new samples.
    """

    mode: GeneratorMode

    def __init__(self, sample_rate: int, duration_seconds: float, amplitude: float = 1.0) -> None:
        if not SAMPLE_RATE_MIN <= sample_rate <= SAMPLE_RATE_MAX:
            raise InvalidParameterError(
                f"Invalid sample_rate {sample_rate} "
                f"(must be {SAMPLE_RATE_MIN}..{SAMPLE_RATE_MAX} Hz)"
            )
        if not math.isfinite(duration_seconds) or duration_seconds <= 0.0:
            raise InvalidParameterError(f"Invalid seconds {duration_seconds} (must be > 0)")
        total = duration_seconds * sample_rate
        if not math.isfinite(total) or total > MAX_SAMPLES:
            raise InvalidParameterError(
                f"Invalid seconds {duration_seconds} (more than {MAX_SAMPLES} samples at {sample_rate} Hz)"
            )
        if not math.isfinite(amplitude):
            raise InvalidParameterError(f"Invalid amplitude {amplitude}")

        self.sample_rate      = sample_rate
        self.duration_seconds = duration_seconds
        self.amplitude        = amplitude
        self.num_samples      = num_samples_for(duration_seconds, sample_rate)

    def __len__(self) -> int:
        return self.num_samples

    def __iter__(self) -> Iterator[float]:
        raise NotImplementedError


class SilenceSource(SignalSource):
    mode = GeneratorMode.SILENCE

    def __iter__(self) -> Iterator[float]:
        for _ in range(self.num_samples):
            yield 0.0


class ImpulseSource(SignalSource):
    mode = GeneratorMode.IMPULSE

    def __iter__(self) -> Iterator[float]:
        for n in range(self.num_samples):
            yield self.amplitude if n == 0 else 0.0


class SineSource(SignalSource):
    mode = GeneratorMode.SINE

    def __init__(self, sample_rate: int, duration_seconds: float,
                 amplitude: float, frequency: float) -> None:
        super().__init__(sample_rate, duration_seconds, amplitude)
        if not math.isfinite(frequency) or abs(frequency) >= sample_rate:
            raise InvalidParameterError(
                f"Invalid frequency {frequency} (must be below sample_rate {sample_rate})"
            )
        self.frequency = frequency
        self.increment = TWO_PI * frequency / sample_rate

    def __iter__(self) -> Iterator[float]:
        acc = PhaseAccumulator()
        amp, inc = self.amplitude, self.increment
        for _ in range(self.num_samples):
            yield amp * math.sin(acc.phase)
            acc.advance(inc)


class ChirpSource(SignalSource):
    """Linear-frequency sweep from f1 to f2 over the whole duration."""

    mode = GeneratorMode.CHIRP

    def __init__(self, sample_rate: int, duration_seconds: float,
                 amplitude: float, f1: float, f2: float | None) -> None:
        super().__init__(sample_rate, duration_seconds, amplitude)
        if f2 is None:
            raise InvalidParameterError("chirp mode requires f2.")
        if not (f1 > 0.0 and f2 > 0.0) or not (math.isfinite(f1) and math.isfinite(f2)):
            raise InvalidParameterError("chirp frequencies must be > 0.")
        if f1 >= sample_rate or f2 >= sample_rate:
            raise InvalidParameterError(
                f"chirp frequencies must be below sample_rate {sample_rate}."
            )
        self.f1 = f1
        self.f2 = f2

    def frequency_at(self, n: int) -> float:
        """Instantaneous frequency (Hz) at sample index n."""
        t = n / self.sample_rate
        return self.f1 + (self.f2 - self.f1) * (t / self.duration_seconds)

    def phase_increment(self, n: int) -> float:
        """Phase step (radians) applied after sample index n."""
        return TWO_PI * self.frequency_at(n) / self.sample_rate

    def __iter__(self) -> Iterator[float]:
        acc = PhaseAccumulator()
        amp = self.amplitude
        for n in range(self.num_samples):
            yield amp * math.sin(acc.phase)
            acc.advance(self.phase_increment(n))


class NoiseSource(SignalSource):
    """
    White noise, uniform in [-1, 1] scaled by amplitude.

    The source owns its numpy Generator.  Pass `rng` (or `seed`) for
    reproducible output; otherwise the generator is seeded once from the wall
    clock and output differs between runs.  Not for cryptographic use.
    """

    mode = GeneratorMode.NOISE

    def __init__(self, sample_rate: int, duration_seconds: float, amplitude: float,
                 rng: np.random.Generator | None = None, seed: int | None = None) -> None:
        super().__init__(sample_rate, duration_seconds, amplitude)
        if rng is None:
            rng = np.random.default_rng(time.time_ns() if seed is None else seed)
        self.rng = rng

    def __iter__(self) -> Iterator[float]:
        amp = self.amplitude
        remaining = self.num_samples
        while remaining:
            n = min(NOISE_BLOCK, remaining)
            for r in self.rng.uniform(-1.0, 1.0, size=n).tolist():
                yield amp * r
            remaining -= n


# =============================================================================
# Factory
# =============================================================================

_FACTORIES: dict[GeneratorMode, Callable[..., SignalSource]] = {
    GeneratorMode.SILENCE: lambda s, _rng: SilenceSource(s.sample_rate, s.duration_seconds, s.amplitude),
    GeneratorMode.IMPULSE: lambda s, _rng: ImpulseSource(s.sample_rate, s.duration_seconds, s.amplitude),
    GeneratorMode.SINE:    lambda s, _rng: SineSource(s.sample_rate, s.duration_seconds, s.amplitude, s.f1),
    GeneratorMode.CHIRP:   lambda s, _rng: ChirpSource(s.sample_rate, s.duration_seconds, s.amplitude, s.f1, s.f2),
    GeneratorMode.NOISE:   lambda s, rng: NoiseSource(
        s.sample_rate, s.duration_seconds, s.amplitude, rng=rng, seed=s.seed,
    ),
}


def make_source(spec: GeneratorSpec, rng: np.random.Generator | None = None) -> SignalSource:
    """Resolve a GeneratorSpec into its concrete source (validates parameters)."""
    return _FACTORIES[spec.mode](spec, rng)
