from __future__ import annotations

import math

import numpy as np
import pytest

from WSPE.errors import InvalidParameterError, UsageError
from WSPE.SGM.generators import (
    TWO_PI, ChirpSource, GeneratorMode, GeneratorSpec, ImpulseSource, NoiseSource,
    PhaseAccumulator, SilenceSource, SineSource, make_source, num_samples_for,
)


# ── Sample counts and validation ─────────────────────────────────────────────

@pytest.mark.parametrize("seconds, rate, expected", [
    (1.0, 44100, 44100),
    (2.0, 8000, 16000),
    (0.5, 22050, 11025),
    (1e-5, 8000, 0),
])
def test_num_samples_for(seconds: float, rate: int, expected: int) -> None:
    assert num_samples_for(seconds, rate) == expected


@pytest.mark.parametrize("rate", [0, 7999, 192001])
def test_rate_out_of_range(rate: int) -> None:
    with pytest.raises(InvalidParameterError, match="sample_rate"):
        SilenceSource(rate, 1.0)


@pytest.mark.parametrize("seconds", [0.0, -1.0, math.inf, math.nan])
def test_bad_duration(seconds: float) -> None:
    with pytest.raises(InvalidParameterError, match="seconds"):
        SilenceSource(44100, seconds)


@pytest.mark.parametrize("seconds, rate", [(1e308, 192000), (1e6, 44100)])
def test_duration_beyond_wav_size_limit(seconds: float, rate: int) -> None:
    with pytest.raises(InvalidParameterError, match="seconds"):
        SilenceSource(rate, seconds)


def test_rate_bounds_inclusive() -> None:
    assert len(SilenceSource(8000, 0.001)) == 8
    assert len(SilenceSource(192000, 0.001)) == 192


@pytest.mark.parametrize("f1, f2", [(0.0, 100.0), (100.0, 0.0), (-5.0, 100.0), (100.0, -1.0)])
def test_chirp_requires_positive_frequencies(f1: float, f2: float) -> None:
    with pytest.raises(InvalidParameterError, match="chirp"):
        ChirpSource(44100, 1.0, 0.5, f1, f2)


@pytest.mark.parametrize("frequency", [8000.0, -8000.0, 1e30, math.inf, math.nan])
def test_sine_frequency_must_be_below_rate(frequency: float) -> None:
    with pytest.raises(InvalidParameterError, match="frequency"):
        SineSource(8000, 0.001, 0.5, frequency)


@pytest.mark.parametrize("f1, f2", [(8000.0, 100.0), (100.0, 1e30)])
def test_chirp_frequencies_must_be_below_rate(f1: float, f2: float) -> None:
    with pytest.raises(InvalidParameterError, match="below sample_rate"):
        ChirpSource(8000, 0.001, 0.5, f1, f2)


def test_chirp_requires_f2() -> None:
    with pytest.raises(InvalidParameterError, match="f2"):
        make_source(GeneratorSpec("chirp", 44100, 1.0, 0.5, f1=200.0))


def test_unknown_mode_is_usage_error() -> None:
    with pytest.raises(UsageError, match="square"):
        GeneratorSpec("square", 44100, 1.0)


def test_spec_resolves_mode_once() -> None:
    spec = GeneratorSpec("chirp", 8000, 1.0, 0.5, f1=100.0, f2=200.0)
    assert spec.mode is GeneratorMode.CHIRP
    assert spec.num_samples == 8000


@pytest.mark.parametrize("mode, cls", [
    ("silence", SilenceSource),
    ("impulse", ImpulseSource),
    ("sine", SineSource),
    ("noise", NoiseSource),
])
def test_make_source_dispatch(mode: str, cls: type) -> None:
    source = make_source(GeneratorSpec(mode, 8000, 0.01, 0.5, f1=440.0))
    assert type(source) is cls
    assert len(list(source)) == 80


# ── Phase accumulator ────────────────────────────────────────────────────────

def test_phase_wraps_by_subtraction_and_stays_bounded() -> None:
    acc = PhaseAccumulator()
    inc = TWO_PI * 997.0 / 8000.0
    for _ in range(100_000):
        acc.advance(inc)
        assert 0.0 <= acc.phase < TWO_PI


def test_phase_wrap_keeps_remainder() -> None:
    acc = PhaseAccumulator(TWO_PI - 0.25)
    acc.advance(0.5)
    assert acc.phase == pytest.approx(0.25)


def test_near_rate_sine_stays_bounded() -> None:
    source = SineSource(8000, 1.0, 1.0, frequency=7999.0)
    acc = PhaseAccumulator()
    for _ in range(source.num_samples):
        acc.advance(source.increment)
        assert 0.0 <= acc.phase < TWO_PI


def test_negative_increment_wraps_up() -> None:
    acc = PhaseAccumulator(0.1)
    acc.advance(-0.3)
    assert acc.phase == pytest.approx(TWO_PI - 0.2)


# ── Per-mode rules ───────────────────────────────────────────────────────────

def test_silence_ignores_amplitude() -> None:
    assert set(SilenceSource(44100, 0.1, amplitude=0.9)) == {0.0}


def test_impulse() -> None:
    samples = list(ImpulseSource(8000, 0.5, amplitude=0.75))
    assert samples[0] == 0.75
    assert len(samples) == 4000
    assert all(x == 0.0 for x in samples[1:])


def test_sine_starts_at_zero_and_follows_phase() -> None:
    # 1 kHz at 8 kHz: phase step is π/4, so index 2 is the positive peak.
    samples = list(SineSource(8000, 0.01, amplitude=0.5, frequency=1000.0))
    assert samples[0] == 0.0
    assert samples[2] == pytest.approx(0.5)
    assert samples[6] == pytest.approx(-0.5)
    assert max(abs(x) for x in samples) <= 0.5 + 1e-12


def test_sine_long_run_has_no_phase_drift() -> None:
    # 1 kHz at 8 kHz repeats every 8 samples; after ten seconds the waveform
    # must still match the first period.
    samples = list(SineSource(8000, 10.0, amplitude=1.0, frequency=1000.0))
    for n in (79_992, 79_994, 79_996):
        assert samples[n] == pytest.approx(samples[n % 8], abs=1e-9)


def test_chirp_increment_at_first_and_last_sample() -> None:
    src = ChirpSource(8000, 1.0, amplitude=0.8, f1=100.0, f2=2000.0)
    last = src.num_samples - 1
    assert src.phase_increment(0) == pytest.approx(TWO_PI * 100.0 / 8000.0, rel=1e-12)
    assert src.phase_increment(last) == pytest.approx(TWO_PI * 2000.0 / 8000.0, rel=1e-3)


def test_chirp_frequency_is_linear_in_time() -> None:
    src = ChirpSource(8000, 2.0, amplitude=1.0, f1=200.0, f2=1000.0)
    assert src.frequency_at(0) == 200.0
    assert src.frequency_at(8000) == pytest.approx(600.0)
    assert src.frequency_at(16000) == pytest.approx(1000.0)


def test_chirp_downward_sweep_bounded() -> None:
    samples = list(ChirpSource(8000, 0.5, amplitude=0.3, f1=3000.0, f2=50.0))
    assert samples[0] == 0.0
    assert len(samples) == 4000
    assert max(abs(x) for x in samples) <= 0.3 + 1e-12


# ── Noise ────────────────────────────────────────────────────────────────────

def test_noise_is_bounded_by_amplitude() -> None:
    samples = list(NoiseSource(8000, 1.0, amplitude=0.4, seed=1))
    assert len(samples) == 8000
    assert all(-0.4 <= x <= 0.4 for x in samples)
    assert len(set(samples)) > 7000


def test_noise_with_injected_generator_is_reproducible() -> None:
    a = list(NoiseSource(8000, 0.7, 0.5, rng=np.random.default_rng(42)))
    b = list(NoiseSource(8000, 0.7, 0.5, rng=np.random.default_rng(42)))
    c = list(NoiseSource(8000, 0.7, 0.5, rng=np.random.default_rng(43)))
    assert a == b
    assert a != c


def test_noise_second_pass_continues_the_stream() -> None:
    source = NoiseSource(8000, 0.1, 0.5, seed=11)
    first = list(source)
    assert len(list(source)) == len(first)
    assert list(source) != first


def test_oscillator_second_pass_restarts_at_phase_zero() -> None:
    source = SineSource(8000, 0.1, 0.5, frequency=440.0)
    assert list(source) == list(source)


def test_noise_seed_through_spec() -> None:
    spec = GeneratorSpec("noise", 8000, 0.6, 0.5, seed=7)
    assert list(make_source(spec)) == list(make_source(spec))


def test_noise_spans_both_signs() -> None:
    samples = np.array(list(NoiseSource(44100, 1.0, 1.0, seed=3)))
    assert samples.min() < -0.9
    assert samples.max() > 0.9
    assert abs(samples.mean()) < 0.02
