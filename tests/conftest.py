from __future__ import annotations

import numpy as np
import pytest
import soundfile as sf

from WSPE import GeneratorSpec, generate


@pytest.fixture
def make_wav(tmp_path):
    """Write raw bytes to a file under tmp_path and return its path."""

    def _make(raw: bytes, name: str = "in.wav"):
        path = tmp_path / name
        path.write_bytes(raw)
        return path

    return _make


@pytest.fixture
def sine_wav(tmp_path):
    """A 0.25 s, 1 kHz, half-scale sine at 44.1 kHz written by the pipeline."""
    path = tmp_path / "sine.wav"
    generate(GeneratorSpec("sine", 44100, 0.25, amplitude=0.5, f1=1000.0), path)
    return path


@pytest.fixture
def read_int16():
    """Read a mono file through libsndfile as a 1-D int16 array."""

    def _read(path) -> np.ndarray:
        data, _sr = sf.read(str(path), dtype="int16", always_2d=True)
        return data[:, 0]

    return _read
