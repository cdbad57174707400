from __future__ import annotations

import pytest

from WSPE.cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, gen_main, proc_main
from WSPE.WCM.container import read_wav_info


def test_wavgen_sine_example(tmp_path, capsys) -> None:
    out = tmp_path / "out.wav"
    code = gen_main(["sine", str(out), "44100", "1.0", "440", "0.5"])

    assert code == EXIT_OK
    assert out.stat().st_size == 88244
    assert "[OK]" in capsys.readouterr().out


def test_wavgen_chirp_with_f2(tmp_path) -> None:
    out = tmp_path / "chirp.wav"
    assert gen_main(["chirp", str(out), "44100", "0.5", "200", "0.8", "2000"]) == EXIT_OK
    assert read_wav_info(out).num_samples == 22050


def test_wavgen_noise_seed_option(tmp_path) -> None:
    a, b = tmp_path / "a.wav", tmp_path / "b.wav"
    assert gen_main(["noise", str(a), "8000", "0.2", "0", "0.4", "--seed", "9"]) == EXIT_OK
    assert gen_main(["noise", str(b), "8000", "0.2", "0", "0.4", "--seed", "9"]) == EXIT_OK
    assert a.read_bytes() == b.read_bytes()


def test_wavgen_chirp_without_f2_is_usage_error(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        gen_main(["chirp", str(tmp_path / "c.wav"), "44100", "1.0", "200", "0.8"])
    assert exc_info.value.code == EXIT_USAGE
    assert "requires f2" in capsys.readouterr().err


def test_wavgen_unknown_mode_is_usage_error(tmp_path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        gen_main(["square", str(tmp_path / "s.wav"), "44100", "1.0", "440", "0.5"])
    assert exc_info.value.code == EXIT_USAGE


def test_wavgen_missing_arguments_is_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        gen_main(["sine", "out.wav", "44100"])
    assert exc_info.value.code == EXIT_USAGE


@pytest.mark.parametrize("rate, seconds", [("7000", "1.0"), ("200000", "1.0"), ("44100", "0")])
def test_wavgen_invalid_parameters_fail(tmp_path, capsys, rate: str, seconds: str) -> None:
    out = tmp_path / "bad.wav"
    code = gen_main(["sine", str(out), rate, seconds, "440", "0.5"])
    assert code == EXIT_FAILURE
    assert "[!!]" in capsys.readouterr().err
    assert not out.exists()


def test_wavgen_chirp_non_positive_frequency(tmp_path, capsys) -> None:
    code = gen_main(["chirp", str(tmp_path / "c.wav"), "44100", "1.0", "0", "0.8", "2000"])
    assert code == EXIT_FAILURE
    assert "chirp frequencies must be > 0" in capsys.readouterr().err


def test_wavgen_frequency_at_or_above_rate_fails(tmp_path, capsys) -> None:
    out = tmp_path / "s.wav"
    code = gen_main(["sine", str(out), "8000", "0.001", "1e30", "0.5"])
    assert code == EXIT_FAILURE
    assert "Invalid frequency" in capsys.readouterr().err
    assert not out.exists()


def test_wavgen_duration_overflow_fails_cleanly(tmp_path, capsys) -> None:
    out = tmp_path / "y.wav"
    code = gen_main(["silence", str(out), "192000", "1e308", "0", "0"])
    err = capsys.readouterr().err
    assert code == EXIT_FAILURE
    assert "Invalid seconds" in err
    assert "Traceback" not in err
    assert not out.exists()


def test_wavproc_gain_and_lpf(tmp_path, sine_wav) -> None:
    g = tmp_path / "g.wav"
    lp = tmp_path / "lp.wav"
    assert proc_main(["gain", str(sine_wav), str(g), "0.5"]) == EXIT_OK
    assert proc_main(["lpf", str(sine_wav), str(lp), "1200"]) == EXIT_OK
    assert read_wav_info(g).data_byte_length == read_wav_info(sine_wav).data_byte_length
    assert read_wav_info(lp).sample_rate == 44100


def test_wavproc_bad_cutoff_fails(tmp_path, sine_wav, capsys) -> None:
    code = proc_main(["lpf", str(sine_wav), str(tmp_path / "x.wav"), "-5"])
    assert code == EXIT_FAILURE
    assert "cutoff_hz" in capsys.readouterr().err


def test_wavproc_not_riff_fails(tmp_path, make_wav, capsys) -> None:
    src = make_wav(b"not a wav file at all")
    code = proc_main(["gain", str(src), str(tmp_path / "x.wav"), "1.0"])
    assert code == EXIT_FAILURE
    assert "Not a RIFF" in capsys.readouterr().err


def test_wavproc_wrong_argument_count_is_usage_error(sine_wav) -> None:
    with pytest.raises(SystemExit) as exc_info:
        proc_main(["gain", str(sine_wav)])
    assert exc_info.value.code == EXIT_USAGE


def test_wavproc_unknown_mode_is_usage_error(sine_wav, tmp_path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        proc_main(["echo", str(sine_wav), str(tmp_path / "x.wav"), "1.0"])
    assert exc_info.value.code == EXIT_USAGE
