# =============================================================================
# cli.py - wavgen / wavproc command-line front ends
# =============================================================================
#
#   wavgen  mode out.wav sample_rate seconds f1 amplitude [f2]
#   wavproc mode in.wav out.wav param
#
# Exit codes:
#   0  success
#   2  usage error (bad / missing arguments)
#   1  invalid parameter, bad input file, or I/O failure
#
# This is the only place that turns a SignalError into an exit code.
# =============================================================================

from __future__ import annotations

import argparse
import sys

from WSPE.errors import SignalError, UsageError
from WSPE.logging_utils import set_verbosity
from WSPE.SFM.stages import StageSpec
from WSPE.SGM.generators import GeneratorSpec
from WSPE.SMM.constants import GENERATOR_MODES, STAGE_MODES
from WSPE.SPM.pipeline import generate, process

EXIT_OK      = 0
EXIT_FAILURE = 1
EXIT_USAGE   = 2

GEN_EPILOG = """\
Modes:
  sine     : f1 = frequency (Hz)
  noise    : f1 ignored
  impulse  : f1 ignored (impulse at sample 0)
  silence  : amplitude ignored
  chirp    : f1 = start Hz, f2 = end Hz (required)

Examples:
  wavgen sine out.wav 44100 2.0 440 0.8
  wavgen noise out.wav 48000 3.0 0 0.4
  wavgen impulse out.wav 44100 1.0 0 0.9
  wavgen silence out.wav 44100 2.0 0 0
  wavgen chirp out.wav 44100 3.0 200 0.8 2000
"""

PROC_EPILOG = """\
Modes:
  gain : param = multiplier (output is clipped to full scale)
  lpf  : param = one-pole low-pass cutoff in Hz (> 0)

Notes: PCM 16-bit mono only.
"""


def _run(fn, args: argparse.Namespace) -> int:
    set_verbosity(args.verbose)
    try:
        report = fn(args)
    except UsageError as exc:
        print(f"[!!] {exc}", file=sys.stderr)
        return EXIT_USAGE
    except SignalError as exc:
        print(f"[!!] {exc}", file=sys.stderr)
        return EXIT_FAILURE

    print(
        f"[OK] {report.out_path}: {report.samples_written:,} samples "
        f"@ {report.header.sample_rate} Hz ({report.header.duration_seconds:.3f} s)"
    )
    return EXIT_OK


# ---------------------------------------------------------------------------
# wavgen
# ---------------------------------------------------------------------------
def build_gen_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wavgen",
        description="Simple WAV generator (16-bit PCM, mono).",
        epilog=GEN_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("mode", choices=GENERATOR_MODES)
    parser.add_argument("out_path", help="Output WAV path")
    parser.add_argument("sample_rate", type=int, help="Hz, 8000..192000")
    parser.add_argument("seconds", type=float, help="Duration, > 0")
    parser.add_argument("f1", type=float, help="Frequency / chirp start (Hz)")
    parser.add_argument("amplitude", type=float, help="Peak level, 1.0 = full scale")
    parser.add_argument("f2", type=float, nargs="?", default=None, help="Chirp end (Hz)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for noise mode (default: time-based)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for INFO logs, -vv for DEBUG")
    return parser


def _do_generate(args: argparse.Namespace):
    spec = GeneratorSpec(
        mode=args.mode,
        sample_rate=args.sample_rate,
        duration_seconds=args.seconds,
        amplitude=args.amplitude,
        f1=args.f1,
        f2=args.f2,
        seed=args.seed,
    )
    return generate(spec, args.out_path)


def gen_main(argv: list[str] | None = None) -> int:
    parser = build_gen_parser()
    args = parser.parse_args(argv)
    if args.mode == "chirp" and args.f2 is None:
        parser.error("chirp mode requires f2.")
    return _run(_do_generate, args)


# ---------------------------------------------------------------------------
# wavproc
# ---------------------------------------------------------------------------
def build_proc_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wavproc",
        description="Apply gain or a one-pole low-pass to a PCM16 mono WAV.",
        epilog=PROC_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("mode", choices=STAGE_MODES)
    parser.add_argument("in_path", help="Input WAV path")
    parser.add_argument("out_path", help="Output WAV path")
    parser.add_argument("param", type=float, help="Gain multiplier or cutoff Hz")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for INFO logs, -vv for DEBUG")
    return parser


def _do_process(args: argparse.Namespace):
    return process(args.in_path, args.out_path, [StageSpec(args.mode, args.param)])


def proc_main(argv: list[str] | None = None) -> int:
    args = build_proc_parser().parse_args(argv)
    return _run(_do_process, args)
