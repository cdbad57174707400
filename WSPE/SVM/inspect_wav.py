#!/usr/bin/env python3
# =============================================================================
# inspect_wav.py - PCM16 mono WAV inspector
# =============================================================================
#
# Parses a file with WSPE's own header reader and then reads it a second
# time through libsndfile (soundfile).  Two independent parsers agreeing on
# rate and length is the check that the container bytes are right.
#
# Usage:
#   python -m WSPE.SVM.inspect_wav <path_to_wav>
#   python -m WSPE.SVM.inspect_wav <path_to_wav> --strict
#
# Output sections:
#   [1] Header      - as parsed by WCM.read_header
#   [2] libsndfile  - as reported by soundfile.info
#   [3] Levels      - peak / RMS / DC offset / full-scale sample count
#   [4] VERDICT     - PASS / FAIL with reason
# =============================================================================

from __future__ import annotations

import argparse
import os
import sys
from typing import NamedTuple

import numpy as np
import soundfile as sf

from WSPE.errors import SignalError
from WSPE.SMM.constants import PCM_MAX, PCM_MIN, PCM_SCALE
from WSPE.WCM.container import WavHeaderDescriptor, read_wav_info

DIVIDER = "=" * 68
BLOCK_FRAMES = 65_536


class Levels(NamedTuple):
    frames:     int
    peak:       int       # max |sample| (int16 units)
    rms:        float     # normalized, 1.0 = full scale
    dc:         float     # normalized mean
    full_scale: int       # samples sitting at PCM_MIN or PCM_MAX


def measure_levels(path: str | os.PathLike) -> Levels:
    """Stream the file through soundfile in blocks and accumulate level statistics."""
    frames = 0
    peak = 0
    sum_sq = 0.0
    total = 0
    full_scale = 0
    for block in sf.blocks(os.fspath(path), blocksize=BLOCK_FRAMES, dtype="int16", always_2d=True):
        ch = block[:, 0].astype(np.int64)
        if ch.size == 0:
            continue
        frames     += ch.size
        peak        = max(peak, int(np.max(np.abs(ch))))
        sum_sq     += float(np.sum(ch * ch))
        total      += int(np.sum(ch))
        full_scale += int(np.count_nonzero((ch == PCM_MAX) | (ch == PCM_MIN)))

    if frames == 0:
        return Levels(0, 0, 0.0, 0.0, 0)
    rms = float(np.sqrt(sum_sq / frames)) / PCM_SCALE
    dc  = (total / frames) / PCM_SCALE
    return Levels(frames, peak, rms, dc, full_scale)


def run_inspect(wav_path: str, strict: bool = False) -> bool:
    """
    Print the inspection report for one file.
    Returns True if the file is a valid PCM16 mono WAV (and, with strict,
    libsndfile agrees with the header parser).
    """
    reasons: list[str] = []

    print(f"\n{DIVIDER}")
    print(f"  WAV Inspector")
    print(DIVIDER)

    # -----------------------------------------------------------------------
    # [1] Header
    # -----------------------------------------------------------------------
    try:
        header: WavHeaderDescriptor = read_wav_info(wav_path)
    except SignalError as exc:
        print(f"  [!!] {exc}")
        print(f"\n{DIVIDER}")
        print(f"  VERDICT: FAIL - not a PCM16 mono WAV")
        print(f"{DIVIDER}\n")
        return False

    print(f"  File        : {os.path.basename(wav_path)}")
    print(f"  Rate        : {header.sample_rate} Hz")
    print(f"  Channels    : {header.channels}")
    print(f"  Bits        : {header.bits_per_sample}")
    print(f"  Data bytes  : {header.data_byte_length:,}  (offset {header.data_offset})")
    print(f"  Samples     : {header.num_samples:,}")
    print(f"  Duration    : {header.duration_seconds:.4f} s")
    print(f"  [OK] Header valid")

    # -----------------------------------------------------------------------
    # [2] libsndfile
    # -----------------------------------------------------------------------
    print(f"\n  -- libsndfile --")
    try:
        info = sf.info(wav_path)
    except RuntimeError as exc:          # soundfile.LibsndfileError subclasses RuntimeError
        print(f"  [!!] libsndfile could not open the file: {exc}")
        reasons.append("libsndfile rejected the file")
        info = None

    if info is not None:
        print(f"  Rate        : {info.samplerate} Hz")
        print(f"  Channels    : {info.channels}")
        print(f"  Frames      : {info.frames:,}")
        print(f"  Subtype     : {info.subtype}")

        if info.samplerate != header.sample_rate:
            reasons.append(f"rate mismatch: header {header.sample_rate}, libsndfile {info.samplerate}")
        if info.frames != header.num_samples:
            reasons.append(f"length mismatch: header {header.num_samples}, libsndfile {info.frames}")
        if info.subtype != "PCM_16":
            reasons.append(f"subtype {info.subtype} (expected PCM_16)")

        if reasons:
            for r in reasons:
                print(f"  [!!] {r}")
        else:
            print(f"  [OK] libsndfile agrees with header")

    # -----------------------------------------------------------------------
    # [3] Levels
    # -----------------------------------------------------------------------
    if info is not None:
        print(f"\n  -- Levels --")
        lv = measure_levels(wav_path)
        print(f"  Peak        : {lv.peak}  ({lv.peak / PCM_SCALE:.4f} FS)")
        print(f"  RMS         : {lv.rms:.4f} FS")
        print(f"  DC offset   : {lv.dc:+.6f} FS")
        print(f"  Full-scale  : {lv.full_scale:,} samples")
        if lv.frames and lv.full_scale:
            print(f"  [INFO] {100 * lv.full_scale / lv.frames:.2f}% of samples at full scale (clipping?)")

    # -----------------------------------------------------------------------
    # [4] Verdict
    # -----------------------------------------------------------------------
    ok = not (strict and reasons)
    print(f"\n{DIVIDER}")
    if ok:
        print(f"  VERDICT: PASS")
    else:
        print(f"  VERDICT: FAIL")
        for r in reasons:
            print(f"    - {r}")
    print(f"{DIVIDER}\n")
    return ok


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wavinspect",
        description="Inspect a PCM16 mono WAV file",
    )
    parser.add_argument("wav", help="Path to WAV file")
    parser.add_argument(
        "--strict", action="store_true",
        help="Fail when libsndfile disagrees with the header parser",
    )
    args = parser.parse_args(argv)
    return 0 if run_inspect(args.wav, strict=args.strict) else 1


if __name__ == "__main__":
    sys.exit(main())
