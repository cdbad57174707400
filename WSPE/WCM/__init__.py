# =============================================================================
# WCM - WAV Container Module
# Subfolder of WSPE (WAV Signal Processing Engine)
# =============================================================================
#
# Byte-exact RIFF/WAVE reading and writing for PCM16 mono streams.
#
# Modules:
#   byte_codec.py - fixed-width little-endian integers over a binary stream
#   container.py  - WavHeaderDescriptor, write_header(), read_header()
#
# Format constants live in WSPE/SMM/constants.py
# =============================================================================

from .container import WavHeaderDescriptor, read_header, read_wav_info, write_header

__all__ = ["WavHeaderDescriptor", "read_header", "read_wav_info", "write_header"]
