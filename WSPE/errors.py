# =============================================================================
# errors.py - WSPE error hierarchy
# =============================================================================
#
# Every failure the engine can report is a SignalError.  All of them end the
# current run; the CLI maps them to exit codes in exactly one place.
#
#   SignalError
#   ├── UsageError              malformed / missing CLI arguments
#   ├── InvalidParameterError   out-of-range rate, duration, frequency, gain
#   ├── IoError                 short read / short write / open / seek failure
#   └── FormatError             missing or wrong RIFF / WAVE tag
#       ├── UnsupportedFormatError  fmt chunk is not PCM / mono / 16-bit
#       └── TruncatedFileError      stream ended before fmt + data were found
# =============================================================================


class SignalError(Exception):
    """Base class for every error raised by WSPE."""


class UsageError(SignalError):
    pass


class InvalidParameterError(SignalError, ValueError):
    pass


class IoError(SignalError, OSError):
    pass


class FormatError(SignalError):
    pass


class UnsupportedFormatError(FormatError):
    pass


class TruncatedFileError(FormatError):
    pass
