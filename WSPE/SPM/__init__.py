# =============================================================================
# SPM - Signal Pipeline Module
# Subfolder of WSPE (WAV Signal Processing Engine)
# =============================================================================
#
# Wires a signal source through zero or more stages into the sample codec
# and container writer.  One pass, one sample at a time, O(1) memory.
#
# Modules:
#   pipeline.py - generate() and process() runs, RunReport
# =============================================================================

from .pipeline import RunReport, generate, process

__all__ = ["RunReport", "generate", "process"]
