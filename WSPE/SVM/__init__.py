# =============================================================================
# WSPE/SVM/__init__.py - Signal Verification Module
# =============================================================================
#
# Tools for checking a WAV file after it has been written or before it is
# processed.
#
# Sub-modules:
#   inspect_wav.py - header report from WCM cross-checked against libsndfile
#                    (soundfile), plus peak / RMS / DC levels via numpy
# =============================================================================
