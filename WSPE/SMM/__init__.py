# =============================================================================
# WSPE/SMM/__init__.py - Sample Mapping Module
# =============================================================================
#
# The SMM is the single source of truth for the PCM16 mono format: RIFF tag
# bytes, field sizes, sample-rate bounds and the int16 <-> float sample map.
#
# All other WSPE sub-modules (WCM, SGM, SFM, SPM) import exclusively from
# here.  Never define format constants outside this module.
#
# Sub-modules:
#   constants.py     - container tags, PCM limits, generation bounds
#   sample_codec.py  - decode()/encode() between int16 and normalized float
# =============================================================================
