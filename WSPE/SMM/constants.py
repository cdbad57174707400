# =============================================================================
# constants.py - SMM Format Constants
# =============================================================================
#
# The engine reads and writes exactly one PCM layout:
#
#   RIFF/WAVE, format tag 1 (PCM), 1 channel, 16-bit signed little-endian.
#
# Canonical header written by WCM (44 bytes, no extension fields):
#
#   off  size  field
#     0     4  "RIFF"
#     4     4  u32  36 + data_bytes
#     8     4  "WAVE"
#    12     4  "fmt "
#    16     4  u32  16
#    20     2  u16  1            (PCM)
#    22     2  u16  1            (channels)
#    24     4  u32  sample_rate
#    28     4  u32  sample_rate * BLOCK_ALIGN
#    32     2  u16  BLOCK_ALIGN  (2)
#    34     2  u16  16           (bits per sample)
#    36     4  "data"
#    40     4  u32  data_bytes
# =============================================================================

# -----------------------------------------------------------------------------
# RIFF / WAVE CHUNK TAGS
# -----------------------------------------------------------------------------

RIFF_TAG = b"RIFF"
WAVE_TAG = b"WAVE"
FMT_TAG  = b"fmt "
DATA_TAG = b"data"

TAG_SIZE          = 4
CHUNK_HEADER_SIZE = 8          # 4-byte tag + u32 size
FMT_CHUNK_SIZE    = 16         # canonical PCM fmt body
HEADER_SIZE       = 44         # everything before the first sample byte
RIFF_SIZE_OVERHEAD = HEADER_SIZE - CHUNK_HEADER_SIZE   # = 36

U16_MAX = 0xFFFF
U32_MAX = 0xFFFF_FFFF


# -----------------------------------------------------------------------------
# PCM16 MONO LAYOUT
# -----------------------------------------------------------------------------

FORMAT_PCM      = 1
CHANNELS        = 1
BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8          # = 2
BLOCK_ALIGN     = CHANNELS * BYTES_PER_SAMPLE    # = 2

# Longest payload whose RIFF size still fits a u32.
MAX_SAMPLES = (U32_MAX - RIFF_SIZE_OVERHEAD) // BYTES_PER_SAMPLE


# -----------------------------------------------------------------------------
# SAMPLE DOMAIN
# -----------------------------------------------------------------------------
# int16 full scale.  Note the asymmetry: the positive peak is 32767 while the
# negative peak is -32768.  decode() divides by PCM_SCALE and pins PCM_MIN to
# exactly -1.0 so the float range stays inside [-1, 1).

PCM_MAX   =  32767
PCM_MIN   = -32768
PCM_SCALE = 32767.0

FLOAT_MAX =  1.0
FLOAT_MIN = -1.0


# -----------------------------------------------------------------------------
# GENERATION BOUNDS
# -----------------------------------------------------------------------------
# Only the generators enforce these.  The reader accepts any positive rate.

SAMPLE_RATE_MIN =   8_000      # Hz
SAMPLE_RATE_MAX = 192_000      # Hz


# -----------------------------------------------------------------------------
# MODE NAMES (CLI surface)
# -----------------------------------------------------------------------------

GENERATOR_MODES = ("sine", "noise", "impulse", "silence", "chirp")
STAGE_MODES     = ("gain", "lpf")
