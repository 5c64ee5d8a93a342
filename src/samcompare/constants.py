"""Unified constants for samcompare."""

# ================== SAM flag bits ==================
FLAG_REVERSE: int = 0x10
FLAG_UNMAPPED: int = 0x4
FLAG_SECONDARY: int = 0x100
FLAG_SUPPLEMENTARY: int = 0x800

# ================== SAM column offsets (0-based) ==================
COL_QNAME = 0
COL_FLAG = 1
COL_RNAME = 2
COL_POS = 3
COL_MAPQ = 4
COL_CIGAR = 5
COL_SEQ = 9
# Mandatory columns in a SAM alignment line
MIN_SAM_FIELDS = 11

HEADER_SIGIL = "@"
MAPQ_MAX = 255
FLAG_MAX = 0xFFFF

# ================== Comparison defaults ==================
DEFAULT_DISTANCE_FRACTION: float = 1.0
DEFAULT_QUALITY_THRESHOLDS: tuple[int, ...] = (60, 10, 1, 0)
DEFAULT_MODE: str = "all"

# ================== Output ==================
GAIN_SUFFIX = "_gain.txt"
LOSS_SUFFIX = "_loss.txt"
DIFF_SUFFIX = "_diff.txt"

TAG_GAIN = "G"
TAG_LOSS = "L"
TAG_DIFF = "D"
TAG_TARGET_MAPPED = "T"
TAG_TEST_MAPPED = "S"
