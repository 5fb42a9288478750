# config.py
import os

# ======= Retry loop =======
MAX_ATTEMPTS = int(os.getenv("UB_MAX_ATTEMPTS", "2000"))

# ======= Tightness filter =======
# Boards with at least this many pieces are run through the solution counter.
TIGHTNESS_MIN_PIECES = int(os.getenv("UB_TIGHTNESS_MIN_PIECES", "6"))
LOOSE_CAP_6          = int(os.getenv("UB_LOOSE_CAP_6", "10"))   # cap at exactly 6 pieces
LOOSE_CAP_7          = int(os.getenv("UB_LOOSE_CAP_7", "20"))   # cap at 7 pieces and up

# "backtrack" (default) or "cp_sat"
TIGHTNESS_BACKEND = os.getenv("UB_TIGHTNESS_BACKEND", "backtrack").strip().lower()
CP_MAX_SECONDS    = float(os.getenv("UB_CP_MAX_SECONDS", "5.0"))

# ======= Defaults for partially specified configs =======
DEFAULT_PIECES = int(os.getenv("UB_DEFAULT_PIECES", "3"))
DEFAULT_ROWS   = int(os.getenv("UB_DEFAULT_ROWS", "5"))
DEFAULT_COLS   = int(os.getenv("UB_DEFAULT_COLS", "5"))

# ======= Attempt log =======
# Relative paths resolve next to this file; an empty value disables the log.
ATTEMPT_LOG = os.getenv("UB_ATTEMPT_LOG", os.path.join("logs", "generator_attempts.log"))


class CFG:
    MAX_ATTEMPTS = MAX_ATTEMPTS

    TIGHTNESS_MIN_PIECES = TIGHTNESS_MIN_PIECES
    LOOSE_CAP_6          = LOOSE_CAP_6
    LOOSE_CAP_7          = LOOSE_CAP_7
    TIGHTNESS_BACKEND    = TIGHTNESS_BACKEND
    CP_MAX_SECONDS       = CP_MAX_SECONDS

    DEFAULT_PIECES = DEFAULT_PIECES
    DEFAULT_ROWS   = DEFAULT_ROWS
    DEFAULT_COLS   = DEFAULT_COLS

    ATTEMPT_LOG = ATTEMPT_LOG


__all__ = ["CFG"]
