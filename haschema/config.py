from __future__ import annotations
import logging
import os
from typing import get_args

from haschema import EvalMode


_DEFAULT_EVAL_MODE: EvalMode = "lenient"
_DEFAULT_LOG_LEVEL = "WARNING"


def get_eval_mode() -> EvalMode:
    raw = os.environ.get("HASCHEMA_EVAL_MODE")
    if not raw or not raw.strip():
        return _DEFAULT_EVAL_MODE
    mode = raw.strip().lower()
    if mode not in get_args(EvalMode):
        raise ValueError(
            f"HASCHEMA_EVAL_MODE must be one of {', '.join(get_args(EvalMode))}, got {raw!r}"
        )
    return mode


def get_log_level() -> int:
    raw = (os.environ.get("HASCHEMA_LOG_LEVEL") or _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName returns "Level X" for unknown names
    if not isinstance(level, int):
        raise ValueError(f"Unknown HASCHEMA_LOG_LEVEL {raw!r}")
    return level
