from __future__ import annotations

import math
from typing import Any, Optional


class ProjectFormatError(ValueError):
    """Raised when an imported project document cannot be understood."""


def to_float(value: Any) -> float:
    """Missing or non-numeric amounts count as zero."""
    try:
        return float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def to_number(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Numeric value as given; whole numbers come back as ``int``."""
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number) if number.is_integer() else number


def to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
