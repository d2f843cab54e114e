from __future__ import annotations

import re
from typing import Optional

_MOBILE_RE = re.compile(r"^\d{10}$")


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def check_required(errors: dict[str, str], field_name: str, value: Optional[str], message: str) -> None:
    if is_blank(value):
        errors[field_name] = message


def check_min_length(errors: dict[str, str], field_name: str, value: Optional[str], min_len: int, message: str) -> None:
    if field_name not in errors and value is not None and len(value) < min_len:
        errors[field_name] = message


def check_mobile(errors: dict[str, str], field_name: str, value: Optional[str]) -> None:
    if is_blank(value) or not _MOBILE_RE.match(value.strip()):
        errors[field_name] = "Enter a valid 10-digit mobile number"


def parse_float(errors: dict[str, str], field_name: str, value: Optional[str], *, default: float = 0.0) -> float:
    """Parse a numeric form field; blank means ``default``."""
    if is_blank(value):
        return default
    try:
        return float(str(value).strip())
    except ValueError:
        errors[field_name] = "Must be a number"
        return default
