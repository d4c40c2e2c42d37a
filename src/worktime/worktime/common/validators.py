from __future__ import annotations

import math
import re
from typing import Any, Callable, Dict, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


def as_text(value: Any) -> str:
    """Trimmed string form of a form value; None becomes empty."""
    if value is None:
        return ""
    return str(value).strip()


def require_non_empty(value: Any, field_name: str, *, field: Optional[str] = None) -> str:
    text = as_text(value)
    if not text:
        raise ValidationError(f"{field_name} je povinné", errors={field or field_name: f"{field_name} je povinné"})
    return text


def require_min_length(value: Any, field_name: str, min_len: int, *, field: Optional[str] = None) -> str:
    if value is None or len(str(value)) < min_len:
        msg = f"{field_name} musí mít alespoň {min_len} znaky"
        raise ValidationError(msg, errors={field or field_name: msg})
    return str(value)


def require_email(value: Optional[str], *, field: str = "email") -> str:
    email = require_non_empty(value, "Email", field=field)
    if not _EMAIL_RE.fullmatch(email):
        raise ValidationError("Email není ve správném formátu", errors={field: "Email není ve správném formátu"})
    return email


def require_number(value, field_name: str, *, field: Optional[str] = None) -> float:
    """Finite float; NaN and infinities are rejected like any other non-number."""
    msg = f"{field_name} musí být číslo"
    if isinstance(value, bool):
        raise ValidationError(msg, errors={field or field_name: msg})
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(msg, errors={field or field_name: msg})
    if not math.isfinite(number):
        raise ValidationError(msg, errors={field or field_name: msg})
    return number


def require_range(value, field_name: str, low: float, high: float, *, field: Optional[str] = None) -> float:
    number = require_number(value, field_name, field=field)
    if number < low or number > high:
        msg = f"{field_name} musí být mezi {low:g} a {high:g}"
        raise ValidationError(msg, errors={field or field_name: msg})
    return number


def require_non_negative(value, field_name: str, *, field: Optional[str] = None) -> float:
    number = require_number(value, field_name, field=field)
    if number < 0:
        msg = f"{field_name} nemůže být záporné"
        raise ValidationError(msg, errors={field or field_name: msg})
    return number


def collect_errors(*checks: Callable[[], object]) -> None:
    """Run every check and raise a single ValidationError carrying all field messages."""
    errors: Dict[str, str] = {}
    for check in checks:
        try:
            check()
        except ValidationError as e:
            for field, msg in e.errors.items():
                errors.setdefault(field, msg)
    if errors:
        raise ValidationError(next(iter(errors.values())), errors=errors)
