from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from app.campus.errors import ValidationError


def _clean(items: Iterable[Any]) -> list[str]:
    out: list[str] = []
    for item in items:
        if item is None:
            continue
        value = str(item).strip().strip('"').strip()
        if value and value not in out:
            out.append(value)
    return out


def parse_multi_value(raw: Any) -> list[str]:
    """
    Normalize a multi-valued request field (branches, semesters) to a list.

    Accepted shapes:
        ["CSE", "ECE"]          JSON array in a JSON body
        '["CSE", "ECE"]'        JSON array encoded as text (query strings)
        "CSE, ECE"              comma-separated text
        "4" / 4                 a single value

    Text that does not decode as JSON falls back to comma splitting.
    Values are trimmed; empties and duplicates are dropped, first-seen order is kept.
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple, set)):
        return _clean(raw)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return _clean([raw])

    text = str(raw).strip()
    if not text:
        return []
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        decoded = None
    if isinstance(decoded, list):
        return _clean(decoded)
    if isinstance(decoded, (str, int, float)) and not isinstance(decoded, bool):
        return _clean(str(decoded).split(","))
    return _clean(text.strip("[]").split(","))


def clean_str(value: Any, label: str = "Field") -> str | None:
    """
    Trim a scalar request field; blank becomes None.
    Numbers are kept as text; objects, arrays and booleans are refused.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(f"{label} must be text.")
    s = str(value).strip()
    return s or None
