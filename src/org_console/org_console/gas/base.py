from __future__ import annotations

from typing import Any, Dict, List, Optional

from .errors import GasAPIError, GasErrorCode


def require_success(data: Dict[str, Any], fallback: str) -> Dict[str, Any]:
    """Raise ``SERVER_ERROR`` unless the web app reported ``success``."""
    if not data.get("success"):
        raise GasAPIError(GasErrorCode.SERVER_ERROR, data.get("error") or data.get("message") or fallback)
    return data


def rows(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    value = data.get(key) or []
    return [row for row in value if isinstance(row, dict)]


def row(data: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    value = data.get(key)
    return value if isinstance(value, dict) else None


def to_bool(value: Any, default: bool = False) -> bool:
    """Spreadsheet booleans arrive as bools, ``"TRUE"``/``"false"`` or blanks."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in {"true", "yes", "1", "y"}


def to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return number


def to_int(value: Any, default: int = 0) -> int:
    number = to_float(value)
    return default if number is None else int(number)


def to_str(value: Any) -> str:
    return "" if value is None else str(value)
