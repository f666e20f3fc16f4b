from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import InvalidInputError


def require_non_empty(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidInputError(message)
    return value


def require_present(value: Any, message: str) -> str:
    """Accept any string, including the empty one."""
    if not isinstance(value, str):
        raise InvalidInputError(message)
    return value


def is_non_empty_str_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0 and all(isinstance(v, str) for v in value)


def require_non_empty_str_list(value: Any, message: str) -> list[str]:
    if not is_non_empty_str_list(value):
        raise InvalidInputError(message)
    return list(value)


def require_bool(value: Any, message: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidInputError(message)
    return value


def optional_str(value: Any, message: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInputError(message)
    return value
