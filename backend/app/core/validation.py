"""Input checks shared by services. Raise ValidationError (HTTP 422)."""

from app.core.errors import ValidationError


def require_text(value: str | None, field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} must not be empty")
    return text


def require_positive(value: int | float | None, field: str) -> int | float:
    if isinstance(value, bool) or value is None or value <= 0:
        raise ValidationError(f"{field} must be a number > 0 (got {value!r})")
    return value


def optional_positive(value: int | float | None, field: str) -> int | float | None:
    if value is None:
        return None
    return require_positive(value, field)


def optional_text(value: str | None) -> str | None:
    """Strip; empty string becomes None."""
    if value is None:
        return None
    return value.strip() or None


class _Unset:
    """Marks an update argument that was not given, as opposed to an explicit None (clear)."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()
