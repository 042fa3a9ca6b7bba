from collections.abc import Iterable
from typing import Any


class ConfigValidationError(ValueError):
    """Raised when a loaded configuration violates one of its field rules."""

    def __init__(
        self,
        message: str,
        *,
        field: str,
        value: Any = None,
        allowed: Iterable[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
        self.allowed = tuple(allowed) if allowed is not None else None

    def __str__(self) -> str:
        return self.message


class MissingFieldError(ConfigValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(f'{field} is required', field=field)


class InvalidValueError(ConfigValidationError):
    def __init__(
        self,
        field: str,
        value: Any,
        *,
        allowed: Iterable[str] | None = None,
        reason: str | None = None,
    ) -> None:
        allowed = tuple(allowed) if allowed is not None else None

        if allowed is not None:
            msg = f'invalid {field}: {value!r} (must be one of: {", ".join(allowed)})'
        elif reason:
            msg = f'{field} {reason} (got {value})'
        else:
            msg = f'invalid {field}: {value!r}'

        super().__init__(msg, field=field, value=value, allowed=allowed)
