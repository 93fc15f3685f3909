"""Exceptions and warnings raised by the FARS Toolbox."""

from __future__ import annotations

from typing import Any


class FarsError(Exception):
    """Base class for all toolbox errors (missing files excepted)."""


class TypeConversionError(FarsError, ValueError):
    """A year or state value could not be coerced to an integer."""

    def __init__(self, value: Any, what: str = "value") -> None:
        self.value = value
        self.what = what
        super().__init__(f"cannot convert {what} {value!r} to an integer")


class InvalidStateError(FarsError, ValueError):
    """The requested state code does not occur in the loaded year."""

    def __init__(self, state: int) -> None:
        self.state = state
        super().__init__(f"invalid STATE number: {state}")


class SchemaError(FarsError, ValueError):
    """An archive is missing required columns or holds out-of-range values."""


class InvalidYearWarning(UserWarning):
    """A year was skipped during aggregation because its archive failed to load."""
