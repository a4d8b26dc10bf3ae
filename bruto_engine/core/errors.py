"""Exceptions raised for malformed reference data.

Weapon and skill definitions are static data; anything wrong with them is a
defect in that data and is surfaced to the caller as-is.
"""

from typing import Any, Optional


class DataIntegrityError(Exception):
    """Base exception for malformed weapon or skill definitions."""

    def __init__(self, message: str, entry_id: Optional[str] = None):
        if entry_id is not None:
            message = f"{entry_id}: {message}"
        super().__init__(message)
        self.entry_id = entry_id


class UnknownStatError(DataIntegrityError):
    """Raised when an effect or modifier references an unrecognized stat."""

    def __init__(self, stat: Any, entry_id: Optional[str] = None):
        super().__init__(f"unknown stat name: {stat!r}", entry_id)
        self.stat = stat


class InvalidStackingError(DataIntegrityError):
    """Raised when stacking flags or stack counts are inconsistent."""
    pass


class OutOfRangeError(DataIntegrityError):
    """Raised when a bounded value falls outside its allowed range."""

    def __init__(
        self,
        field_name: str,
        value: float,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        entry_id: Optional[str] = None,
    ):
        if maximum is None:
            bounds = f">= {minimum}"
        else:
            bounds = f"in [{minimum}, {maximum}]"
        super().__init__(f"{field_name} must be {bounds}, got {value}", entry_id)
        self.field_name = field_name
        self.value = value
