"""Exception definitions for HotelDesk application"""

from __future__ import annotations

from dataclasses import dataclass


class HotelDeskException(Exception):
    """Base exception for all HotelDesk application errors.

    All custom exceptions in the HotelDesk application inherit from this class.
    Use this as a catch-all for HotelDesk-specific errors when you don't need
    to handle specific exception types.
    """

    pass


class ConfigException(HotelDeskException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    """

    pass


class NotFoundException(HotelDeskException):
    """Raised when a module, sous-module or event record does not exist."""

    pass


@dataclass(frozen=True)
class FieldError:
    key: str
    label: str
    message: str


class FormValidationError(HotelDeskException):
    """Raised when a form submission fails its synthesized schema.

    Carries one error per offending field. The submission is rejected as a
    whole; callers must not apply any of the values.
    """

    def __init__(self, field_errors: list[FieldError]) -> None:
        self.field_errors = list(field_errors)
        summary = "; ".join(f"{e.label}: {e.message}" for e in self.field_errors)
        super().__init__(f"Form validation failed: {summary}")

    @property
    def errors(self) -> dict[str, str]:
        return {e.key: e.message for e in self.field_errors}


class ConflictException(HotelDeskException):
    """Raised when a write would duplicate a unique module code."""

    pass
