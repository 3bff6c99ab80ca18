"""Conversion exceptions."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for errors raised while converting cube metadata."""


class ProviderConnectionError(ConversionError):
    """The metadata provider could not be reached or read."""

    def __init__(self, message: str, connection_string: str | None = None) -> None:
        super().__init__(message)
        self.connection_string = connection_string


class IdentifierFormatError(ConversionError, ValueError):
    """A column identifier is not of the form ``table.column``."""

    def __init__(self, identifier: str) -> None:
        super().__init__(
            f"Invalid column identifier '{identifier}'. Expected 'table.column'."
        )
        self.identifier = identifier
