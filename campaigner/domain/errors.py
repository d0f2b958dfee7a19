"""Project-native typed exceptions for Campaigner client failures."""

from __future__ import annotations


class CampaignerError(Exception):
    """Base exception for Campaigner client failures."""


class CampaignerValidationError(CampaignerError, ValueError):
    """Caller input violates a required shape or enumeration.

    Attributes:
        field_name: Optional contract field name that failed validation.
    """

    def __init__(self, message: str, field_name: str | None = None):
        super().__init__(message)
        self.field_name = field_name


class CampaignerDecodeError(CampaignerError, ValueError):
    """Report-result XML fragment could not be decoded."""


class CampaignerTransportError(CampaignerError, ConnectionError):
    """Transport-level connectivity or protocol failure during a SOAP exchange."""


class CampaignerTransportTimeoutError(CampaignerError, TimeoutError):
    """SOAP request exceeded the configured timeout."""
