"""Typed client settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when client settings cannot be loaded or validated."""


class CampaignerSettings(BaseSettings):
    """Settings for the Campaigner contact-management client.

    Environment variable names map directly to field names in uppercase.
    Example: `campaigner_username` reads from `CAMPAIGNER_USERNAME`.

    Attributes:
        campaigner_username: API account username sent in every authentication node.
        campaigner_password: API account password sent in every authentication node.
        campaigner_endpoint_url: SOAP endpoint of the contact-management service.
        campaigner_namespace: Target namespace of the remote contract.
        campaigner_xsd_path: Optional path to the XSD used to validate report queries.
        campaigner_request_timeout_seconds: HTTP request timeout in seconds.
        campaigner_trace_enabled: Keep last request/response payloads for diagnostics.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    campaigner_username: str = Field(min_length=1)
    campaigner_password: str = Field(min_length=1)
    campaigner_endpoint_url: str = Field(default="https://ws.campaigner.com/2013/01/contactmanagement.asmx")
    campaigner_namespace: str = Field(default="https://ws.campaigner.com/2013/01")
    campaigner_xsd_path: str | None = Field(default=None)
    campaigner_request_timeout_seconds: float = Field(default=30.0, gt=0)
    campaigner_trace_enabled: bool = Field(default=True)

    @field_validator("campaigner_username", "campaigner_endpoint_url", "campaigner_namespace")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("campaigner_password")
    @classmethod
    def _validate_non_blank_password(cls, value: str) -> str:
        # Passwords keep surrounding whitespace; only fully blank values are rejected.
        if not value.strip():
            raise ValueError("value must not be blank")
        return value

    @field_validator("campaigner_xsd_path")
    @classmethod
    def _validate_optional_path(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped_value = value.strip()
        return stripped_value or None


def config_load_settings() -> CampaignerSettings:
    """Load and validate client settings from environment and dotenv.

    Returns:
        CampaignerSettings: Validated settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return CampaignerSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Campaigner configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
