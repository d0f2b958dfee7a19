"""Client bootstrap wiring for configuration validation and dependency assembly."""

from __future__ import annotations

from campaigner.adapters import (
    CampaignerSoapTransport,
    RemoteCallAdapter,
    XmlQuerySchemaValidator,
    remote_call_build_decoder_registry,
)
from campaigner.config import CampaignerSettings, config_load_settings
from campaigner.services import ContactManager


def bootstrap_create_contact_manager(settings: CampaignerSettings | None = None) -> ContactManager:
    """Assemble a contact manager after validating client configuration.

    Args:
        settings: Optional preloaded settings; loaded from environment when omitted.

    Returns:
        ContactManager: Fully wired contact-management client.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    settings = settings or config_load_settings()
    decoder_registry = remote_call_build_decoder_registry(settings.campaigner_namespace)
    transport = CampaignerSoapTransport(
        endpoint_url=settings.campaigner_endpoint_url,
        contract_namespace=settings.campaigner_namespace,
        decoder_registry=decoder_registry,
        request_timeout_seconds=settings.campaigner_request_timeout_seconds,
        trace_enabled=settings.campaigner_trace_enabled,
    )
    remote_call_adapter = RemoteCallAdapter(
        transport=transport,
        username=settings.campaigner_username,
        password=settings.campaigner_password,
    )
    return ContactManager(
        remote_call_adapter=remote_call_adapter,
        query_schema_validator=XmlQuerySchemaValidator(xsd_path=settings.campaigner_xsd_path),
    )
