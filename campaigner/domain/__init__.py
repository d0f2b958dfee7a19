"""Domain models, catalogues and normalizers used across client layers."""

from .catalogue import DEFAULT_REPORT_TYPE, ContactStatus, MailFormat, ReportType
from .documents import domain_document_is_empty, domain_document_to_plain
from .errors import (
    CampaignerDecodeError,
    CampaignerError,
    CampaignerTransportError,
    CampaignerTransportTimeoutError,
    CampaignerValidationError,
)
from .models import (
    CallOutcome,
    CallOutcomeKind,
    ContactKey,
    ContactRecord,
    CustomAttribute,
    NullableString,
    ReportResult,
)
from .normalization import (
    domain_normalize_contact_key,
    domain_normalize_contact_keys,
    domain_normalize_contact_record,
    domain_normalize_contact_records,
    domain_normalize_custom_attributes,
    domain_normalize_group_ids,
    domain_normalize_mail_format,
    domain_normalize_report_type,
    domain_normalize_status,
)

__all__ = [
    "DEFAULT_REPORT_TYPE",
    "CallOutcome",
    "CallOutcomeKind",
    "CampaignerDecodeError",
    "CampaignerError",
    "CampaignerTransportError",
    "CampaignerTransportTimeoutError",
    "CampaignerValidationError",
    "ContactKey",
    "ContactRecord",
    "ContactStatus",
    "CustomAttribute",
    "MailFormat",
    "NullableString",
    "ReportResult",
    "ReportType",
    "domain_document_is_empty",
    "domain_document_to_plain",
    "domain_normalize_contact_key",
    "domain_normalize_contact_keys",
    "domain_normalize_contact_record",
    "domain_normalize_contact_records",
    "domain_normalize_custom_attributes",
    "domain_normalize_group_ids",
    "domain_normalize_mail_format",
    "domain_normalize_report_type",
    "domain_normalize_status",
]
