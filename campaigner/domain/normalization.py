"""Validation and shape conversion of loosely-typed caller contact input.

Every helper is a pure transform that fails synchronously with
`CampaignerValidationError` before any remote call is attempted. Input keys use
the remote contract names (`ContactKey`, `EmailAddress`, ...). A key counts as
present when it exists and its value is not None.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from .catalogue import ContactStatus, MailFormat, ReportType
from .errors import CampaignerValidationError
from .models import ContactKey, ContactRecord, CustomAttribute, NullableString

_DOMAIN_NULLABLE_STRING_FIELDS = (
    ("EmailAddress", "email_address"),
    ("FirstName", "first_name"),
    ("LastName", "last_name"),
    ("PhoneNumber", "phone_number"),
    ("Fax", "fax"),
)

_DOMAIN_EMPTY_STRING_VALUES = frozenset({"", "0"})


def domain_normalize_contact_key(contact_key: Mapping[str, Any]) -> ContactKey:
    """Normalize one loose contact key mapping.

    Args:
        contact_key: Mapping with required `ContactUniqueIdentifier` and optional `ContactId`.

    Returns:
        ContactKey: Normalized key with `contact_id` defaulting to 0.

    Raises:
        CampaignerValidationError: Raised when the identifier is missing or the id is not a non-negative integer.
    """

    if not isinstance(contact_key, Mapping):
        raise CampaignerValidationError("contact key must be a mapping", field_name="ContactKey")

    unique_identifier = contact_key.get("ContactUniqueIdentifier")
    if unique_identifier is None:
        raise CampaignerValidationError(
            'Missing required identifier "ContactUniqueIdentifier".',
            field_name="ContactUniqueIdentifier",
        )

    raw_contact_id = contact_key.get("ContactId")
    contact_id = 0
    if raw_contact_id is not None:
        contact_id = _domain_coerce_contact_id(raw_contact_id)

    return ContactKey(contact_id=contact_id, contact_unique_identifier=str(unique_identifier))


def domain_normalize_contact_keys(contact_keys: Iterable[Mapping[str, Any]]) -> list[ContactKey]:
    """Normalize contact keys preserving order.

    Args:
        contact_keys: Loose contact key mappings.

    Returns:
        list[ContactKey]: Normalized keys in input order.

    Raises:
        CampaignerValidationError: Raised on the first invalid key.
    """

    return [domain_normalize_contact_key(contact_key) for contact_key in contact_keys]


def domain_normalize_status(status: Any) -> ContactStatus:
    """Validate one contact status value.

    Args:
        status: Candidate status value.

    Returns:
        ContactStatus: Matching status, equal to the input value.

    Raises:
        CampaignerValidationError: Raised when status is not a known value.
    """

    try:
        return ContactStatus(status)
    except ValueError as error:
        raise CampaignerValidationError(f'Invalid Status "{status}".', field_name="Status") from error


def domain_normalize_mail_format(mail_format: Any) -> MailFormat:
    """Validate one mail format value.

    Args:
        mail_format: Candidate mail format value.

    Returns:
        MailFormat: Matching mail format, equal to the input value.

    Raises:
        CampaignerValidationError: Raised when mail format is not a known value.
    """

    try:
        return MailFormat(mail_format)
    except ValueError as error:
        raise CampaignerValidationError(f'Invalid MailFormat "{mail_format}".', field_name="MailFormat") from error


def domain_normalize_report_type(report_type: Any) -> ReportType:
    """Validate one `DownloadReport` report type.

    Args:
        report_type: Candidate report type value.

    Returns:
        ReportType: Matching report type.

    Raises:
        CampaignerValidationError: Raised when report type is not recognized.
    """

    try:
        return ReportType(report_type)
    except ValueError as error:
        raise CampaignerValidationError(f'Invalid reportType value "{report_type}".', field_name="reportType") from error


def domain_normalize_custom_attributes(custom_attributes: Mapping[Any, Any]) -> tuple[CustomAttribute, ...]:
    """Expand custom attribute values into ordered `CustomAttribute` entries.

    Args:
        custom_attributes: Mapping of attribute id to value, in caller order.

    Returns:
        tuple[CustomAttribute, ...]: One entry per input pair, empty values flagged.

    Raises:
        CampaignerValidationError: Raised when input is not a mapping.
    """

    if not isinstance(custom_attributes, Mapping):
        raise CampaignerValidationError("CustomAttributes must be a mapping", field_name="CustomAttributes")

    normalized_attributes: list[CustomAttribute] = []
    for attribute_id, attribute_value in custom_attributes.items():
        is_empty = domain_value_is_empty(attribute_value)
        normalized_attributes.append(
            CustomAttribute(
                attribute_id=attribute_id,
                is_null=is_empty,
                value=None if is_empty else attribute_value,
            )
        )
    return tuple(normalized_attributes)


def domain_normalize_contact_record(contact_data: Mapping[str, Any]) -> ContactRecord:
    """Normalize one loose contact data mapping for upload web methods.

    Args:
        contact_data: Caller contact mapping keyed by contract field names.

    Returns:
        ContactRecord: Normalized record with explicit presence flags.

    Raises:
        CampaignerValidationError: Raised when `ContactKey` is missing or any field is invalid.
    """

    if not isinstance(contact_data, Mapping):
        raise CampaignerValidationError("contact data must be a mapping", field_name="ContactData")

    raw_contact_key = contact_data.get("ContactKey")
    if raw_contact_key is None:
        raise CampaignerValidationError('Missing contact key "ContactKey".', field_name="ContactKey")

    nullable_fields = {
        attribute_name: domain_build_nullable_string(contact_data, field_name)
        for field_name, attribute_name in _DOMAIN_NULLABLE_STRING_FIELDS
    }

    status = contact_data.get("Status")
    mail_format = contact_data.get("MailFormat")
    is_test_contact = contact_data.get("IsTestContact")
    custom_attributes = contact_data.get("CustomAttributes")
    add_to_group = contact_data.get("AddToGroup")
    remove_from_group = contact_data.get("RemoveFromGroup")

    return ContactRecord(
        contact_key=domain_normalize_contact_key(raw_contact_key),
        status=domain_normalize_status(status) if status is not None else None,
        mail_format=domain_normalize_mail_format(mail_format) if mail_format is not None else None,
        is_test_contact=bool(is_test_contact) if is_test_contact is not None else None,
        custom_attributes=(
            domain_normalize_custom_attributes(custom_attributes) if custom_attributes is not None else None
        ),
        add_to_group=domain_normalize_group_ids(add_to_group, "AddToGroup"),
        remove_from_group=domain_normalize_group_ids(remove_from_group, "RemoveFromGroup"),
        **nullable_fields,
    )


def domain_normalize_contact_records(contacts: Iterable[Mapping[str, Any]]) -> list[ContactRecord]:
    """Normalize contact mappings preserving order.

    Args:
        contacts: Loose contact data mappings.

    Returns:
        list[ContactRecord]: Normalized records in input order.

    Raises:
        CampaignerValidationError: Raised on the first invalid record.
    """

    return [domain_normalize_contact_record(contact_data) for contact_data in contacts]


def domain_build_nullable_string(source: Mapping[str, Any], field_name: str) -> NullableString:
    """Wrap one optional scalar field with its presence flag.

    Args:
        source: Caller mapping.
        field_name: Contract field name.

    Returns:
        NullableString: Absent marker or the string form of the supplied value.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    value = source.get(field_name)
    if value is None:
        return NullableString(is_null=True, value="")
    return NullableString(is_null=False, value=str(value))


def domain_value_is_empty(value: Any) -> bool:
    """Return whether a value counts as empty for custom attribute payloads.

    `None`, `False`, numeric zero, `""`, `"0"` and empty containers are empty.

    Args:
        value: Candidate value.

    Returns:
        bool: True when the value is empty.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(value, str):
        return value in _DOMAIN_EMPTY_STRING_VALUES
    return not value


def domain_normalize_group_ids(group_ids: Any, field_name: str) -> tuple[Any, ...] | None:
    """Validate an optional list of group identifiers.

    Args:
        group_ids: Candidate group identifiers, or None when absent.
        field_name: Contract field name used in error reporting.

    Returns:
        tuple[Any, ...] | None: Group identifiers in input order, None when absent.

    Raises:
        CampaignerValidationError: Raised when the value is a scalar, text or mapping.
    """

    if group_ids is None:
        return None
    if isinstance(group_ids, (str, bytes, Mapping)) or not isinstance(group_ids, Iterable):
        raise CampaignerValidationError(f"{field_name} must be a sequence of group identifiers", field_name=field_name)
    return tuple(group_ids)


def _domain_coerce_contact_id(raw_contact_id: Any) -> int:
    if isinstance(raw_contact_id, bool):
        raise CampaignerValidationError("ContactId must be an integer", field_name="ContactId")
    try:
        if isinstance(raw_contact_id, str):
            # numeric text truncates toward zero like numeric values do
            contact_id = int(Decimal(raw_contact_id.strip()))
        else:
            contact_id = int(raw_contact_id)
    except (TypeError, ValueError, OverflowError, InvalidOperation) as error:
        raise CampaignerValidationError("ContactId must be an integer", field_name="ContactId") from error
    if contact_id < 0:
        raise CampaignerValidationError("ContactId must be >= 0", field_name="ContactId")
    return contact_id
