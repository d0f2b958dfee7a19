"""Conversion of normalized contact models into SOAP parameter trees.

Parameter trees are plain mappings consumed by the SOAP transport. Keys that
start with `@` become XML attributes of the enclosing element and the `_` key
carries element text. Lists repeat the element under the same name.
"""

from __future__ import annotations

from typing import Any, Iterable

from .models import ContactKey, ContactRecord, CustomAttribute, NullableString


def domain_contact_key_parameters(contact_key: ContactKey) -> dict[str, Any]:
    """Build the `ContactKey` parameter node.

    Args:
        contact_key: Normalized contact key.

    Returns:
        dict[str, Any]: Parameter node for one contact key.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "ContactId": contact_key.contact_id,
        "ContactUniqueIdentifier": contact_key.contact_unique_identifier,
    }


def domain_contact_keys_parameters(contact_keys: Iterable[ContactKey]) -> dict[str, Any]:
    """Build the `ArrayOfContactKey` parameter node."""

    return {"ContactKey": [domain_contact_key_parameters(contact_key) for contact_key in contact_keys]}


def domain_nullable_string_parameters(nullable_string: NullableString) -> dict[str, Any]:
    """Build one `NullableString` parameter node with its `IsNull` flag."""

    return {"@IsNull": nullable_string.is_null, "_": nullable_string.value}


def domain_custom_attribute_parameters(custom_attribute: CustomAttribute) -> dict[str, Any]:
    """Build one `CustomAttribute` parameter node with its `Id` and `IsNull` flag."""

    parameters: dict[str, Any] = {
        "@Id": custom_attribute.attribute_id,
        "@IsNull": custom_attribute.is_null,
    }
    if custom_attribute.value is not None:
        parameters["_"] = str(custom_attribute.value)
    return parameters


def domain_group_ids_parameters(group_ids: Iterable[Any]) -> dict[str, Any]:
    """Build one `ArrayOfInt` group identifier node."""

    return {"int": list(group_ids)}


def domain_contact_record_parameters(contact_record: ContactRecord) -> dict[str, Any]:
    """Build the `ContactData` parameter node for one normalized record.

    Optional fields that were not supplied are carried as None and omitted by
    the transport serializer.

    Args:
        contact_record: Normalized contact record.

    Returns:
        dict[str, Any]: Parameter node for one contact.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    parameters: dict[str, Any] = {
        "ContactKey": domain_contact_key_parameters(contact_record.contact_key),
        "EmailAddress": domain_nullable_string_parameters(contact_record.email_address),
        "FirstName": domain_nullable_string_parameters(contact_record.first_name),
        "LastName": domain_nullable_string_parameters(contact_record.last_name),
        "PhoneNumber": domain_nullable_string_parameters(contact_record.phone_number),
        "Fax": domain_nullable_string_parameters(contact_record.fax),
        "Status": contact_record.status.value if contact_record.status is not None else None,
        "MailFormat": contact_record.mail_format.value if contact_record.mail_format is not None else None,
        "IsTestContact": contact_record.is_test_contact,
    }

    if contact_record.custom_attributes is not None:
        parameters["CustomAttributes"] = {
            "CustomAttribute": [
                domain_custom_attribute_parameters(custom_attribute)
                for custom_attribute in contact_record.custom_attributes
            ]
        }
    if contact_record.add_to_group is not None:
        parameters["AddToGroup"] = domain_group_ids_parameters(contact_record.add_to_group)
    if contact_record.remove_from_group is not None:
        parameters["RemoveFromGroup"] = domain_group_ids_parameters(contact_record.remove_from_group)
    return parameters


def domain_contact_records_parameters(contact_records: Iterable[ContactRecord]) -> dict[str, Any]:
    """Build the `ArrayOfContactData` parameter node."""

    return {"ContactData": [domain_contact_record_parameters(contact_record) for contact_record in contact_records]}
