"""Regression tests for contact input validation and normalization helpers."""

from __future__ import annotations

import pytest

from campaigner.domain import (
    CampaignerValidationError,
    ContactKey,
    ContactStatus,
    CustomAttribute,
    MailFormat,
    NullableString,
    ReportType,
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
from campaigner.domain.parameters import (
    domain_contact_record_parameters,
    domain_custom_attribute_parameters,
)


@pytest.mark.parametrize(
    "contact_key",
    [
        {},
        {"ContactId": 12},
        {"ContactId": 12, "ContactUniqueIdentifier": None},
    ],
)
def test_domain_normalize_contact_key_requires_unique_identifier(contact_key: dict) -> None:
    """Reject contact keys without `ContactUniqueIdentifier`.

    Args:
        contact_key: Candidate contact key mapping.

    Returns:
        None: Assertions validate required identifier enforcement.

    Raises:
        AssertionError: Raised when missing identifiers are accepted.
    """

    with pytest.raises(CampaignerValidationError, match="Missing required identifier") as error_info:
        domain_normalize_contact_key(contact_key)

    assert error_info.value.field_name == "ContactUniqueIdentifier"


def test_domain_normalize_contact_key_coerces_id_and_defaults_to_zero() -> None:
    """Coerce supplied contact ids to int and default absent ids to 0.

    Returns:
        None: Assertions validate id coercion and defaulting.

    Raises:
        AssertionError: Raised when normalized keys differ from expectation.
    """

    assert domain_normalize_contact_key({"ContactId": "42", "ContactUniqueIdentifier": "a@example.com"}) == ContactKey(
        contact_id=42,
        contact_unique_identifier="a@example.com",
    )
    assert domain_normalize_contact_key({"ContactId": 7.0, "ContactUniqueIdentifier": 99}) == ContactKey(
        contact_id=7,
        contact_unique_identifier="99",
    )
    assert domain_normalize_contact_key({"ContactUniqueIdentifier": "b@example.com"}).contact_id == 0
    assert domain_normalize_contact_key({"ContactId": None, "ContactUniqueIdentifier": "b@example.com"}).contact_id == 0
    assert domain_normalize_contact_key({"ContactId": "3.7", "ContactUniqueIdentifier": "c@example.com"}).contact_id == 3
    assert domain_normalize_contact_key({"ContactId": " 4.0 ", "ContactUniqueIdentifier": "c@example.com"}).contact_id == 4
    assert domain_normalize_contact_key({"ContactId": 3.7, "ContactUniqueIdentifier": "c@example.com"}).contact_id == 3


@pytest.mark.parametrize("contact_id", ["abc", "", "nan", "-2.5", -1, True, [1]])
def test_domain_normalize_contact_key_rejects_invalid_ids(contact_id: object) -> None:
    """Reject ids that are not non-negative integers."""

    with pytest.raises(CampaignerValidationError, match="ContactId"):
        domain_normalize_contact_key({"ContactId": contact_id, "ContactUniqueIdentifier": "x"})


def test_domain_normalize_contact_keys_preserves_order_and_fails_on_first_invalid() -> None:
    """Normalize key lists in order and abort on the first invalid element.

    Returns:
        None: Assertions validate ordering and failure policy.

    Raises:
        AssertionError: Raised when ordering or failure policy is broken.
    """

    normalized_keys = domain_normalize_contact_keys(
        [
            {"ContactUniqueIdentifier": "first"},
            {"ContactId": 5, "ContactUniqueIdentifier": "second"},
        ]
    )

    assert [key.contact_unique_identifier for key in normalized_keys] == ["first", "second"]
    assert [key.contact_id for key in normalized_keys] == [0, 5]

    with pytest.raises(CampaignerValidationError):
        domain_normalize_contact_keys([{"ContactUniqueIdentifier": "ok"}, {"ContactId": 1}])


@pytest.mark.parametrize("status", ["Unsubscribed", "Subscribed", "HardBounce", "SoftBounce", "Pending"])
def test_domain_normalize_status_is_identity_for_known_values(status: str) -> None:
    """Return known status values unchanged."""

    normalized_status = domain_normalize_status(status)

    assert normalized_status == status
    assert isinstance(normalized_status, ContactStatus)


@pytest.mark.parametrize("status", ["subscribed", "Bogus", "", None])
def test_domain_normalize_status_rejects_unknown_values(status: object) -> None:
    """Reject status values outside the contract enumeration."""

    with pytest.raises(CampaignerValidationError, match="Invalid Status"):
        domain_normalize_status(status)


def test_domain_normalize_mail_format_accepts_known_and_rejects_unknown_values() -> None:
    """Validate mail format enumeration.

    Returns:
        None: Assertions validate mail format validation.

    Raises:
        AssertionError: Raised when mail format validation is incorrect.
    """

    assert domain_normalize_mail_format("Text") == "Text"
    assert domain_normalize_mail_format("HTML") is MailFormat.HTML
    assert domain_normalize_mail_format(MailFormat.BOTH) is MailFormat.BOTH

    with pytest.raises(CampaignerValidationError, match="Invalid MailFormat"):
        domain_normalize_mail_format("html")


def test_domain_normalize_report_type_accepts_all_nine_report_types() -> None:
    """Accept the nine known report types and reject anything else."""

    assert len(ReportType) == 9
    for report_type in ReportType:
        assert domain_normalize_report_type(report_type.value) is report_type

    with pytest.raises(CampaignerValidationError, match='Invalid reportType value "bogus"'):
        domain_normalize_report_type("bogus")


def test_domain_normalize_contact_record_requires_contact_key() -> None:
    """Reject contact data without `ContactKey`.

    Returns:
        None: Assertions validate required contact key enforcement.

    Raises:
        AssertionError: Raised when contact data without key is accepted.
    """

    with pytest.raises(CampaignerValidationError, match="Missing contact key"):
        domain_normalize_contact_record({"EmailAddress": "a@example.com"})

    with pytest.raises(CampaignerValidationError, match="Missing required identifier"):
        domain_normalize_contact_record({"ContactKey": {"ContactId": 3}})


def test_domain_normalize_contact_record_distinguishes_absent_and_empty_fields() -> None:
    """Flag absent scalar fields as null and keep supplied empty strings.

    Returns:
        None: Assertions validate presence-flag semantics.

    Raises:
        AssertionError: Raised when absent and empty fields are conflated.
    """

    record = domain_normalize_contact_record(
        {
            "ContactKey": {"ContactUniqueIdentifier": "a@example.com"},
            "EmailAddress": "a@example.com",
            "FirstName": "",
            "PhoneNumber": 5551234,
            "Fax": None,
        }
    )

    assert record.contact_key == ContactKey(contact_id=0, contact_unique_identifier="a@example.com")
    assert record.email_address == NullableString(is_null=False, value="a@example.com")
    assert record.first_name == NullableString(is_null=False, value="")
    assert record.last_name == NullableString(is_null=True, value="")
    assert record.phone_number == NullableString(is_null=False, value="5551234")
    assert record.fax == NullableString(is_null=True, value="")
    assert record.status is None
    assert record.mail_format is None
    assert record.is_test_contact is None
    assert record.custom_attributes is None
    assert record.add_to_group is None
    assert record.remove_from_group is None


def test_domain_normalize_contact_record_carries_optional_enums_and_groups() -> None:
    """Validate optional enumerations and pass group lists through."""

    record = domain_normalize_contact_record(
        {
            "ContactKey": {"ContactId": 10, "ContactUniqueIdentifier": "a@example.com"},
            "Status": "Subscribed",
            "MailFormat": "Both",
            "IsTestContact": 1,
            "AddToGroup": [1, 2],
            "RemoveFromGroup": (3,),
        }
    )

    assert record.status is ContactStatus.SUBSCRIBED
    assert record.mail_format is MailFormat.BOTH
    assert record.is_test_contact is True
    assert record.add_to_group == (1, 2)
    assert record.remove_from_group == (3,)

    with pytest.raises(CampaignerValidationError, match="Invalid Status"):
        domain_normalize_contact_record({"ContactKey": {"ContactUniqueIdentifier": "x"}, "Status": "Active"})


@pytest.mark.parametrize("group_ids", ["10", b"10", {"10": 1}, 10])
def test_domain_normalize_group_ids_rejects_text_mappings_and_scalars(group_ids: object) -> None:
    """Reject group lists that would otherwise be iterated character by character."""

    with pytest.raises(CampaignerValidationError, match="globalAddToGroup"):
        domain_normalize_group_ids(group_ids, "globalAddToGroup")

    with pytest.raises(CampaignerValidationError, match="AddToGroup"):
        domain_normalize_contact_record({"ContactKey": {"ContactUniqueIdentifier": "x"}, "AddToGroup": group_ids})


def test_domain_normalize_group_ids_keeps_order_and_absence() -> None:
    """Return group ids as an ordered tuple and keep None for absent lists."""

    assert domain_normalize_group_ids([3, 1, 2], "AddToGroup") == (3, 1, 2)
    assert domain_normalize_group_ids(iter([5]), "AddToGroup") == (5,)
    assert domain_normalize_group_ids(None, "AddToGroup") is None


def test_domain_normalize_custom_attributes_preserve_order_and_flag_empty_values() -> None:
    """Expand custom attributes in insertion order with emptiness flags.

    Returns:
        None: Assertions validate custom attribute expansion.

    Raises:
        AssertionError: Raised when order or emptiness flags are wrong.
    """

    custom_attributes = domain_normalize_custom_attributes(
        {
            "900": "gold",
            "901": "",
            "902": 0,
            "903": "0",
            "904": None,
            "905": 15,
        }
    )

    assert custom_attributes == (
        CustomAttribute(attribute_id="900", is_null=False, value="gold"),
        CustomAttribute(attribute_id="901", is_null=True, value=None),
        CustomAttribute(attribute_id="902", is_null=True, value=None),
        CustomAttribute(attribute_id="903", is_null=True, value=None),
        CustomAttribute(attribute_id="904", is_null=True, value=None),
        CustomAttribute(attribute_id="905", is_null=False, value=15),
    )


def test_domain_custom_attribute_parameters_keep_value_and_empty_flag() -> None:
    """Read back custom attribute parameters built from normalized values."""

    filled, empty = domain_normalize_custom_attributes({11: "blue", 12: ""})

    assert domain_custom_attribute_parameters(filled) == {"@Id": 11, "@IsNull": False, "_": "blue"}
    assert domain_custom_attribute_parameters(empty) == {"@Id": 12, "@IsNull": True}


def test_domain_contact_record_parameters_build_contract_shape() -> None:
    """Build `ContactData` parameter nodes with explicit presence flags.

    Returns:
        None: Assertions validate contact parameter tree shape.

    Raises:
        AssertionError: Raised when parameter tree differs from contract shape.
    """

    (record,) = domain_normalize_contact_records(
        [
            {
                "ContactKey": {"ContactUniqueIdentifier": "a@example.com"},
                "EmailAddress": "a@example.com",
                "MailFormat": "HTML",
                "CustomAttributes": {"7": "x"},
                "AddToGroup": [4],
            }
        ]
    )

    parameters = domain_contact_record_parameters(record)

    assert parameters["ContactKey"] == {"ContactId": 0, "ContactUniqueIdentifier": "a@example.com"}
    assert parameters["EmailAddress"] == {"@IsNull": False, "_": "a@example.com"}
    assert parameters["FirstName"] == {"@IsNull": True, "_": ""}
    assert parameters["Status"] is None
    assert parameters["MailFormat"] == "HTML"
    assert parameters["IsTestContact"] is None
    assert parameters["CustomAttributes"] == {"CustomAttribute": [{"@Id": "7", "@IsNull": False, "_": "x"}]}
    assert parameters["AddToGroup"] == {"int": [4]}
    assert "RemoveFromGroup" not in parameters


def test_domain_normalize_contact_records_fails_on_first_invalid_record() -> None:
    """Abort record normalization on the first invalid record."""

    with pytest.raises(CampaignerValidationError, match="Missing contact key"):
        domain_normalize_contact_records(
            [
                {"ContactKey": {"ContactUniqueIdentifier": "ok"}},
                {"EmailAddress": "missing-key@example.com"},
            ]
        )
