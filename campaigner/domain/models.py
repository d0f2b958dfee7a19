"""Typed domain models exchanged between the client layers.

Contact models mirror the remote contract shapes after normalization. They are
constructed fresh per call and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from .catalogue import ContactStatus, MailFormat


@dataclass(frozen=True)
class ContactKey:
    """Identifier pair of one remote contact.

    Attributes:
        contact_id: Numeric contact identifier, `0` when not known.
        contact_unique_identifier: Caller-side unique identifier, always present.
    """

    contact_id: int
    contact_unique_identifier: str


@dataclass(frozen=True)
class NullableString:
    """String value with an explicit presence flag.

    `is_null=True` means the caller did not supply the field and the service
    must leave it unchanged. `is_null=False` with an empty `value` clears it.

    Attributes:
        is_null: True when the field was not supplied.
        value: Supplied content, empty string when not supplied.
    """

    is_null: bool
    value: str = ""


@dataclass(frozen=True)
class CustomAttribute:
    """One custom attribute value with an explicit emptiness flag.

    Attributes:
        attribute_id: Custom attribute identifier.
        is_null: True when the supplied value is empty.
        value: Supplied value, None when empty.
    """

    attribute_id: Any
    is_null: bool
    value: Any | None = None


@dataclass(frozen=True)
class ContactRecord:
    """Normalized contact data ready for upload web methods.

    Attributes:
        contact_key: Normalized contact identifier pair.
        email_address: Nullable email address.
        first_name: Nullable first name.
        last_name: Nullable last name.
        phone_number: Nullable phone number.
        fax: Nullable fax number.
        status: Subscription status when supplied.
        mail_format: Mail format when supplied.
        is_test_contact: Test-contact flag when supplied.
        custom_attributes: Ordered custom attributes when supplied.
        add_to_group: Group identifiers to join when supplied.
        remove_from_group: Group identifiers to leave when supplied.
    """

    contact_key: ContactKey
    email_address: NullableString
    first_name: NullableString
    last_name: NullableString
    phone_number: NullableString
    fax: NullableString
    status: ContactStatus | None = None
    mail_format: MailFormat | None = None
    is_test_contact: bool | None = None
    custom_attributes: tuple[CustomAttribute, ...] | None = None
    add_to_group: tuple[Any, ...] | None = None
    remove_from_group: tuple[Any, ...] | None = None


@dataclass(frozen=True)
class ReportResult:
    """Decoded `ReportResult` element of a report query response.

    Attributes:
        attributes: Own XML attributes of the `ReportResult` element.
        attribute_values: `Attribute` element text keyed by its `Id`.
    """

    attributes: Mapping[str, str] = field(default_factory=dict)
    attribute_values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "attribute_values", MappingProxyType(dict(self.attribute_values)))

    def __hash__(self) -> int:
        return hash((tuple(sorted(self.attributes.items())), tuple(sorted(self.attribute_values.items()))))


class CallOutcomeKind(str, Enum):
    """Classification of one remote call result."""

    DATA = "data"
    SUCCESS = "success"
    FAILURE = "failure"
    INVALID = "invalid"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CallOutcome:
    """Normalized result of one remote call.

    Attributes:
        kind: Outcome classification.
        payload: Plain response payload for `DATA` outcomes, else None.
        detail: Optional diagnostic text such as a fault message.
    """

    kind: CallOutcomeKind
    payload: Any = None
    detail: str | None = None

    @classmethod
    def data(cls, payload: Any) -> CallOutcome:
        return cls(kind=CallOutcomeKind.DATA, payload=payload)

    @classmethod
    def success(cls) -> CallOutcome:
        return cls(kind=CallOutcomeKind.SUCCESS)

    @classmethod
    def failure(cls) -> CallOutcome:
        return cls(kind=CallOutcomeKind.FAILURE)

    @classmethod
    def invalid(cls, detail: str | None = None) -> CallOutcome:
        return cls(kind=CallOutcomeKind.INVALID, detail=detail)

    @classmethod
    def unknown(cls, detail: str | None = None) -> CallOutcome:
        return cls(kind=CallOutcomeKind.UNKNOWN, detail=detail)

    def outcome_value(self) -> Any:
        """Collapse the outcome to the caller-facing value.

        Returns:
            Any: Payload for data, True for success, False for reported failure,
            None for invalid input and unknown outcomes.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if self.kind is CallOutcomeKind.DATA:
            return self.payload
        if self.kind is CallOutcomeKind.SUCCESS:
            return True
        if self.kind is CallOutcomeKind.FAILURE:
            return False
        return None
