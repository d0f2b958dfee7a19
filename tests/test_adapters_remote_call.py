"""Regression tests for remote call envelope assembly and outcome classification."""

from __future__ import annotations

from typing import Any

import pytest

from campaigner.adapters import (
    RemoteCallAdapter,
    TransportFault,
    TransportResponse,
    adapter_decode_report_result,
    remote_call_build_decoder_registry,
)
from campaigner.domain import CallOutcomeKind, ReportResult


class _TransportStub:
    """Transport stub returning one preset response and capturing calls."""

    def __init__(self, response: TransportResponse | None = None, error: Exception | None = None):
        self.response = response or TransportResponse()
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def transport_call(self, method_name: str, envelope: dict[str, Any]) -> TransportResponse:
        """Capture call and return preset response.

        Args:
            method_name: Remote method name.
            envelope: Parameter envelope.

        Returns:
            TransportResponse: Preset response.

        Raises:
            Exception: Raised when the stub was built with an error.
        """

        self.calls.append((method_name, envelope))
        if self.error is not None:
            raise self.error
        return self.response


def _build_adapter(transport: _TransportStub) -> RemoteCallAdapter:
    return RemoteCallAdapter(transport=transport, username="api-user", password="secret")


def test_adapters_remote_call_envelope_merges_authentication_under_method_name() -> None:
    """Send authentication and parameters under the method name key.

    Returns:
        None: Assertions validate envelope shape.

    Raises:
        AssertionError: Raised when envelope shape is incorrect.
    """

    transport = _TransportStub(TransportResponse(body={"Id": "5"}))
    adapter = _build_adapter(transport)

    adapter.adapter_invoke("DeleteAttribute", {"id": 5})

    assert transport.calls == [
        (
            "DeleteAttribute",
            {
                "DeleteAttribute": {
                    "authentication": {"Username": "api-user", "Password": "secret"},
                    "id": 5,
                }
            },
        )
    ]


def test_adapters_remote_call_payload_wins_over_header_error_flag() -> None:
    """Return data outcome for non-empty payload regardless of headers.

    Returns:
        None: Assertions validate payload precedence.

    Raises:
        AssertionError: Raised when headers override payload.
    """

    transport = _TransportStub(
        TransportResponse(
            body={"ReportTicketId": "ticket-1", "RowCount": "3"},
            headers={"ResponseHeader": {"ErrorFlag": True}},
        )
    )

    outcome = _build_adapter(transport).adapter_invoke("RunReport", {"xmlContactQuery": "<q/>"})

    assert outcome.kind is CallOutcomeKind.DATA
    assert outcome.outcome_value() == {"ReportTicketId": "ticket-1", "RowCount": "3"}


@pytest.mark.parametrize(
    ("error_flag", "expected_kind", "expected_value"),
    [
        (False, CallOutcomeKind.SUCCESS, True),
        (True, CallOutcomeKind.FAILURE, False),
        ("false", CallOutcomeKind.SUCCESS, True),
        ("true", CallOutcomeKind.FAILURE, False),
        ("1", CallOutcomeKind.FAILURE, False),
    ],
)
def test_adapters_remote_call_empty_payload_uses_header_error_flag(
    error_flag: object,
    expected_kind: CallOutcomeKind,
    expected_value: bool,
) -> None:
    """Map `ResponseHeader.ErrorFlag` to boolean outcomes for empty payloads."""

    transport = _TransportStub(TransportResponse(body=None, headers={"ResponseHeader": {"ErrorFlag": error_flag}}))

    outcome = _build_adapter(transport).adapter_invoke("DeleteContacts", {})

    assert outcome.kind is expected_kind
    assert outcome.outcome_value() is expected_value


@pytest.mark.parametrize(
    "response",
    [
        TransportResponse(fault=TransportFault(fault_code="soap:Client", fault_string="Invalid credentials")),
        TransportResponse(
            body={"Id": "1"},
            headers={"ResponseHeader": {"ErrorFlag": False}},
            fault=TransportFault(fault_code="soap:Server", fault_string="boom"),
        ),
        TransportResponse(body="", headers={}),
        TransportResponse(body={}, headers={"ResponseHeader": {"ReturnCode": "M_4.1.1.1_SUCCESS"}}),
        TransportResponse(body=None, headers={"ResponseHeader": {"ErrorFlag": "maybe"}}),
    ],
)
def test_adapters_remote_call_fault_or_unrecognized_shape_is_unknown(response: TransportResponse) -> None:
    """Return unknown outcome for faults and unrecognized shapes."""

    outcome = _build_adapter(_TransportStub(response)).adapter_invoke("ListAttributes", {})

    assert outcome.kind is CallOutcomeKind.UNKNOWN
    assert outcome.outcome_value() is None


def test_adapters_remote_call_converts_nested_documents_to_plain_data() -> None:
    """Convert decoded report results and nested sequences to plain data.

    Returns:
        None: Assertions validate recursive plain conversion.

    Raises:
        AssertionError: Raised when nested values are not converted.
    """

    report_result = ReportResult(attributes={"Id": "T1"}, attribute_values={"A1": "v1"})
    transport = _TransportStub(TransportResponse(body={"ReportResult": [report_result, report_result]}))

    outcome = _build_adapter(transport).adapter_invoke("DownloadReport", {})

    assert outcome.payload == {
        "ReportResult": [
            {"Attributes": {"Id": "T1"}, "AttributeValues": {"A1": "v1"}},
            {"Attributes": {"Id": "T1"}, "AttributeValues": {"A1": "v1"}},
        ]
    }


def test_adapters_remote_call_does_not_catch_transport_errors() -> None:
    """Let transport-level exceptions propagate to the caller."""

    adapter = _build_adapter(_TransportStub(error=ConnectionError("endpoint unreachable")))

    with pytest.raises(ConnectionError, match="endpoint unreachable"):
        adapter.adapter_invoke("ListAttributes", {})


def test_adapters_remote_call_rejects_blank_configuration() -> None:
    """Reject blank method names and credentials."""

    with pytest.raises(ValueError, match="username"):
        RemoteCallAdapter(transport=_TransportStub(), username=" ", password="secret")
    with pytest.raises(ValueError, match="password"):
        RemoteCallAdapter(transport=_TransportStub(), username="user", password="")
    with pytest.raises(ValueError, match="method_name"):
        _build_adapter(_TransportStub()).adapter_invoke("  ", {})


def test_adapters_remote_call_decoder_registry_maps_report_result_type() -> None:
    """Register the report decoder for the contract `ReportResult` type."""

    registry = remote_call_build_decoder_registry("https://ws.campaigner.com/2013/01/")

    assert len(registry) == 1
    assert registry.registry_resolve("https://ws.campaigner.com/2013/01", "ReportResult") is adapter_decode_report_result
    assert registry.registry_resolve("urn:other", "ReportResult") is None
