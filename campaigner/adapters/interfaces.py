"""Typed interfaces for adapter-layer responsibilities."""

from dataclasses import dataclass, field
from typing import Any
from typing import Protocol


@dataclass(frozen=True)
class TransportFault:
    """Fault returned by the remote service instead of a result.

    Attributes:
        fault_code: SOAP fault code text.
        fault_string: Human-readable fault description.
        detail: Optional fault detail document.
    """

    fault_code: str
    fault_string: str
    detail: Any = None


@dataclass(frozen=True)
class TransportResponse:
    """Result contract for one SOAP method invocation.

    Attributes:
        body: Materialized response body document, None when the body is empty.
        headers: Materialized response header documents keyed by header name.
        fault: Fault marker when the service answered with a fault.
    """

    body: Any = None
    headers: dict[str, Any] = field(default_factory=dict)
    fault: TransportFault | None = None


class SoapTransportPort(Protocol):
    """Port definition for invoking one remote SOAP method."""

    def transport_call(self, method_name: str, envelope: dict[str, Any]) -> TransportResponse:
        """Invoke one remote method with a prepared parameter envelope.

        Args:
            method_name: Remote method name.
            envelope: Parameter tree with a single top-level key equal to `method_name`.

        Returns:
            TransportResponse: Materialized body, response headers and optional fault.

        Raises:
            ConnectionError: Raised when the remote endpoint cannot be reached.
            TimeoutError: Raised when the request exceeds its timeout.
        """

    def transport_close(self) -> None:
        """Release network resources held by the transport.

        Returns:
            None: Closing does not return values.
        """


class QuerySchemaValidatorPort(Protocol):
    """Port definition for validating XML report queries against a schema."""

    def schema_validate_query(self, query: str) -> bool:
        """Return whether the query document satisfies the configured schema.

        Args:
            query: XML contact query text.

        Returns:
            bool: True when the query is valid.

        Raises:
            RuntimeError: Implementations report failures as False instead of raising.
        """
