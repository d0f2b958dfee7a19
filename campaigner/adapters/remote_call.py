"""Remote call adapter that authenticates and interprets Campaigner calls."""

from __future__ import annotations

import logging
from typing import Any, Final

from campaigner.domain import CallOutcome, domain_document_is_empty, domain_document_to_plain

from .decoder_registry import XmlTypeDecoderRegistry
from .interfaces import SoapTransportPort
from .report_decoder import REPORT_RESULT_TYPE_NAME, adapter_decode_report_result

logger = logging.getLogger(__name__)


def remote_call_build_decoder_registry(contract_namespace: str) -> XmlTypeDecoderRegistry:
    """Build the decoder registry a Campaigner transport needs.

    Args:
        contract_namespace: Target namespace of the remote contract.

    Returns:
        XmlTypeDecoderRegistry: Registry mapping `ReportResult` to its decoder.

    Raises:
        ValueError: Raised when the namespace is blank.
    """

    normalized_namespace = contract_namespace.strip().rstrip("/")
    if not normalized_namespace:
        raise ValueError("contract_namespace must not be blank")

    registry = XmlTypeDecoderRegistry()
    registry.registry_register(normalized_namespace, REPORT_RESULT_TYPE_NAME, adapter_decode_report_result)
    return registry


class RemoteCallAdapter:
    """Invoke remote methods and classify their results.

    Results are classified as:
    - `DATA` when the body carries a non-empty payload;
    - `SUCCESS` / `FAILURE` when the body is empty and `ResponseHeader.ErrorFlag` is false / true;
    - `UNKNOWN` on faults and unrecognized shapes.

    Exceptions raised by the transport are not caught.
    """

    _RESPONSE_HEADER_NAME: Final[str] = "ResponseHeader"
    _ERROR_FLAG_NAME: Final[str] = "ErrorFlag"
    _TRUE_FLAG_VALUES: Final[frozenset[str]] = frozenset({"true", "1"})
    _FALSE_FLAG_VALUES: Final[frozenset[str]] = frozenset({"false", "0", ""})

    def __init__(self, transport: SoapTransportPort, username: str, password: str):
        """Initialize adapter with transport and fixed credentials.

        Args:
            transport: SOAP transport implementation.
            username: API account username.
            password: API account password.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when transport or credentials are invalid.
        """

        if transport is None:
            raise ValueError("transport must not be None")
        if not username or not username.strip():
            raise ValueError("username must not be blank")
        if not password:
            raise ValueError("password must not be blank")

        self._transport = transport
        self._authentication_node: dict[str, dict[str, str]] = {
            "authentication": {
                "Username": username.strip(),
                "Password": password,
            }
        }

    def adapter_build_envelope(self, method_name: str, parameters: dict[str, Any] | None = None) -> dict[str, Any]:
        """Merge the authentication node with method parameters.

        Args:
            method_name: Remote method name.
            parameters: Method parameter tree.

        Returns:
            dict[str, Any]: Envelope keyed by method name.

        Raises:
            ValueError: Raised when the method name is blank.
        """

        normalized_method_name = str(method_name).strip()
        if not normalized_method_name:
            raise ValueError("method_name must not be blank")

        authentication = {
            "authentication": dict(self._authentication_node["authentication"]),
        }
        return {normalized_method_name: {**authentication, **(parameters or {})}}

    def adapter_invoke(self, method_name: str, parameters: dict[str, Any] | None = None) -> CallOutcome:
        """Invoke one remote method and classify the result.

        Args:
            method_name: Remote method name.
            parameters: Method parameter tree.

        Returns:
            CallOutcome: Data, success, failure or unknown outcome.

        Raises:
            ValueError: Raised when the method name is blank.
            ConnectionError: Propagated from the transport.
            TimeoutError: Propagated from the transport.
        """

        envelope = self.adapter_build_envelope(method_name, parameters)
        normalized_method_name = next(iter(envelope))
        logger.debug("Invoking Campaigner method %s", normalized_method_name)

        response = self._transport.transport_call(normalized_method_name, envelope)

        if response.fault is not None:
            logger.warning(
                "Campaigner method %s returned fault code=%s message=%s",
                normalized_method_name,
                response.fault.fault_code,
                response.fault.fault_string,
            )
            return CallOutcome.unknown(detail=response.fault.fault_string or response.fault.fault_code)

        payload = domain_document_to_plain(response.body)
        if not domain_document_is_empty(payload):
            return CallOutcome.data(payload)

        error_flag = self._adapter_read_error_flag(domain_document_to_plain(response.headers))
        if error_flag is None:
            logger.debug("Campaigner method %s returned no payload and no error flag", normalized_method_name)
            return CallOutcome.unknown(detail="empty response without error flag")
        if error_flag:
            return CallOutcome.failure()
        return CallOutcome.success()

    def adapter_close(self) -> None:
        """Close the underlying transport."""

        self._transport.transport_close()

    def _adapter_read_error_flag(self, headers: Any) -> bool | None:
        """Read `ResponseHeader.ErrorFlag` from plain response headers.

        Args:
            headers: Plain response header mapping.

        Returns:
            bool | None: Error flag value, None when missing or unrecognized.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if not isinstance(headers, dict):
            return None
        response_header = headers.get(self._RESPONSE_HEADER_NAME)
        if not isinstance(response_header, dict):
            return None
        error_flag = response_header.get(self._ERROR_FLAG_NAME)
        if error_flag is None:
            return None
        if isinstance(error_flag, bool):
            return error_flag
        if isinstance(error_flag, (int, float)):
            return bool(error_flag)

        normalized_flag = str(error_flag).strip().lower()
        if normalized_flag in self._TRUE_FLAG_VALUES:
            return True
        if normalized_flag in self._FALSE_FLAG_VALUES:
            return False
        return None
