"""SOAP 1.1 transport for the Campaigner contact-management web service."""

from __future__ import annotations

import copy
import io
import logging
from enum import Enum
from typing import Any, Final, Mapping
import xml.etree.ElementTree as element_tree

import httpx

from campaigner.domain import CampaignerTransportError, CampaignerTransportTimeoutError

from .decoder_registry import XmlTypeDecoder, XmlTypeDecoderRegistry
from .interfaces import SoapTransportPort, TransportFault, TransportResponse

logger = logging.getLogger(__name__)


class CampaignerSoapTransport(SoapTransportPort):
    """Document/literal SOAP 1.1 transport over `httpx`.

    Faults are returned as `TransportFault` data instead of being raised.
    Response headers are materialized alongside the body, and elements whose
    type is registered in the decoder registry are handed to their decoder.
    """

    _SOAP_ENVELOPE_NAMESPACE: Final[str] = "http://schemas.xmlsoap.org/soap/envelope/"
    _XSI_NAMESPACE: Final[str] = "http://www.w3.org/2001/XMLSchema-instance"
    _ENCODING: Final[str] = "utf-8"
    _USER_AGENT: Final[str] = "campaigner-contact-client/1.0 (Python/httpx)"

    def __init__(
        self,
        endpoint_url: str,
        contract_namespace: str,
        decoder_registry: XmlTypeDecoderRegistry | None = None,
        request_timeout_seconds: float = 30.0,
        trace_enabled: bool = True,
        http_headers: Mapping[str, str] | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Initialize SOAP transport.

        Args:
            endpoint_url: SOAP endpoint URL.
            contract_namespace: Target namespace of request and response elements.
            decoder_registry: Optional custom type materializers for this transport.
            request_timeout_seconds: HTTP request timeout in seconds.
            trace_enabled: Keep last request and response payloads for diagnostics.
            http_headers: Extra HTTP headers; SOAP headers required by the protocol take precedence.
            http_client: Optional preconfigured HTTP client owned by the caller.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_endpoint_url = endpoint_url.strip()
        normalized_namespace = contract_namespace.strip()
        if not normalized_endpoint_url:
            raise ValueError("endpoint_url must not be blank")
        if not normalized_namespace:
            raise ValueError("contract_namespace must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._endpoint_url = normalized_endpoint_url
        self._namespace = normalized_namespace.rstrip("/")
        self._decoder_registry = decoder_registry or XmlTypeDecoderRegistry()
        self._request_timeout_seconds = request_timeout_seconds
        self._trace_enabled = trace_enabled
        self._http_headers = dict(http_headers or {})
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client()
        self.transport_last_request: bytes | None = None
        self.transport_last_response: bytes | None = None

    def transport_call(self, method_name: str, envelope: dict[str, Any]) -> TransportResponse:
        """Serialize, send and materialize one SOAP method call.

        Args:
            method_name: Remote method name.
            envelope: Parameter tree keyed by `method_name`.

        Returns:
            TransportResponse: Materialized body, headers and optional fault.

        Raises:
            ValueError: Raised when method name or envelope are invalid.
            CampaignerTransportError: Raised for network failures and non-SOAP responses.
            CampaignerTransportTimeoutError: Raised when the request times out.
        """

        normalized_method_name = method_name.strip()
        if not normalized_method_name:
            raise ValueError("method_name must not be blank")
        if normalized_method_name not in envelope:
            raise ValueError(f"envelope must contain top-level key {normalized_method_name!r}")

        request_payload = self._transport_build_request(normalized_method_name, envelope[normalized_method_name])
        if self._trace_enabled:
            self.transport_last_request = request_payload

        status_code, response_payload = self._transport_http_post(normalized_method_name, request_payload)
        if self._trace_enabled:
            self.transport_last_response = response_payload

        return self._transport_parse_response(response_payload, status_code)

    def transport_close(self) -> None:
        """Close the HTTP client when this transport created it."""

        if self._owns_http_client:
            self._http_client.close()

    def _transport_build_request(self, method_name: str, parameters: Any) -> bytes:
        """Build SOAP request envelope bytes for one method call.

        Args:
            method_name: Remote method name used as body element name.
            parameters: Parameter tree of the method element.

        Returns:
            bytes: UTF-8 encoded SOAP envelope.

        Raises:
            TypeError: Raised when the parameter tree contains unsupported nodes.
        """

        envelope_element = element_tree.Element(f"{{{self._SOAP_ENVELOPE_NAMESPACE}}}Envelope")
        body_element = element_tree.SubElement(envelope_element, f"{{{self._SOAP_ENVELOPE_NAMESPACE}}}Body")
        method_element = element_tree.SubElement(body_element, f"{{{self._namespace}}}{method_name}")
        if parameters is not None:
            if not isinstance(parameters, Mapping):
                raise TypeError("method parameters must be a mapping")
            self._transport_fill_element(method_element, parameters)
        return element_tree.tostring(envelope_element, encoding=self._ENCODING, xml_declaration=True)

    def _transport_append_value(self, parent: element_tree.Element, name: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, (list, tuple)):
            for item in value:
                self._transport_append_value(parent, name, item)
            return

        element = element_tree.SubElement(parent, f"{{{self._namespace}}}{name}")
        if isinstance(value, Mapping):
            self._transport_fill_element(element, value)
            return
        element.text = _transport_format_scalar(value)

    def _transport_fill_element(self, element: element_tree.Element, parameters: Mapping[str, Any]) -> None:
        for key, value in parameters.items():
            if key == "_":
                if value is not None:
                    element.text = _transport_format_scalar(value)
            elif key.startswith("@"):
                if value is not None:
                    element.set(key[1:], _transport_format_scalar(value))
            else:
                self._transport_append_value(element, key, value)

    def _transport_http_post(self, method_name: str, request_payload: bytes) -> tuple[int, bytes]:
        """Execute one HTTP POST and return status code and payload bytes.

        Args:
            method_name: Remote method name used for the `SOAPAction` header.
            request_payload: SOAP envelope bytes.

        Returns:
            tuple[int, bytes]: HTTP status code and response payload.

        Raises:
            CampaignerTransportError: Raised for network failures.
            CampaignerTransportTimeoutError: Raised when the request times out.
        """

        headers = {
            "User-Agent": self._USER_AGENT,
            **self._http_headers,
            "Content-Type": f"text/xml; charset={self._ENCODING}",
            "SOAPAction": f'"{self._namespace}/{method_name}"',
        }
        logger.debug("Posting SOAP request method=%s endpoint=%s", method_name, self._endpoint_url)
        try:
            response = self._http_client.post(
                self._endpoint_url,
                content=request_payload,
                headers=headers,
                timeout=self._request_timeout_seconds,
            )
        except httpx.TimeoutException as error:
            raise CampaignerTransportTimeoutError("Campaigner SOAP request timed out") from error
        except httpx.HTTPError as error:
            raise CampaignerTransportError("Campaigner SOAP request failed") from error

        return response.status_code, bytes(response.content)

    def _transport_parse_response(self, payload: bytes, status_code: int) -> TransportResponse:
        """Parse SOAP response bytes into a transport response contract.

        Args:
            payload: Response payload bytes.
            status_code: HTTP status code of the response.

        Returns:
            TransportResponse: Materialized body, headers and optional fault.

        Raises:
            CampaignerTransportError: Raised when the payload is not a SOAP envelope or HTTP failed without a fault.
        """

        parsed = self._transport_try_parse_xml(payload)
        if parsed is None:
            if status_code >= 400:
                raise CampaignerTransportError(f"Campaigner endpoint returned HTTP {status_code}")
            raise CampaignerTransportError("Campaigner response is not valid XML")
        root, prefixes = parsed

        if root.tag != f"{{{self._SOAP_ENVELOPE_NAMESPACE}}}Envelope":
            raise CampaignerTransportError("Campaigner response is not a SOAP envelope")
        body_element = root.find(f"{{{self._SOAP_ENVELOPE_NAMESPACE}}}Body")
        if body_element is None:
            raise CampaignerTransportError("Campaigner response envelope has no Body")

        headers: dict[str, Any] = {}
        header_element = root.find(f"{{{self._SOAP_ENVELOPE_NAMESPACE}}}Header")
        if header_element is not None:
            for header_child in header_element:
                headers[_transport_local_name(header_child.tag)] = self._transport_materialize(header_child, prefixes)

        fault_element = body_element.find(f"{{{self._SOAP_ENVELOPE_NAMESPACE}}}Fault")
        if fault_element is not None:
            fault = TransportFault(
                fault_code=(fault_element.findtext("faultcode") or "").strip(),
                fault_string=(fault_element.findtext("faultstring") or "").strip(),
                detail=self._transport_materialize_optional(fault_element.find("detail"), prefixes),
            )
            logger.debug("SOAP fault received code=%s", fault.fault_code)
            return TransportResponse(headers=headers, fault=fault)

        if status_code >= 400:
            raise CampaignerTransportError(f"Campaigner endpoint returned HTTP {status_code}")

        response_element = next(iter(body_element), None)
        return TransportResponse(body=self._transport_materialize_body(response_element, prefixes), headers=headers)

    def _transport_materialize_body(self, response_element: element_tree.Element | None, prefixes: dict[str, str]) -> Any:
        """Unwrap the `<Method>Response` element into the returned document.

        A single result part is returned directly. Several parts are returned
        as a mapping keyed by part name.
        """

        if response_element is None:
            return None
        result_parts = list(response_element)
        if not result_parts:
            return None
        if len(result_parts) == 1:
            return self._transport_materialize(result_parts[0], prefixes)
        return self._transport_materialize(response_element, prefixes)

    def _transport_materialize_optional(self, element: element_tree.Element | None, prefixes: dict[str, str]) -> Any:
        if element is None:
            return None
        return self._transport_materialize(element, prefixes)

    def _transport_materialize(self, element: element_tree.Element, prefixes: dict[str, str]) -> Any:
        """Convert one response element into a document tree.

        Args:
            element: Response element.
            prefixes: Namespace prefix map collected from the response.

        Returns:
            Any: Decoded custom type, mapping, list of repeated children or text.

        Raises:
            CampaignerDecodeError: Raised by registered decoders on malformed fragments.
        """

        decoder = self._transport_resolve_decoder(element, prefixes)
        if decoder is not None:
            fragment = copy.copy(element)
            fragment.tail = None
            return decoder(element_tree.tostring(fragment, encoding="unicode"))

        if element.attrib.get(f"{{{self._XSI_NAMESPACE}}}nil") in ("true", "1"):
            return None

        attributes = {
            _transport_local_name(name): value
            for name, value in element.attrib.items()
            if not name.startswith(f"{{{self._XSI_NAMESPACE}}}")
        }
        children = list(element)
        if not children and not attributes:
            return element.text or ""

        document: dict[str, Any] = dict(attributes)
        repeated_names: set[str] = set()
        for child in children:
            child_name = _transport_local_name(child.tag)
            child_value = self._transport_materialize(child, prefixes)
            if child_name not in document:
                document[child_name] = child_value
            elif child_name in repeated_names:
                document[child_name].append(child_value)
            else:
                document[child_name] = [document[child_name], child_value]
                repeated_names.add(child_name)

        if element.text is not None and element.text.strip():
            document["_"] = element.text
        return document

    def _transport_resolve_decoder(self, element: element_tree.Element, prefixes: dict[str, str]) -> XmlTypeDecoder | None:
        """Resolve a registered decoder by `xsi:type` first, then by element name."""

        if not len(self._decoder_registry):
            return None

        declared_type = element.attrib.get(f"{{{self._XSI_NAMESPACE}}}type")
        if declared_type:
            prefix, _, type_name = declared_type.rpartition(":")
            decoder = self._decoder_registry.registry_resolve(prefixes.get(prefix, ""), type_name)
            if decoder is not None:
                return decoder

        namespace, local_name = _transport_split_tag(element.tag)
        return self._decoder_registry.registry_resolve(namespace, local_name)

    def _transport_try_parse_xml(self, payload: bytes) -> tuple[element_tree.Element, dict[str, str]] | None:
        """Best-effort XML parse helper returning root and prefix map.

        Args:
            payload: Candidate response payload.

        Returns:
            tuple[element_tree.Element, dict[str, str]] | None: Parsed root and prefixes, otherwise None.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if not payload:
            return None
        prefixes: dict[str, str] = {}
        try:
            for _event, (prefix, namespace) in element_tree.iterparse(io.BytesIO(payload), events=("start-ns",)):
                prefixes[prefix] = namespace
            root = element_tree.fromstring(payload)
        except element_tree.ParseError:
            return None
        return root, prefixes


def _transport_format_scalar(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _transport_split_tag(tag: str) -> tuple[str, str]:
    if tag.startswith("{"):
        namespace, _, local_name = tag[1:].partition("}")
        return namespace, local_name
    return "", tag


def _transport_local_name(tag: str) -> str:
    return _transport_split_tag(tag)[1]
