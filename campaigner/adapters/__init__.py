"""Adapter layer package for Campaigner web service integration boundaries."""

from .decoder_registry import XmlTypeDecoderRegistry
from .interfaces import QuerySchemaValidatorPort, SoapTransportPort, TransportFault, TransportResponse
from .remote_call import RemoteCallAdapter, remote_call_build_decoder_registry
from .report_decoder import REPORT_RESULT_TYPE_NAME, adapter_decode_report_result
from .schema_validation import XmlQuerySchemaValidator
from .soap_transport import CampaignerSoapTransport

__all__ = [
    "REPORT_RESULT_TYPE_NAME",
    "CampaignerSoapTransport",
    "QuerySchemaValidatorPort",
    "RemoteCallAdapter",
    "SoapTransportPort",
    "TransportFault",
    "TransportResponse",
    "XmlQuerySchemaValidator",
    "XmlTypeDecoderRegistry",
    "adapter_decode_report_result",
    "remote_call_build_decoder_registry",
]
