"""Decoder for `ReportResult` XML fragments returned by report web methods."""

from __future__ import annotations

import io
import xml.etree.ElementTree as element_tree

from campaigner.domain import CampaignerDecodeError, ReportResult

REPORT_RESULT_TYPE_NAME = "ReportResult"
_ATTRIBUTE_ELEMENT_NAME = "Attribute"
_ATTRIBUTE_ID_NAME = "Id"


def adapter_decode_report_result(xml_fragment: str | bytes) -> ReportResult:
    """Decode one `ReportResult` element into a typed result.

    The search for `Attribute` elements covers the whole fragment and every
    namespace declared in it, so vendor prefixes do not matter. Later
    duplicates of the same `Id` overwrite earlier ones.

    Args:
        xml_fragment: Serialized `ReportResult` element.

    Returns:
        ReportResult: Root attributes and attribute values keyed by `Id`.

    Raises:
        CampaignerDecodeError: Raised when the fragment is malformed or an `Attribute` lacks its `Id`.
    """

    payload = xml_fragment.encode("utf-8") if isinstance(xml_fragment, str) else bytes(xml_fragment)
    root, namespaces = _adapter_parse_fragment(payload)

    report_attributes = {name: value for name, value in root.attrib.items() if not name.startswith("{")}

    accepted_tags = {_ATTRIBUTE_ELEMENT_NAME}
    accepted_tags.update(f"{{{namespace}}}{_ATTRIBUTE_ELEMENT_NAME}" for namespace in namespaces)

    attribute_values: dict[str, str] = {}
    for element in root.iter():
        if element.tag not in accepted_tags:
            continue
        attribute_id = element.attrib.get(_ATTRIBUTE_ID_NAME)
        if attribute_id is None:
            raise CampaignerDecodeError("ReportResult Attribute element is missing its Id")
        attribute_values[attribute_id] = element.text or ""

    return ReportResult(attributes=report_attributes, attribute_values=attribute_values)


def _adapter_parse_fragment(payload: bytes) -> tuple[element_tree.Element, frozenset[str]]:
    """Parse fragment XML and collect every declared namespace.

    Args:
        payload: Fragment bytes.

    Returns:
        tuple[element_tree.Element, frozenset[str]]: Root node and declared namespace URIs.

    Raises:
        CampaignerDecodeError: Raised when payload is not well-formed XML.
    """

    try:
        namespaces = frozenset(
            namespace
            for _event, (_prefix, namespace) in element_tree.iterparse(io.BytesIO(payload), events=("start-ns",))
        )
        root = element_tree.fromstring(payload)
    except element_tree.ParseError as error:
        raise CampaignerDecodeError("ReportResult XML parse failed") from error
    return root, namespaces
