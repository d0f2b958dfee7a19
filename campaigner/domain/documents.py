"""Recursive conversion of transport response documents into plain data.

A response document is a closed tree of mappings, sequences, scalars and
decoded `ReportResult` values. Conversion produces dicts, lists and scalars
only so callers never handle transport-specific objects.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from .models import ReportResult


def domain_document_to_plain(document: Any) -> Any:
    """Convert one response document into plain nested data.

    Args:
        document: Mapping, sequence, scalar or `ReportResult` tree.

    Returns:
        Any: Equivalent tree made of dicts, lists and scalars.

    Raises:
        TypeError: Raised when the tree contains an unsupported node type.
    """

    if isinstance(document, Enum):
        return document.value
    if document is None or isinstance(document, (str, bool, int, float)):
        return document
    if isinstance(document, ReportResult):
        return {
            "Attributes": dict(document.attributes),
            "AttributeValues": dict(document.attribute_values),
        }
    if isinstance(document, Mapping):
        return {str(key): domain_document_to_plain(value) for key, value in document.items()}
    if isinstance(document, (list, tuple)):
        return [domain_document_to_plain(value) for value in document]
    raise TypeError(f"unsupported response document node: {type(document).__name__}")


def domain_document_is_empty(document: Any) -> bool:
    """Return whether a plain document carries no usable payload.

    `None`, `False`, numeric zero, `""`, `"0"` and empty containers carry no payload.

    Args:
        document: Plain document produced by `domain_document_to_plain`.

    Returns:
        bool: True when the document is empty.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(document, str):
        return document in ("", "0")
    return not document
