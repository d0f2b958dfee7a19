"""Per-transport registry of custom XML type materializers."""

from __future__ import annotations

from typing import Any, Callable

XmlTypeDecoder = Callable[[str], Any]


class XmlTypeDecoderRegistry:
    """Map namespaced contract type names to XML fragment decoders.

    One registry is built per client and handed to its transport, which calls
    the matching decoder with the serialized XML of each element of that type.
    """

    def __init__(self):
        self._decoders: dict[tuple[str, str], XmlTypeDecoder] = {}

    def registry_register(self, type_namespace: str, type_name: str, decoder: XmlTypeDecoder) -> None:
        """Register one decoder for a namespaced type.

        Args:
            type_namespace: Contract namespace of the type.
            type_name: Local type name.
            decoder: Callable receiving the element XML text.

        Returns:
            None: Stores the decoder as side effect.

        Raises:
            ValueError: Raised when the type name is blank.
        """

        normalized_type_name = type_name.strip()
        if not normalized_type_name:
            raise ValueError("type_name must not be blank")
        self._decoders[(type_namespace.strip(), normalized_type_name)] = decoder

    def registry_resolve(self, type_namespace: str, type_name: str) -> XmlTypeDecoder | None:
        """Return the decoder for a namespaced type, if any."""

        return self._decoders.get((type_namespace, type_name))

    def __len__(self) -> int:
        return len(self._decoders)
