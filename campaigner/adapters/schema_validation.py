"""XSD validation of XML contact queries sent to report web methods."""

from __future__ import annotations

import logging

from lxml import etree

from .interfaces import QuerySchemaValidatorPort

logger = logging.getLogger(__name__)


class XmlQuerySchemaValidator(QuerySchemaValidatorPort):
    """Validate contact query documents against an XSD file.

    Any parse or schema loading failure counts as an invalid query.
    """

    def __init__(self, xsd_path: str | None = None):
        """Initialize validator with an optional XSD path.

        Args:
            xsd_path: Path to the contact query XSD file.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: Initializer does not raise runtime errors.
        """

        self._xsd_path = xsd_path
        self._schema: etree.XMLSchema | None = None

    @property
    def xsd_path(self) -> str | None:
        return self._xsd_path

    def schema_set_xsd_path(self, xsd_path: str | None) -> None:
        """Replace the XSD path and drop the cached schema."""

        self._xsd_path = xsd_path
        self._schema = None

    def schema_validate_query(self, query: str) -> bool:
        """Return whether the query is well-formed and satisfies the schema.

        Args:
            query: XML contact query text.

        Returns:
            bool: True when the query validates, False otherwise.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        schema = self._schema_load()
        if schema is None:
            return False

        if not isinstance(query, (str, bytes)) or not query:
            logger.warning("Rejecting empty or non-text XML contact query")
            return False

        try:
            query_document = etree.fromstring(query.encode("utf-8") if isinstance(query, str) else query)
        except etree.XMLSyntaxError as error:
            logger.warning("Rejecting malformed XML contact query: %s", error)
            return False

        if schema.validate(query_document):
            return True
        logger.warning("XML contact query failed schema validation: %s", schema.error_log.last_error)
        return False

    def _schema_load(self) -> etree.XMLSchema | None:
        """Load and cache the configured XSD.

        Returns:
            lxml.etree.XMLSchema | None: Parsed schema, None when unavailable.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if self._schema is not None:
            return self._schema
        if not self._xsd_path:
            logger.warning("No XSD path configured for XML contact query validation")
            return None

        try:
            self._schema = etree.XMLSchema(etree.parse(self._xsd_path))
        except (OSError, etree.XMLSyntaxError, etree.XMLSchemaParseError) as error:
            logger.warning("Unable to load XSD %s: %s", self._xsd_path, error)
            return None
        return self._schema
