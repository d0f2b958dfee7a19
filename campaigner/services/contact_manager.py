"""Operation façade for the Campaigner contact-management web methods.

Each method validates and normalizes its own input, assembles the method
parameter tree and returns the collapsed call outcome: the response mapping,
True / False for empty responses with a header error flag, or None when the
call produced no usable data.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from campaigner.adapters import QuerySchemaValidatorPort, RemoteCallAdapter
from campaigner.domain import (
    DEFAULT_REPORT_TYPE,
    CallOutcome,
    CampaignerValidationError,
    ContactStatus,
    ReportType,
    domain_normalize_contact_key,
    domain_normalize_contact_keys,
    domain_normalize_contact_records,
    domain_normalize_group_ids,
    domain_normalize_report_type,
    domain_normalize_status,
)
from campaigner.domain.parameters import (
    domain_contact_key_parameters,
    domain_contact_keys_parameters,
    domain_contact_records_parameters,
    domain_group_ids_parameters,
)

logger = logging.getLogger(__name__)


class ContactManager:
    """Campaigner contact-management client."""

    def __init__(self, remote_call_adapter: RemoteCallAdapter, query_schema_validator: QuerySchemaValidatorPort):
        """Initialize façade dependencies.

        Args:
            remote_call_adapter: Authenticated remote call adapter.
            query_schema_validator: Validator for `RunReport` XML queries.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when a dependency is missing.
        """

        if remote_call_adapter is None:
            raise ValueError("remote_call_adapter must not be None")
        if query_schema_validator is None:
            raise ValueError("query_schema_validator must not be None")
        self._remote_call_adapter = remote_call_adapter
        self._query_schema_validator = query_schema_validator

    def __enter__(self) -> ContactManager:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport behind the remote call adapter."""

        self._remote_call_adapter.adapter_close()

    def create_update_attribute(
        self,
        attribute_id: int,
        attribute_name: str,
        attribute_type: str,
        default_value: Any = "",
        clear_default: bool = True,
    ) -> Any:
        """Add a custom contact attribute or update an attribute for all contacts.

        `defaultValue` is sent only when `clear_default` is false.
        """

        parameters: dict[str, Any] = {
            "attributeId": attribute_id,
            "attributeName": attribute_name,
            "attributeType": attribute_type,
            "clearDefault": bool(clear_default),
        }
        if not clear_default:
            parameters["defaultValue"] = "" if default_value is None else str(default_value)
        return self._contacts_call("CreateUpdateAttribute", parameters)

    def delete_attribute(self, attribute_id: int) -> Any:
        """Delete an existing custom attribute."""

        return self._contacts_call("DeleteAttribute", {"id": attribute_id})

    def delete_contacts(self, contact_keys: Iterable[Mapping[str, Any]]) -> Any:
        """Delete one or more contacts.

        Raises:
            CampaignerValidationError: Raised when a contact key is invalid.
        """

        normalized_keys = domain_normalize_contact_keys(contact_keys)
        return self._contacts_call("DeleteContacts", {"contactKeys": domain_contact_keys_parameters(normalized_keys)})

    def download_report(
        self,
        report_ticket_id: str,
        from_row: int = 1,
        to_row: int = 100,
        report_type: ReportType | str = DEFAULT_REPORT_TYPE,
    ) -> Any:
        """Download rows of a report prepared by `run_report`.

        Args:
            report_ticket_id: Ticket id returned by `run_report`.
            from_row: First row to return.
            to_row: Last row to return.
            report_type: One of the nine `ReportType` values.

        Returns:
            Any: Report rows mapping, boolean status or None.

        Raises:
            CampaignerValidationError: Raised when ticket id is blank or report type is unknown.
        """

        normalized_report_type = domain_normalize_report_type(report_type)
        normalized_ticket_id = str(report_ticket_id or "").strip()
        if not normalized_ticket_id:
            raise CampaignerValidationError("reportTicketId must not be blank", field_name="reportTicketId")

        return self._contacts_call(
            "DownloadReport",
            {
                "reportTicketId": normalized_ticket_id,
                "fromRow": from_row,
                "toRow": to_row,
                "reportType": normalized_report_type.value,
            },
        )

    def get_contacts(
        self,
        contact_keys: Iterable[Mapping[str, Any]],
        include_static_attributes: bool = False,
        include_custom_attributes: bool = False,
        include_system_attributes: bool = False,
        include_group_memberships_attributes: bool = False,
    ) -> Any:
        """Return attribute information for up to 1000 contacts."""

        normalized_keys = domain_normalize_contact_keys(contact_keys)
        return self._contacts_call(
            "GetContacts",
            {
                "contactKeys": domain_contact_keys_parameters(normalized_keys),
                "contactInformationFilter": {
                    "IncludeStaticAttributes": bool(include_static_attributes),
                    "IncludeCustomAttributes": bool(include_custom_attributes),
                    "IncludeSystemAttributes": bool(include_system_attributes),
                    "IncludeGroupMembershipsAttributes": bool(include_group_memberships_attributes),
                },
            },
        )

    def immediate_upload(
        self,
        update_existing_contacts: bool,
        trigger_workflow: bool,
        contacts: Iterable[Mapping[str, Any]],
        global_add_to_group: Iterable[int] | None = None,
        global_remove_from_group: Iterable[int] | None = None,
    ) -> Any:
        """Synchronously add or update up to 1000 contacts."""

        return self._contacts_call(
            "ImmediateUpload",
            self._contacts_upload_parameters(
                update_existing_contacts,
                trigger_workflow,
                contacts,
                global_add_to_group,
                global_remove_from_group,
            ),
        )

    def list_attributes(
        self,
        include_all_default_attributes: bool = True,
        include_all_custom_attributes: bool = True,
        include_all_system_attributes: bool = True,
    ) -> Any:
        """List contact attributes and their properties."""

        return self._contacts_call(
            "ListAttributes",
            self._contacts_list_filter(
                include_all_default_attributes,
                include_all_custom_attributes,
                include_all_system_attributes,
            ),
        )

    def list_contact_fields(
        self,
        include_all_default_attributes: bool = True,
        include_all_custom_attributes: bool = True,
        include_all_system_attributes: bool = True,
    ) -> Any:
        """List contact fields and their properties."""

        return self._contacts_call(
            "ListContactFields",
            self._contacts_list_filter(
                include_all_default_attributes,
                include_all_custom_attributes,
                include_all_system_attributes,
            ),
        )

    def resubscribe_contact(
        self,
        contact_id: int | None,
        contact_unique_identifier: str,
        status: ContactStatus | str,
    ) -> Any:
        """Change one unsubscribed contact to another status.

        Raises:
            CampaignerValidationError: Raised when the key or status is invalid.
        """

        contact_key = domain_normalize_contact_key(
            {
                "ContactId": contact_id,
                "ContactUniqueIdentifier": contact_unique_identifier,
            }
        )
        normalized_status = domain_normalize_status(status)
        return self._contacts_call(
            "ResubscribeContact",
            {
                "contactKey": domain_contact_key_parameters(contact_key),
                "status": normalized_status.value,
            },
        )

    def run_report(self, xml_contact_query: str) -> Any:
        """Run an XML contact query and return its ticket id and row count.

        Queries failing XSD validation are not sent and yield None.
        """

        return self.run_report_outcome(xml_contact_query).outcome_value()

    def run_report_outcome(self, xml_contact_query: str) -> CallOutcome:
        """Run an XML contact query and return the uncollapsed outcome.

        Returns:
            CallOutcome: `INVALID` when the query fails schema validation, else the call outcome.

        Raises:
            ConnectionError: Propagated from the transport.
        """

        if not self._query_schema_validator.schema_validate_query(xml_contact_query):
            logger.warning("RunReport skipped: XML contact query failed schema validation")
            return CallOutcome.invalid(detail="xml contact query failed schema validation")
        return self._remote_call_adapter.adapter_invoke("RunReport", {"xmlContactQuery": xml_contact_query})

    def upload_mass_contacts(
        self,
        update_existing_contacts: bool,
        trigger_workflow: bool,
        contacts: Iterable[Mapping[str, Any]],
        global_add_to_group: Iterable[int] | None = None,
        global_remove_from_group: Iterable[int] | None = None,
    ) -> Any:
        """Upload many contacts and process their group memberships."""

        return self._contacts_call(
            "UploadMassContacts",
            self._contacts_upload_parameters(
                update_existing_contacts,
                trigger_workflow,
                contacts,
                global_add_to_group,
                global_remove_from_group,
            ),
        )

    def _contacts_call(self, method_name: str, parameters: dict[str, Any]) -> Any:
        return self._remote_call_adapter.adapter_invoke(method_name, parameters).outcome_value()

    def _contacts_upload_parameters(
        self,
        update_existing_contacts: bool,
        trigger_workflow: bool,
        contacts: Iterable[Mapping[str, Any]],
        global_add_to_group: Iterable[int] | None,
        global_remove_from_group: Iterable[int] | None,
    ) -> dict[str, Any]:
        """Build shared parameters of the upload web methods.

        Args:
            update_existing_contacts: Update contacts that already exist.
            trigger_workflow: Trigger workflows for uploaded contacts.
            contacts: Loose contact data mappings.
            global_add_to_group: Optional group ids every contact joins.
            global_remove_from_group: Optional group ids every contact leaves.

        Returns:
            dict[str, Any]: Upload parameter tree.

        Raises:
            CampaignerValidationError: Raised on the first invalid contact or a malformed global group list.
        """

        if isinstance(contacts, Mapping):
            raise CampaignerValidationError("contacts must be a sequence of contact mappings", field_name="contacts")

        parameters: dict[str, Any] = {
            "UpdateExistingContacts": bool(update_existing_contacts),
            "TriggerWorkflow": bool(trigger_workflow),
            "contacts": domain_contact_records_parameters(domain_normalize_contact_records(contacts)),
        }
        if global_add_to_group is not None:
            parameters["globalAddToGroup"] = domain_group_ids_parameters(
                domain_normalize_group_ids(global_add_to_group, "globalAddToGroup")
            )
        if global_remove_from_group is not None:
            parameters["globalRemoveFromGroup"] = domain_group_ids_parameters(
                domain_normalize_group_ids(global_remove_from_group, "globalRemoveFromGroup")
            )
        return parameters

    def _contacts_list_filter(
        self,
        include_all_default_attributes: bool,
        include_all_custom_attributes: bool,
        include_all_system_attributes: bool,
    ) -> dict[str, Any]:
        return {
            "IncludeAllDefaultAttributes": bool(include_all_default_attributes),
            "IncludeAllCustomAttributes": bool(include_all_custom_attributes),
            "IncludeAllSystemAttributes": bool(include_all_system_attributes),
        }
