"""Service layer package exposing the contact-management façade."""

from .contact_manager import ContactManager

__all__ = ["ContactManager"]
