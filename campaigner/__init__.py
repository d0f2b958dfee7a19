"""Campaigner contact-management client package."""

from .bootstrap import bootstrap_create_contact_manager
from .services import ContactManager

__all__ = ["ContactManager", "bootstrap_create_contact_manager"]
