"""Enumerated values accepted by the Campaigner contact-management contract."""

from __future__ import annotations

from enum import Enum
from typing import Final


class ContactStatus(str, Enum):
    """Subscription status values of one contact."""

    UNSUBSCRIBED = "Unsubscribed"
    SUBSCRIBED = "Subscribed"
    HARD_BOUNCE = "HardBounce"
    SOFT_BOUNCE = "SoftBounce"
    PENDING = "Pending"


class MailFormat(str, Enum):
    """Preferred mail format values of one contact."""

    TEXT = "Text"
    HTML = "HTML"
    BOTH = "Both"


class ReportType(str, Enum):
    """Report types accepted by the `DownloadReport` web method."""

    DETAILED_CONTACT_RESULTS_BY_CAMPAIGN = "rpt_Detailed_Contact_Results_by_Campaign"
    SUMMARY_CONTACT_RESULTS_BY_CAMPAIGN = "rpt_Summary_Contact_Results_by_Campaign"
    SUMMARY_CAMPAIGN_RESULTS = "rpt_Summary_Campaign_Results"
    SUMMARY_CAMPAIGN_RESULTS_BY_DOMAIN = "rpt_Summary_Campaign_Results_by_Domain"
    CONTACT_ATTRIBUTES = "rpt_Contact_Attributes"
    CONTACT_DETAILS = "rpt_Contact_Details"
    CONTACT_GROUP_MEMBERSHIP = "rpt_Contact_Group_Membership"
    GROUPS = "rpt_Groups"
    TRACKED_LINKS = "rpt_Tracked_Links"


DEFAULT_REPORT_TYPE: Final[ReportType] = ReportType.CONTACT_DETAILS
