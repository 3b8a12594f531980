"""
Resource clients for every backend resource.

Each client implements the generic CRUD contract of ResourceClient plus
the resource-specific actions the backend exposes.
"""

from .base import LookupClient, ResourceClient, parse_page, MAX_PAGE_SIZE
from .catalog import JobTypesClient, QualificationsClient, SkillsClient
from .hiring import (
    ApplicationsClient,
    InterviewsClient,
    JobsClient,
    OfferLettersClient,
    PositionsClient,
    ScreeningClient,
)
from .people import AuthClient, CandidatesClient, ProfilesClient, RolesClient, UsersClient
from .records import (
    DocumentTypesClient,
    DocumentsClient,
    EmailTemplatesClient,
    EventsClient,
    ResumeClient,
    VerificationsClient,
)
from .reporting import EXPORTABLE, REPORTS, ExportClient, LookupsClient, ReportsClient

__all__ = [
    "ResourceClient",
    "LookupClient",
    "parse_page",
    "MAX_PAGE_SIZE",
    "SkillsClient",
    "QualificationsClient",
    "JobTypesClient",
    "UsersClient",
    "RolesClient",
    "CandidatesClient",
    "ProfilesClient",
    "AuthClient",
    "PositionsClient",
    "JobsClient",
    "ApplicationsClient",
    "ScreeningClient",
    "InterviewsClient",
    "OfferLettersClient",
    "DocumentsClient",
    "DocumentTypesClient",
    "VerificationsClient",
    "EventsClient",
    "EmailTemplatesClient",
    "ResumeClient",
    "ReportsClient",
    "ExportClient",
    "LookupsClient",
    "EXPORTABLE",
    "REPORTS",
]
