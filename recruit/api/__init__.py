"""
Backend access layer.

Public API:
- RecruitApi: one attribute per resource client, sharing one ApiClient
- create_api(): build RecruitApi from settings with the standard interceptors
- AuthSession / Navigator: injected token holder and location tracker
- ApiError and subclasses: normalized failures
"""

from typing import Optional

import requests

from ..common.config import ClientSettings, get_settings
from .errors import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from .http_client import ApiClient, BinaryContent, build_api_client
from .models import CurrentUser
from .resources import (
    ApplicationsClient,
    AuthClient,
    CandidatesClient,
    DocumentTypesClient,
    DocumentsClient,
    EmailTemplatesClient,
    EventsClient,
    ExportClient,
    InterviewsClient,
    JobTypesClient,
    JobsClient,
    LookupsClient,
    OfferLettersClient,
    PositionsClient,
    ProfilesClient,
    QualificationsClient,
    ReportsClient,
    ResumeClient,
    RolesClient,
    ScreeningClient,
    SkillsClient,
    UsersClient,
    VerificationsClient,
)
from .session import AuthSession, FileTokenStore, MemoryTokenStore, Navigator


class RecruitApi:
    """Facade over every resource client."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.auth = AuthClient(client)
        self.users = UsersClient(client)
        self.roles = RolesClient(client)
        self.profiles = ProfilesClient(client)
        self.candidates = CandidatesClient(client)
        self.skills = SkillsClient(client)
        self.qualifications = QualificationsClient(client)
        self.job_types = JobTypesClient(client)
        self.positions = PositionsClient(client)
        self.jobs = JobsClient(client)
        self.applications = ApplicationsClient(client)
        self.screening = ScreeningClient(client)
        self.interviews = InterviewsClient(client)
        self.offer_letters = OfferLettersClient(client)
        self.documents = DocumentsClient(client)
        self.document_types = DocumentTypesClient(client)
        self.verifications = VerificationsClient(client)
        self.events = EventsClient(client)
        self.email_templates = EmailTemplatesClient(client)
        self.resume = ResumeClient(client)
        self.reports = ReportsClient(client)
        self.export = ExportClient(client)
        self.lookups = LookupsClient(client)

    def current_user(self, token: Optional[str]) -> Optional[CurrentUser]:
        """Signed-in user for ``token``, or None when it cannot be resolved."""
        return self.auth.current_user(token, self.users, self.roles)


def create_api(
    session: AuthSession,
    navigator: Optional[Navigator] = None,
    settings: Optional[ClientSettings] = None,
    http: Optional[requests.Session] = None,
) -> RecruitApi:
    """
    Build the API facade with bearer-token and 401 interceptors installed.

    Args:
        session: Token holder
        navigator: Receives the login redirect on 401
        settings: Defaults to get_settings()
        http: Optional requests.Session (tests inject a mock)
    """
    settings = settings or get_settings()
    client = build_api_client(
        settings.api_base_url,
        session,
        navigator=navigator,
        timeout=settings.request_timeout,
        http=http,
    )
    return RecruitApi(client)


__all__ = [
    "RecruitApi",
    "create_api",
    "ApiClient",
    "BinaryContent",
    "AuthSession",
    "Navigator",
    "MemoryTokenStore",
    "FileTokenStore",
    "ApiError",
    "AuthError",
    "ConflictError",
    "ForbiddenError",
    "NetworkError",
    "NotFoundError",
    "TransientError",
    "ValidationError",
]
