"""
Role gate: decides whether management controls are shown.

UX only. The backend enforces authorization on every request.
"""

from typing import Iterable, Optional


class Roles:
    ADMIN = "Admin"
    HR = "HR"
    RECRUITER = "Recruiter"
    INTERVIEWER = "Interviewer"
    REVIEWER = "Reviewer"
    CANDIDATE = "Candidate"
    VIEWER = "Viewer"

    ALL = (ADMIN, HR, RECRUITER, INTERVIEWER, REVIEWER, CANDIDATE, VIEWER)


def can_manage(current_role: Optional[str], allowed_roles: Iterable[str]) -> bool:
    """True when ``current_role`` is one of ``allowed_roles``. Case-sensitive."""
    if not current_role:
        return False
    return current_role in tuple(allowed_roles)
