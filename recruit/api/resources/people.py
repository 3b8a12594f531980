"""
People resources: users, roles, candidates, profiles and authentication.
"""

import logging
from typing import Any, Dict, List, Optional

import jwt

from ..errors import ApiError
from ..models import CurrentUser, TokenResponse
from .base import LookupClient, ResourceClient

logger = logging.getLogger(__name__)


class UsersClient(ResourceClient):
    name = "user"
    path = "users"
    items_key = "users"

    def statistics(self) -> Dict[str, Any]:
        return self.client.get(self._path("statistics"))

    def get_by_email(self, email: str) -> Dict[str, Any]:
        return self.client.get(self._path("email", email))

    def get_roles(self, user_id: str) -> List[str]:
        return self.client.get(self._path(user_id, "roles")) or []

    def update_roles(self, user_id: str, roles: List[str]) -> Any:
        logger.info(f"Updating roles for user {user_id}: {roles}")
        return self.client.put(self._path(user_id, "roles"), json={"roles": roles})

    def assign_role(self, user_id: str, role: str) -> Any:
        return self.client.post(self._path("assign-role"), json={"userId": user_id, "role": role})

    def remove_role(self, user_id: str, role: str) -> Any:
        return self.client.post(self._path("remove-role"), json={"userId": user_id, "role": role})

    def lock(self, user_id: str, lockout_end: Optional[str] = None) -> Any:
        return self.client.post(self._path(user_id, "lock"), params={"lockoutEnd": lockout_end})

    def unlock(self, user_id: str) -> Any:
        return self.client.post(self._path(user_id, "unlock"))

    def restore(self, user_id: str) -> Any:
        """Undo a soft delete."""
        return self.client.post(self._path(user_id, "restore"))

    def confirm_email(self, user_id: str) -> Any:
        return self.client.post(self._path(user_id, "confirm-email"))


class RolesClient(LookupClient):
    name = "role"
    path = "roles"


class CandidatesClient(ResourceClient):
    name = "candidate"
    path = "candidates"
    items_key = "candidates"
    page_size_param = "limit"

    def search(self, criteria: Dict[str, Any]) -> Any:
        """Structured search (POST body) used by the screening and offer pages."""
        return self.client.post(self._path("search"), json=criteria)

    def by_skills(self, skill_ids: List[str], min_experience: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {"skillIds": skill_ids, "minExperience": min_experience}
        return self.client.get(self._path("by-skills"), params=params) or []

    def get_skills(self, candidate_id: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path(candidate_id, "skills")) or []

    def add_skill(self, candidate_id: str, payload: Dict[str, Any]) -> Any:
        return self.client.post(self._path(candidate_id, "skills"), json=payload)

    def update_skill(self, candidate_id: str, skill_id: str, payload: Dict[str, Any]) -> Any:
        return self.client.put(self._path(candidate_id, "skills", skill_id), json=payload)

    def remove_skill(self, candidate_id: str, skill_id: str) -> Any:
        return self.client.delete(self._path(candidate_id, "skills", skill_id))

    def my_profile(self) -> Dict[str, Any]:
        return self.client.get(self._path("profile"))

    def update_my_profile(self, payload: Dict[str, Any]) -> Any:
        return self.client.put(self._path("profile"), json=payload)


class ProfilesClient(ResourceClient):
    """Employee and candidate profiles keyed by user id."""

    name = "profile"
    path = "profiles"

    def my_profile(self, kind: str) -> Dict[str, Any]:
        """``kind`` is "employee" or "candidate"."""
        return self.client.get(self._path(kind))

    def update_my_profile(self, kind: str, payload: Dict[str, Any]) -> Any:
        return self.client.put(self._path(kind), json=payload)

    def get_for_user(self, kind: str, user_id: str) -> Dict[str, Any]:
        return self.client.get(self._path(kind, user_id))


class AuthClient(ResourceClient):
    name = "auth"
    path = "auth"

    def login(self, email: str, password: str) -> TokenResponse:
        body = self.client.post(self._path("login"), json={"email": email, "password": password})
        return TokenResponse.model_validate(body)

    def register(self, email: str, password: str, role_id: Optional[str] = None) -> TokenResponse:
        payload = {"email": email, "password": password, "roleId": role_id}
        body = self.client.post(self._path("register"), json=payload)
        return TokenResponse.model_validate(body)

    def current_user(
        self,
        token: Optional[str],
        users: UsersClient,
        roles: RolesClient,
    ) -> Optional[CurrentUser]:
        """
        Resolve the signed-in user from the bearer token.

        The token's ``sub`` claim names the user; the user's ``roleId`` is
        translated to a role name through the roles collection. The token
        signature is not verified.

        Returns:
            CurrentUser (role "Unknown" when the role id matches no role),
            or None when there is no usable token or a lookup fails
        """
        user_id = user_id_from_token(token)
        if user_id is None:
            return None
        try:
            user = users.get(user_id)
            role_list = roles.list_all()
        except ApiError as e:
            logger.warning(f"Could not resolve current user {user_id}: {e}")
            return None

        role = next((r for r in role_list if r.get("id") == user.get("roleId")), None)
        return CurrentUser(
            id=user.get("id"),
            email=user.get("email"),
            role=(role or {}).get("name") or "Unknown",
        )


def user_id_from_token(token: Optional[str]) -> Optional[str]:
    """The ``sub`` claim of a JWT, or None when the token cannot be read."""
    if not token:
        return None
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as e:
        logger.warning(f"Unreadable bearer token: {e}")
        return None
    subject = claims.get("sub")
    return str(subject) if subject else None
