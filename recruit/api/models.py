"""
Pydantic models for the backend payloads the toolkit interprets.

Resource records themselves stay plain dicts: their field names are the
backend's contract and pages pass them through untouched. Only envelopes
the toolkit has to read are modelled here.
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PaginationInfo(BaseModel):
    """Server pagination block (``{"page", "pageSize", "totalCount", "totalPages"}``)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page: int = Field(1, ge=1, validation_alias=AliasChoices("page", "currentPage"))
    page_size: int = Field(10, ge=1, alias="pageSize")
    total_count: int = Field(0, ge=0, alias="totalCount")
    total_pages: Optional[int] = Field(None, alias="totalPages")


class TokenResponse(BaseModel):
    """Login/register response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access_token: str = Field(..., alias="accessToken")
    refresh_token: Optional[str] = Field(None, alias="refreshToken")


class CurrentUser(BaseModel):
    """The signed-in user as far as the role gate is concerned."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    email: Optional[str] = None
    role: str = "Unknown"

    def has_role(self, *roles: str) -> bool:
        """True when the user's role is one of ``roles``."""
        return self.role in roles


class PageEnvelope(BaseModel):
    """Normalized list response."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    total_count: int = Field(0, ge=0)
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)
