"""
Record-keeping resources: documents, verifications, events, email
templates and resume parsing.

Document and resume uploads are multipart; downloads are blobs.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..http_client import BinaryContent
from .base import LookupClient, ResourceClient

logger = logging.getLogger(__name__)


class DocumentTypesClient(LookupClient):
    name = "document type"
    path = "documents/types"


class DocumentsClient(ResourceClient):
    name = "document"
    path = "documents"
    paginated = False
    search_fields = ("fileName", "candidateName", "documentTypeName")

    def by_candidate(self, candidate_id: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path("candidate", candidate_id)) or []

    def upload(
        self,
        file_path: str,
        candidate_id: str,
        document_type_id: str,
        description: Optional[str] = None,
    ) -> Any:
        """Upload a file as multipart form data."""
        path = Path(file_path)
        fields = {
            "candidateId": candidate_id,
            "documentTypeId": document_type_id,
            "description": description or "",
        }
        logger.info(f"Uploading document {path.name} for candidate {candidate_id}")
        with path.open("rb") as handle:
            return self.client.post(
                self._path("upload"),
                files={"file": (path.name, handle)},
                data=fields,
            )

    def create(self, payload: Dict[str, Any]) -> Any:
        """Documents are created by upload; ``filePath`` names the local file."""
        return self.upload(
            payload["filePath"],
            payload["candidateId"],
            payload["documentTypeId"],
            payload.get("description"),
        )

    def download(self, document_id: str) -> BinaryContent:
        return self.client.get(self._path(document_id, "download"), raw=True)

    def types(self) -> List[Dict[str, Any]]:
        return self.client.get(self._path("types")) or []


class VerificationsClient(ResourceClient):
    name = "verification"
    path = "verifications"
    paginated = False
    search_fields = ("candidateName", "documentName", "status")

    def by_candidate(self, candidate_id: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path("candidate", candidate_id)) or []


class EventsClient(ResourceClient):
    name = "event"
    path = "events"
    paginated = False
    search_fields = ("name", "location", "description")

    def candidates(self, event_id: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path(event_id, "candidates")) or []

    def register_candidate(self, event_id: str, candidate_id: str) -> Any:
        payload = {"eventId": event_id, "candidateId": candidate_id}
        return self.client.post(self._path("register-candidate"), json=payload)

    def update_candidate_status(self, event_candidate_id: str, status_id: str) -> Any:
        return self.client.put(
            self._path("event-candidates", event_candidate_id, "status"),
            json={"statusId": status_id},
        )

    def remove_candidate(self, event_candidate_id: str) -> Any:
        return self.client.delete(self._path("event-candidates", event_candidate_id))


class EmailTemplatesClient(ResourceClient):
    name = "email template"
    path = "v1/emailtemplate"
    paginated = False
    search_fields = ("name", "subject", "category")

    def active(self) -> List[Dict[str, Any]]:
        return self.client.get(self._path("active")) or []

    def by_category(self, category: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path("category", category)) or []

    def preview(self, template_id: str, variables: Dict[str, str]) -> Dict[str, Any]:
        payload = {"templateId": template_id, "variables": variables}
        return self.client.post(self._path("preview"), json=payload)

    def send(self, payload: Dict[str, Any]) -> Any:
        return self.client.post(self._path("send"), json=payload)


class ResumeClient(ResourceClient):
    name = "resume"
    path = "resume"

    def parse(self, file_path: str) -> Dict[str, Any]:
        """Send a resume file to the server-side parser."""
        path = Path(file_path)
        with path.open("rb") as handle:
            return self.client.post(self._path("parse"), files={"file": (path.name, handle)})
