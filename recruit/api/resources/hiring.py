"""
Hiring workflow resources: positions, jobs, applications, screening,
interviews and offer letters.
"""

import logging
from typing import Any, Dict, List, Optional

from ..http_client import BinaryContent
from .base import ResourceClient

logger = logging.getLogger(__name__)


class PositionsClient(ResourceClient):
    name = "position"
    path = "positions"
    items_key = "positions"

    def close(self, position_id: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """Close with a reason or a selected candidate."""
        return self.client.post(self._path(position_id, "close"), json=payload or {})

    def hold(self, position_id: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return self.client.post(self._path(position_id, "hold"), json=payload or {})

    def reopen(self, position_id: str) -> Any:
        return self.client.post(self._path(position_id, "reopen"))


class JobsClient(ResourceClient):
    name = "job"
    path = "jobs"
    items_key = "jobs"

    def list_public(self, page: int = 1, page_size: int = 10, search: str = "", job_type_id: str = "") -> Any:
        params = {"page": page, "pageSize": page_size, "search": search, "jobTypeId": job_type_id}
        return self.client.get(self._path("public"), params=params)

    def get_public(self, job_id: str) -> Dict[str, Any]:
        return self.client.get(self._path("public", job_id))

    def close(self, job_id: str) -> Any:
        return self.client.post(self._path(job_id, "close"))

    def hold(self, job_id: str) -> Any:
        return self.client.post(self._path(job_id, "hold"))

    def by_recruiter(self, recruiter_id: str, page: int = 1, page_size: int = 10) -> Any:
        return self.client.get(
            self._path("recruiter", recruiter_id), params={"page": page, "pageSize": page_size}
        )

    def by_position(self, position_id: str) -> Any:
        return self.client.get(self._path("position", position_id))


class ApplicationsClient(ResourceClient):
    """
    Job applications.

    The list is served paged by ``jobapplication`` (search, jobId,
    candidateId and statusId filters); record actions stay under
    ``jobapplications``.
    """

    name = "application"
    path = "jobapplications"
    list_route = "jobapplication"
    items_key = "applications"

    def update_status(self, application_id: str, payload: Dict[str, Any]) -> Any:
        """Status change (statusId + comment) is an update on the record."""
        return self.update(application_id, payload)

    def screen(self, application_id: str, payload: Dict[str, Any]) -> Any:
        logger.info(f"Screening application {application_id}")
        return self.client.post(self._path(application_id, "screen"), json=payload)

    def my_applications(self) -> List[Dict[str, Any]]:
        return self.client.get(self._path("my-applications")) or []


class ScreeningClient(ResourceClient):
    name = "screening"
    path = "screening"
    items_key = "applications"
    list_path = "applications"

    def screen(self, payload: Dict[str, Any]) -> Any:
        return self.client.post(self._path("screen"), json=payload)

    def add_comment(self, payload: Dict[str, Any]) -> Any:
        return self.client.post(self._path("comments"), json=payload)

    def shortlist(self, payload: Dict[str, Any]) -> Any:
        return self.client.post(self._path("shortlist"), json=payload)

    def statistics(self) -> Dict[str, int]:
        return self.client.get(self._path("statistics")) or {}


class InterviewsClient(ResourceClient):
    name = "interview"
    path = "interviews"
    paginated = False
    search_fields = ("candidateName", "jobTitle", "interviewType")

    def types(self) -> List[Dict[str, Any]]:
        return self.client.get(self._path("types")) or []

    def by_application(self, job_application_id: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path("job-application", job_application_id)) or []

    def schedules(self, interview_id: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path(interview_id, "schedules")) or []

    def create_schedule(self, payload: Dict[str, Any]) -> Any:
        return self.client.post(self._path("schedules"), json=payload)

    def schedule_for(self, interview_id: str, payload: Dict[str, Any]) -> Any:
        return self.create_schedule({**payload, "interviewId": interview_id})

    def update_schedule(self, schedule_id: str, payload: Dict[str, Any]) -> Any:
        return self.client.put(self._path("schedules", schedule_id), json=payload)

    def delete_schedule(self, schedule_id: str) -> Any:
        return self.client.delete(self._path("schedules", schedule_id))

    def feedback(self, interview_id: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path(interview_id, "feedback")) or []

    def create_feedback(self, payload: Dict[str, Any]) -> Any:
        return self.client.post(self._path("feedback"), json=payload)

    def feedback_for(self, interview_id: str, payload: Dict[str, Any]) -> Any:
        return self.create_feedback({**payload, "interviewId": interview_id})

    def update_feedback(self, feedback_id: str, payload: Dict[str, Any]) -> Any:
        return self.client.put(self._path("feedback", feedback_id), json=payload)

    def delete_feedback(self, feedback_id: str) -> Any:
        return self.client.delete(self._path("feedback", feedback_id))

    def conduct(self, interview_id: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return self.client.post(self._path(interview_id, "conduct"), json=payload or {})


class OfferLettersClient(ResourceClient):
    name = "offer letter"
    path = "v1/offerletter"
    paginated = False
    search_fields = ("candidateName", "jobTitle", "candidateEmail")

    def by_application(self, application_id: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path("application", application_id)) or []

    def by_status(self, status: str) -> List[Dict[str, Any]]:
        return self.client.get(self._path("status", status)) or []

    def generate(self, offer_id: str, details: Dict[str, Any]) -> Any:
        """Render the PDF server-side (company and signatory details)."""
        logger.info(f"Generating offer letter PDF for {offer_id}")
        return self.client.post(self._path("generate"), json={"offerLetterId": offer_id, **details})

    def send(self, offer_id: str) -> Any:
        return self.client.post(self._path("send"), json={"offerLetterId": offer_id})

    def download(self, offer_id: str) -> BinaryContent:
        return self.client.get(self._path(offer_id, "download"), raw=True)

    def accept(self, offer_id: str) -> Any:
        return self.client.post(self._path("accept"), json={"offerLetterId": offer_id})

    def reject(self, offer_id: str, reason: str) -> Any:
        return self.client.post(self._path("reject"), json={"offerLetterId": offer_id, "reason": reason})
