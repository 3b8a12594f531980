"""
Reporting resources: dashboard reports, CSV exports and lookup lists.
"""

from typing import Any, Dict, List, Optional

from ..http_client import BinaryContent
from .base import ResourceClient

EXPORTABLE = ("jobs", "candidates", "applications", "interviews", "skills")

# Report name -> route. All are GETs under /reports.
REPORTS = {
    "dashboard": "dashboard",
    "pipeline": "pipeline",
    "job_stats": "job-stats",
    "recruiter_performance": "recruiter-performance",
    "time_to_hire": "time-to-hire",
    "status_distribution": "status-distribution",
    "interview_stats": "interview-stats",
    "source_analysis": "source-analysis",
    "monthly_trends": "monthly-trends",
    "skill_demand": "skill-demand",
    "application_funnel": "application-funnel",
    "experience_wise_candidates": "experience-wise-candidates",
    "college_wise": "college-wise",
}


class ReportsClient(ResourceClient):
    name = "report"
    path = "reports"

    def fetch(self, report: str, **params: Any) -> Any:
        """
        Fetch a named report.

        Args:
            report: Key of REPORTS (e.g. "monthly_trends")
            **params: Query params (startDate, endDate, months, jobId)
        """
        if report not in REPORTS:
            raise ValueError(f"Unknown report '{report}'. Available: {', '.join(REPORTS)}")
        return self.client.get(self._path(REPORTS[report]), params=params)

    def dashboard(self) -> Dict[str, Any]:
        return self.fetch("dashboard")

    def monthly_trends(self, months: int = 12) -> Any:
        return self.fetch("monthly_trends", months=months)

    def application_funnel(self, job_id: Optional[str] = None) -> Any:
        return self.fetch("application_funnel", jobId=job_id)


class ExportClient(ResourceClient):
    name = "export"
    path = "export"

    def export(self, resource: str, **filters: Any) -> BinaryContent:
        """
        Download a CSV export.

        Filters per resource (empty values are dropped):
            jobs: search, statusId, jobTypeId
            candidates: search
            applications: search, jobId, candidateId, statusId
        """
        if resource not in EXPORTABLE:
            raise ValueError(f"Cannot export '{resource}'. Exportable: {', '.join(EXPORTABLE)}")
        return self.client.get(self._path(resource), params=filters, raw=True)


class LookupsClient(ResourceClient):
    """Status and type lists used to fill selects and resolve ids."""

    name = "lookup"
    path = "lookups"

    def status_types(self) -> List[Dict[str, Any]]:
        return self.client.get(self._path("status-types")) or []

    def job_types(self) -> List[Dict[str, Any]]:
        return self.client.get(self._path("job-types")) or []

    def statuses(self) -> List[Dict[str, Any]]:
        return self.client.get(self._path("statuses")) or []
