"""
Catalog resources: skills, qualifications and job types.

Small admin-managed reference tables with name uniqueness enforced
server-side ("already exists") and deletion blocked while referenced
("in use").
"""

from typing import Any, Dict

from .base import ResourceClient


class SkillsClient(ResourceClient):
    name = "skill"
    path = "skills"
    items_key = "skills"


class QualificationsClient(ResourceClient):
    name = "qualification"
    path = "qualification"
    items_key = "qualifications"
    count_path = "count"

    def statistics(self) -> Dict[str, Any]:
        """Totals for the statistics cards (total / in use / available)."""
        return self.client.get(self._path("statistics"))

    def exists(self, qualification_name: str) -> bool:
        return bool(self.client.get(self._path("exists", qualification_name)))

    def count(self) -> int:
        return int(self.client.get(self._path("count")) or 0)


class JobTypesClient(ResourceClient):
    name = "job type"
    path = "jobtype"
    items_key = "jobTypes"
    count_path = "count"

    def exists(self, job_type: str) -> bool:
        return bool(self.client.get(self._path("exists", job_type)))

    def count(self) -> int:
        return int(self.client.get(self._path("count")) or 0)
