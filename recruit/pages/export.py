"""
CSV export: download a server-rendered CSV into the download directory.

Files are named ``<resource>-export-<YYYY-MM-DD>.csv``.
"""

from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from ..api import RecruitApi
from ..api.errors import ApiError
from ..api.models import CurrentUser
from ..common.config import get_settings
from ..common.error_handling import ErrorCollector
from ..common.logger import get_logger
from ..controllers.notifications import Notifier
from ..controllers.role_gate import Roles, can_manage

EXPORT_ROLES = (Roles.ADMIN, Roles.HR, Roles.RECRUITER)

# Filters each export endpoint accepts
EXPORT_FILTERS: Dict[str, Tuple[str, ...]] = {
    "jobs": ("search", "statusId", "jobTypeId"),
    "candidates": ("search",),
    "applications": ("search", "jobId", "candidateId", "statusId"),
    "interviews": (),
    "skills": (),
}


def export_filename(resource: str, day: date) -> str:
    return f"{resource}-export-{day.isoformat()}.csv"


class CsvExporter:
    """
    Runs exports and saves the results.

    Args:
        api: API facade
        download_dir: Target directory (settings.download_dir by default)
        user: Signed-in user, for the role gate
        notifier: Receives success and failure toasts
        errors: Receives a failure record per failed export
        today: Date provider for file names
    """

    def __init__(
        self,
        api: RecruitApi,
        download_dir: Optional[str] = None,
        user: Optional[CurrentUser] = None,
        notifier: Optional[Notifier] = None,
        errors: Optional[ErrorCollector] = None,
        today: Callable[[], date] = date.today,
    ):
        self.api = api
        self.download_dir = Path(download_dir or get_settings().download_dir)
        self.user = user or CurrentUser()
        self.notifier = notifier or Notifier()
        self.errors = errors or ErrorCollector()
        self.today = today
        self.logger = get_logger(__name__, page="export")

    @property
    def can_export(self) -> bool:
        return can_manage(self.user.role, EXPORT_ROLES)

    def export(self, resource: str, **filters: Any) -> Optional[Path]:
        """
        Export ``resource`` to CSV.

        Returns:
            Path of the written file, or None when the backend call or the
            file write failed

        Raises:
            ValueError: Unknown resource or filter
        """
        if resource not in EXPORT_FILTERS:
            raise ValueError(f"Cannot export '{resource}'. Exportable: {', '.join(EXPORT_FILTERS)}")
        unknown = set(filters) - set(EXPORT_FILTERS[resource])
        if unknown:
            raise ValueError(f"Unsupported filters for {resource}: {', '.join(sorted(unknown))}")

        try:
            blob = self.api.export.export(resource, **filters)
        except ApiError as e:
            toast = self.notifier.error(f"Failed to export {resource}", error=e)
            self.errors.add_failure("export", resource, toast.message if toast else e.message, e)
            return None

        target = self.download_dir / export_filename(resource, self.today())
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(blob.content)
        except OSError as e:
            self.logger.error(f"Could not write {target}: {e}")
            message = f"Failed to save {resource} export"
            self.notifier.error(message)
            self.errors.add_failure("export", resource, message, e)
            return None

        self.logger.info(f"Exported {resource} to {target} ({len(blob.content)} bytes)")
        self.notifier.success(f"{resource.capitalize()} exported successfully")
        return target
