"""
recruit-console: client toolkit for the recruitment-management REST API.

Public API:
- RecruitApi: facade exposing one resource client per backend resource
- ResourcePage / build_page: configured list + modal controllers for a resource
- Notifier: transient success/error toasts
- can_manage: role gate for management affordances
"""

from .api import RecruitApi, create_api
from .controllers import Notifier, can_manage
from .pages import ResourcePage, build_page
from .version import __version__

__all__ = [
    "RecruitApi",
    "create_api",
    "Notifier",
    "can_manage",
    "ResourcePage",
    "build_page",
    "__version__",
]
