"""
UI-agnostic controllers for the paginated resource management pattern.
"""

from .forms import DetailModal, FormDraft, FormModal
from .list_controller import ListState, Lookup, ResourceList
from .notifications import EntityMessages, Notifier, Toast, ToastKind, extract_error_message
from .pagination import PaginationState
from .role_gate import Roles, can_manage

__all__ = [
    "DetailModal",
    "FormDraft",
    "FormModal",
    "ListState",
    "Lookup",
    "ResourceList",
    "EntityMessages",
    "Notifier",
    "Toast",
    "ToastKind",
    "extract_error_message",
    "PaginationState",
    "Roles",
    "can_manage",
]
