"""
Declarative page definitions.

A PageConfig says which resource a page manages, who may manage it, its
filters, its form and its extra actions. ResourcePage turns one into
working controllers.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..controllers.notifications import EntityMessages

LookupSource = Callable[[Any], List[Dict[str, Any]]]


@dataclass(frozen=True)
class LookupConfig:
    """A reference collection fetched from the API facade (``source(api)``)."""

    name: str
    source: LookupSource
    label_field: str = "name"
    id_field: str = "id"


@dataclass(frozen=True)
class StatusAction:
    """
    A one-shot record action such as close, lock or send.

    ``method`` names a method on the resource client that takes the record
    id first.
    """

    name: str
    method: str
    done: str
    failed: str


@dataclass(frozen=True)
class ActionForm:
    """
    A secondary form opened from the detail view, e.g. offer letter
    "Generate PDF". ``method`` is called as ``method(record_id, payload)``.
    """

    name: str
    method: str
    required: Tuple[str, ...] = ()
    defaults: Dict[str, Any] = field(default_factory=dict)
    success: Optional[str] = None
    failed: Optional[str] = None


@dataclass(frozen=True)
class PageConfig:
    key: str
    resource: str
    messages: EntityMessages
    manage_roles: Tuple[str, ...]
    filter_defaults: Dict[str, Any] = field(default_factory=lambda: {"search": ""})
    form_defaults: Dict[str, Any] = field(default_factory=dict)
    required: Tuple[str, ...] = ()
    columns: Tuple[str, ...] = ("id",)
    lookups: Tuple[LookupConfig, ...] = ()
    # Record field -> lookup used to render it
    labels: Dict[str, str] = field(default_factory=dict)
    status_actions: Tuple[StatusAction, ...] = ()
    action_forms: Tuple[ActionForm, ...] = ()
    empty_text: Optional[str] = None
    export: Optional[str] = None

    def status_action(self, name: str) -> StatusAction:
        for action in self.status_actions:
            if action.name == name:
                return action
        available = ", ".join(a.name for a in self.status_actions) or "none"
        raise ValueError(f"Page '{self.key}' has no action '{name}'. Available: {available}")
