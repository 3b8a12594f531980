"""
ResourcePage: wires one PageConfig into working controllers.

    page = build_page("qualifications", api, user)
    page.open()                      # lookups + first page
    page.form.open()                 # "Add qualification"
    page.form.draft.set(qualificationName="MBA")
    page.form.submit()               # toast + list refresh, or stays open
"""

from functools import partial
from typing import Any, Dict, List, Optional

from ..api import RecruitApi
from ..api.errors import ApiError
from ..api.models import CurrentUser
from ..common.config import ClientSettings, get_settings
from ..common.error_handling import ErrorCollector
from ..common.logger import get_logger
from ..controllers.forms import DetailModal, FormModal
from ..controllers.list_controller import Lookup, ResourceList
from ..controllers.notifications import Notifier
from ..controllers.role_gate import can_manage
from .config import PageConfig
from .registry import get_page_config


class ResourcePage:
    """
    One management page: list, create/edit form, detail view, delete and
    status actions, all reporting through one Notifier and ErrorCollector.
    """

    def __init__(
        self,
        config: PageConfig,
        api: RecruitApi,
        user: Optional[CurrentUser] = None,
        notifier: Optional[Notifier] = None,
        errors: Optional[ErrorCollector] = None,
        settings: Optional[ClientSettings] = None,
    ):
        settings = settings or get_settings()
        self.config = config
        self.api = api
        self.user = user or CurrentUser()
        self.resource = getattr(api, config.resource)
        self.messages = config.messages
        self.notifier = notifier or Notifier(ttl_seconds=settings.toast_ttl_seconds)
        self.errors = errors or ErrorCollector()
        self.logger = get_logger(__name__, page=config.key, resource=self.resource.name)

        shared = dict(notifier=self.notifier, errors=self.errors)

        self.list = ResourceList(
            self.resource,
            messages=self.messages,
            filter_defaults=config.filter_defaults,
            items_per_page=settings.items_per_page,
            lookups=[
                Lookup(l.name, partial(l.source, api), l.label_field, l.id_field)
                for l in config.lookups
            ],
            lookup_workers=settings.lookup_workers,
            empty_text=config.empty_text,
            page_name=config.key,
            **shared,
        )
        self.form = FormModal(
            self.resource,
            messages=self.messages,
            required=config.required,
            defaults=config.form_defaults,
            on_saved=self._after_change,
            page_name=config.key,
            **shared,
        )
        self.action_forms: Dict[str, FormModal] = {}
        for action_form in config.action_forms:
            self.action_forms[action_form.name] = FormModal(
                self.resource,
                messages=self.messages,
                required=action_form.required,
                defaults=action_form.defaults,
                update=getattr(self.resource, action_form.method),
                success_message=action_form.success,
                failure_message=action_form.failed,
                on_saved=self._after_change,
                page_name=config.key,
                **shared,
            )
        self.detail = DetailModal(
            self.resource,
            messages=self.messages,
            actions={name: form.open for name, form in self.action_forms.items()},
            page_name=config.key,
            **shared,
        )

    # ===== Role gate =====

    @property
    def can_manage(self) -> bool:
        return can_manage(self.user.role, self.config.manage_roles)

    # ===== Lifecycle =====

    def open(self) -> bool:
        """Page load: lookups once, then the first page."""
        self.list.load_lookups()
        return self.list.load()

    def _after_change(self, _result: Any = None) -> None:
        self.list.refresh()

    # ===== Mutations =====

    def delete(self, item_id: Any) -> bool:
        """Delete one record, then refresh. A failure leaves the list as is."""
        try:
            self.resource.delete(item_id)
        except ApiError as e:
            toast = self.notifier.error(
                self.messages.delete_failed, error=e, conflict_messages=self.messages.conflicts
            )
            self.errors.add_failure(self.config.key, "delete", toast.message if toast else e.message, e)
            return False
        self.notifier.success(self.messages.deleted)
        self._after_change()
        return True

    def run_action(self, name: str, item_id: Any, *args: Any) -> bool:
        """
        Run a status action (close, lock, send, ...) on one record.

        Args:
            name: StatusAction name from the page config
            item_id: Record id, passed first to the client method
            *args: Extra arguments (reason, roles, payload)

        Returns:
            True on success (the list is then refreshed)
        """
        action = self.config.status_action(name)
        method = getattr(self.resource, action.method)
        try:
            method(item_id, *args)
        except ApiError as e:
            toast = self.notifier.error(action.failed, error=e, conflict_messages=self.messages.conflicts)
            self.errors.add_failure(self.config.key, name, toast.message if toast else e.message, e)
            return False
        self.notifier.success(action.done)
        self._after_change()
        return True

    # ===== Rendering helpers =====

    def label(self, item: Dict[str, Any], field_name: str) -> str:
        value = item.get(field_name)
        lookup = self.config.labels.get(field_name)
        if lookup:
            return self.list.label_for(lookup, value)
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return "" if value is None else str(value)

    def rows(self) -> List[Dict[str, str]]:
        """Current page as display strings, one dict per row in column order."""
        return [
            {column: self.label(item, column) for column in self.config.columns}
            for item in self.list.items
        ]


def build_page(
    key: str,
    api: RecruitApi,
    user: Optional[CurrentUser] = None,
    **kwargs: Any,
) -> ResourcePage:
    """Build the registered page ``key`` (e.g. "skills", "offer_letters")."""
    return ResourcePage(get_page_config(key), api, user=user, **kwargs)
