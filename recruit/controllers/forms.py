"""
Modal controllers.

FormModal drives create/edit: a FormDraft seeded from defaults or the
record being edited, a declarative tuple of required fields, and a submit
that either closes the modal and refreshes the list or keeps the draft
intact for the user to fix.

DetailModal is the read-only view with named delegate actions.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..api.errors import ApiError
from ..api.resources.base import ResourceClient
from ..common.error_handling import ErrorCollector
from ..common.logger import get_logger
from .notifications import EntityMessages, Notifier


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return not value
    return False


@dataclass
class FormDraft:
    """Editable values for one record. Presence-only required checks."""

    values: Dict[str, Any] = field(default_factory=dict)
    required: Tuple[str, ...] = ()
    field_errors: Dict[str, str] = field(default_factory=dict)

    def set(self, **changes: Any) -> None:
        self.values.update(changes)
        for name in changes:
            self.field_errors.pop(name, None)

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def missing_fields(self) -> List[str]:
        return [name for name in self.required if _is_blank(self.values.get(name))]

    def to_payload(self) -> Dict[str, Any]:
        """Values with surrounding whitespace stripped from strings."""
        return {
            k: v.strip() if isinstance(v, str) else v
            for k, v in self.values.items()
        }


class FormModal:
    """
    Create/edit modal for one resource.

    Args:
        resource: Client whose create()/update() are called
        messages: Toast texts
        required: Fields that must be present before submitting
        defaults: Initial values for a new record
        fields: Fields copied from the record being edited (defaults'
            keys when omitted)
        notifier: Receives success and failure toasts
        errors: Receives a failure record per failed submit
        on_saved: Called after a successful save (list refresh)
        prepare_payload: Turns draft values into the request body
        create: Overrides resource.create(payload)
        update: Overrides resource.update(id, payload)
        success_message: Overrides the created/updated toast text
        failure_message: Overrides the save failure toast fallback
        id_field: Key of the record id
        page_name: Tag for log lines
    """

    def __init__(
        self,
        resource: ResourceClient,
        messages: Optional[EntityMessages] = None,
        required: Iterable[str] = (),
        defaults: Optional[Dict[str, Any]] = None,
        fields: Optional[Iterable[str]] = None,
        notifier: Optional[Notifier] = None,
        errors: Optional[ErrorCollector] = None,
        on_saved: Optional[Callable[[Any], None]] = None,
        prepare_payload: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
        create: Optional[Callable[[Dict[str, Any]], Any]] = None,
        update: Optional[Callable[[Any, Dict[str, Any]], Any]] = None,
        success_message: Optional[str] = None,
        failure_message: Optional[str] = None,
        id_field: str = "id",
        page_name: Optional[str] = None,
    ):
        self.resource = resource
        self.messages = messages or EntityMessages(resource.name)
        self.required = tuple(required)
        self.defaults = dict(defaults or {})
        self.fields = tuple(fields) if fields is not None else tuple(self.defaults)
        self.notifier = notifier or Notifier()
        self.errors = errors or ErrorCollector()
        self.on_saved = on_saved
        self.prepare_payload = prepare_payload
        self._create = create or resource.create
        self._update = update or resource.update
        self.success_message = success_message
        self.failure_message = failure_message
        self.id_field = id_field
        self.page_name = page_name or resource.name

        self.draft: Optional[FormDraft] = None
        self.editing: Optional[Dict[str, Any]] = None
        self.submitting = False
        self.last_result: Any = None
        self.logger = get_logger(__name__, page=self.page_name, resource=resource.name)

    @property
    def is_open(self) -> bool:
        return self.draft is not None

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    @property
    def editing_id(self) -> Any:
        return self.editing.get(self.id_field) if self.editing else None

    def open(self, existing: Optional[Dict[str, Any]] = None) -> FormDraft:
        """Open for a new record, or for editing ``existing``."""
        values = dict(self.defaults)
        if existing is not None:
            names = self.fields or tuple(existing)
            for name in names:
                if name in existing and existing[name] is not None:
                    values[name] = existing[name]
        self.editing = existing
        self.draft = FormDraft(values=values, required=self.required)
        self.logger.debug(f"Opened form ({'edit ' + str(self.editing_id) if existing else 'create'})")
        return self.draft

    def close(self) -> None:
        """Discard the draft unconditionally."""
        self.draft = None
        self.editing = None
        self.submitting = False

    cancel = close

    def submit(self) -> bool:
        """
        Validate and save the draft.

        Returns:
            True when saved (the modal is then closed); False when the
            draft stays open for correction
        """
        if self.draft is None:
            raise RuntimeError("submit() called on a closed form")
        if self.submitting:
            return False

        missing = self.draft.missing_fields()
        if missing:
            self.draft.field_errors = {name: "Required" for name in missing}
            self.notifier.error(self.messages.required_message(missing[0]))
            self.logger.debug(f"Missing required fields: {', '.join(missing)}")
            return False

        payload = self.draft.to_payload()
        failed = self.failure_message or self.messages.save_failed
        if self.prepare_payload:
            payload = self.prepare_payload(payload)

        editing = self.is_editing
        self.submitting = True
        try:
            if editing:
                result = self._update(self.editing_id, payload)
            else:
                result = self._create(payload)
        except ApiError as e:
            self.submitting = False
            self.draft.field_errors = dict(e.validation_errors)
            toast = self.notifier.error(
                failed, error=e, conflict_messages=self.messages.conflicts
            )
            shown = toast.message if toast else e.message
            self.errors.add_failure(self.page_name, "update" if editing else "create", shown, e)
            return False
        except Exception as e:
            self.submitting = False
            self.logger.exception(f"Unexpected failure saving: {e}")
            self.notifier.error(failed, error=e)
            self.errors.add_failure(self.page_name, "update" if editing else "create", failed, e)
            return False

        self.last_result = result
        self.notifier.success(
            self.success_message or (self.messages.updated if editing else self.messages.created)
        )
        self.close()
        if self.on_saved:
            self.on_saved(result)
        return True


class DetailModal:
    """
    Read-only record view.

    Args:
        resource: Client used by open_by_id()
        messages: Toast texts
        actions: Name -> callable taking the open record, e.g.
            {"generate_pdf": lambda offer: generate_form.open(offer)}
        notifier: Receives load failures
        errors: Receives a failure record per failed fetch
        page_name: Tag for log lines
    """

    def __init__(
        self,
        resource: ResourceClient,
        messages: Optional[EntityMessages] = None,
        actions: Optional[Dict[str, Callable[[Dict[str, Any]], Any]]] = None,
        notifier: Optional[Notifier] = None,
        errors: Optional[ErrorCollector] = None,
        page_name: Optional[str] = None,
    ):
        self.resource = resource
        self.messages = messages or EntityMessages(resource.name)
        self.actions: Dict[str, Callable[[Dict[str, Any]], Any]] = dict(actions or {})
        self.notifier = notifier or Notifier()
        self.errors = errors or ErrorCollector()
        self.page_name = page_name or resource.name
        self.item: Optional[Dict[str, Any]] = None
        self.logger = get_logger(__name__, page=self.page_name, resource=resource.name)

    @property
    def is_open(self) -> bool:
        return self.item is not None

    def open(self, item: Dict[str, Any]) -> Dict[str, Any]:
        self.item = item
        return item

    def open_by_id(self, item_id: Any) -> bool:
        """Fetch the record and open it. Stays closed on failure."""
        try:
            item = self.resource.get(item_id)
        except ApiError as e:
            toast = self.notifier.error(self.messages.detail_failed, error=e)
            self.errors.add_failure(
                self.page_name, "detail", toast.message if toast else e.message, e
            )
            return False
        self.open(item)
        return True

    def close(self) -> None:
        self.item = None

    def add_action(self, name: str, handler: Callable[[Dict[str, Any]], Any]) -> None:
        self.actions[name] = handler

    def run(self, action: str) -> Any:
        """Invoke a delegate action on the open record."""
        if self.item is None:
            raise RuntimeError("No record is open")
        if action not in self.actions:
            raise ValueError(f"Unknown action '{action}'. Available: {', '.join(self.actions) or 'none'}")
        self.logger.debug(f"Running detail action '{action}'")
        return self.actions[action](self.item)
