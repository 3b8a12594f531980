"""
List controller: one page of one resource plus its filters.

State machine:

    IDLE -> LOADING -> LOADED
                    -> ERROR

Every load() takes a generation number. A response that arrives after a
newer load() started is discarded, so a slow stale page can never
overwrite the current one.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..api.errors import ApiError
from ..api.resources.base import ResourceClient
from ..common.error_handling import ErrorCollector
from ..common.logger import get_logger
from .notifications import EntityMessages, Notifier, extract_error_message
from .pagination import PaginationState


class ListState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class Lookup:
    """A reference collection used to turn ids into labels."""

    name: str
    fetch: Callable[[], List[Dict[str, Any]]]
    label_field: str = "name"
    id_field: str = "id"


class ResourceList:
    """
    Paginated, filterable view over a ResourceClient.

    Args:
        resource: Client used for list_page()
        messages: Toast texts for the resource
        filter_defaults: Initial (and cleared) filter values
        items_per_page: Page size sent to the backend
        notifier: Receives load failures
        errors: Receives a failure record per failed operation
        lookups: Reference collections fetched by load_lookups()
        lookup_workers: Parallel workers for load_lookups()
        empty_text: Shown when the list is empty
        page_name: Tag for log lines
    """

    def __init__(
        self,
        resource: ResourceClient,
        messages: Optional[EntityMessages] = None,
        filter_defaults: Optional[Dict[str, Any]] = None,
        items_per_page: int = 10,
        notifier: Optional[Notifier] = None,
        errors: Optional[ErrorCollector] = None,
        lookups: Optional[List[Lookup]] = None,
        lookup_workers: int = 4,
        empty_text: Optional[str] = None,
        page_name: Optional[str] = None,
    ):
        self.resource = resource
        self.messages = messages or EntityMessages(resource.name)
        self.filter_defaults: Dict[str, Any] = dict(filter_defaults or {})
        self.filters: Dict[str, Any] = dict(self.filter_defaults)
        self.pagination = PaginationState(items_per_page=items_per_page)
        self.notifier = notifier or Notifier()
        self.errors = errors or ErrorCollector()
        self.lookup_specs: Dict[str, Lookup] = {l.name: l for l in (lookups or [])}
        self.lookup_workers = lookup_workers
        self.empty_text = empty_text or f"No {self.messages.plural or self.messages.entity + 's'} found"
        self.page_name = page_name or resource.name

        self.state = ListState.IDLE
        self.items: List[Dict[str, Any]] = []
        self.error_message: Optional[str] = None
        self.lookups: Dict[str, List[Dict[str, Any]]] = {}

        self._lock = threading.Lock()
        self._generation = 0
        self.logger = get_logger(__name__, page=self.page_name, resource=resource.name)

    # ===== Derived state =====

    @property
    def is_loading(self) -> bool:
        return self.state == ListState.LOADING

    @property
    def is_empty(self) -> bool:
        return self.state == ListState.LOADED and self.pagination.total_count == 0

    @property
    def show_pagination(self) -> bool:
        return self.pagination.total_count > 0

    @property
    def active_filters(self) -> Dict[str, Any]:
        return {k: v for k, v in self.filters.items() if v not in (None, "")}

    # ===== Operations =====

    def load(self) -> bool:
        """
        Fetch the current page with the current filters.

        Returns:
            True when this call's response was applied
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.state = ListState.LOADING
            page = self.pagination.current_page
            page_size = self.pagination.items_per_page
            filters = self.active_filters

        self.logger.debug(f"Loading page {page} (generation {generation}) filters={filters}")

        try:
            envelope = self.resource.list_page(page=page, page_size=page_size, filters=filters)
        except ApiError as e:
            return self._fail(generation, e)
        except Exception as e:
            self.logger.exception(f"Unexpected failure loading page {page}: {e}")
            return self._fail(generation, e)

        with self._lock:
            if generation != self._generation:
                self.logger.debug(f"Discarding stale response (generation {generation})")
                return False
            self.items = list(envelope.items)
            self.pagination.total_count = envelope.total_count
            self.error_message = None
            self.state = ListState.LOADED
            # Deleting the last record of the last page leaves us past the end.
            # Only step back if nobody moved the page since this fetch began.
            overshoot = (
                page > self.pagination.total_pages
                and self.pagination.current_page == page
            )
            if overshoot:
                self.pagination.current_page = self.pagination.total_pages

        self.logger.info(f"Loaded {len(envelope.items)} of {envelope.total_count} (page {page})")

        if overshoot:
            return self.load()
        return True

    def _fail(self, generation: int, error: Exception) -> bool:
        with self._lock:
            if generation != self._generation:
                self.logger.debug(f"Discarding stale failure (generation {generation})")
                return False
            self.state = ListState.ERROR
            self.items = []
            self.error_message = extract_error_message(error, fallback=self.messages.load_failed)

        self.notifier.error(self.messages.load_failed, error=error)
        self.errors.add_failure(self.page_name, "load", self.error_message, error)
        return False

    def apply_filters(self, **changes: Any) -> bool:
        """Update filters, go back to page 1 and reload."""
        with self._lock:
            self.filters.update(changes)
            self.pagination.reset()
        return self.load()

    def clear_filters(self) -> bool:
        """Restore default filters, go back to page 1 and reload."""
        with self._lock:
            self.filters = dict(self.filter_defaults)
            self.pagination.reset()
        return self.load()

    def change_page(self, page: int) -> bool:
        with self._lock:
            self.pagination.current_page = self.pagination.clamp(page)
        return self.load()

    def next_page(self) -> bool:
        return self.change_page(self.pagination.current_page + 1)

    def previous_page(self) -> bool:
        return self.change_page(self.pagination.current_page - 1)

    def refresh(self) -> bool:
        """Re-fetch the current page (after create/update/delete/status change)."""
        return self.load()

    # ===== Lookups =====

    def load_lookups(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Fetch every configured lookup collection in parallel.

        A failed lookup is logged and left empty; labels then fall back to
        the raw id.
        """
        if not self.lookup_specs:
            return {}

        results: Dict[str, List[Dict[str, Any]]] = {}
        with ThreadPoolExecutor(max_workers=self.lookup_workers) as executor:
            futures = {
                name: executor.submit(spec.fetch)
                for name, spec in self.lookup_specs.items()
            }
            for name, future in futures.items():
                try:
                    results[name] = list(future.result() or [])
                except ApiError as e:
                    self.logger.warning(f"Lookup '{name}' failed: {e.message}")
                    self.errors.add_failure(self.page_name, f"lookup:{name}", f"Failed to load {name}", e)
                    results[name] = []

        with self._lock:
            self.lookups = results
        self.logger.debug(f"Loaded lookups: {', '.join(f'{k}={len(v)}' for k, v in results.items())}")
        return results

    def label_for(self, lookup: str, item_id: Any, default: Optional[str] = None) -> str:
        """Display name for ``item_id`` in ``lookup``; the id itself when unknown."""
        spec = self.lookup_specs.get(lookup)
        if spec is not None and item_id not in (None, ""):
            for entry in self.lookups.get(lookup, []):
                if str(entry.get(spec.id_field)) == str(item_id):
                    return str(entry.get(spec.label_field, item_id))
        if default is not None:
            return default
        return "" if item_id is None else str(item_id)
