"""
Generic resource client.

One ResourceClient subclass per backend resource. Subclasses declare the
route prefix and envelope shape; resource-specific actions are plain
methods on the subclass.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..http_client import ApiClient
from ..models import PageEnvelope, PaginationInfo

logger = logging.getLogger(__name__)

# Backend rejects pageSize > 100
MAX_PAGE_SIZE = 100


def parse_page(
    body: Any,
    items_key: Optional[str],
    page: int,
    page_size: int,
) -> PageEnvelope:
    """
    Normalize the backend's list envelopes.

    Accepts:
        [...]                                         bare array
        {"<items_key>": [...], "pagination": {...}}   named array + block
        {"items"|"data": [...], "totalCount": N}      generic envelope

    Args:
        body: Parsed JSON body
        items_key: Resource-specific array key (e.g. "skills")
        page: Requested page (used when the body has no pagination)
        page_size: Requested page size

    Returns:
        PageEnvelope
    """
    if body is None:
        return PageEnvelope(items=[], total_count=0, page=page, page_size=page_size)

    if isinstance(body, list):
        return PageEnvelope(items=body, total_count=len(body), page=page, page_size=page_size)

    if not isinstance(body, dict):
        raise ValueError(f"Unexpected list response type: {type(body).__name__}")

    items = None
    for key in (items_key, "items", "data"):
        if key and isinstance(body.get(key), list):
            items = body[key]
            break
    if items is None:
        # Fall back to the first array-valued field
        items = next((v for v in body.values() if isinstance(v, list)), [])

    if isinstance(body.get("pagination"), dict):
        info = PaginationInfo.model_validate(body["pagination"])
    else:
        info = PaginationInfo.model_validate({
            "page": body.get("page", body.get("currentPage", page)),
            "pageSize": body.get("pageSize", page_size),
            "totalCount": body.get("totalCount", len(items)),
        })

    return PageEnvelope(
        items=items,
        total_count=info.total_count,
        page=info.page,
        page_size=info.page_size,
    )


class ResourceClient:
    """
    CRUD wrapper for one backend resource.

    Attributes:
        name: Logical resource name used in logs and messages
        path: Route prefix relative to the API base URL
        items_key: Array key in list envelopes
        paginated: False when the list endpoint ignores page/pageSize and
            returns the whole collection; list_page() then pages locally so
            every controller sees the same page + total contract
        search_fields: Record fields matched by the "search" filter when
            paging locally
        page_size_param: Query param carrying the page size
        count_path: Sub-route returning the total (optionally narrowed by
            "search"), for paged endpoints that answer with a bare array
        list_path: Sub-route of the list endpoint when it is not the prefix
        list_route: Full list route when the list lives outside ``path``
    """

    name: str = "resource"
    path: str = ""
    items_key: Optional[str] = None
    paginated: bool = True
    search_fields: Iterable[str] = ()
    page_size_param: str = "pageSize"
    count_path: Optional[str] = None
    list_path: str = ""
    list_route: Optional[str] = None

    def __init__(self, client: ApiClient):
        self.client = client

    def _path(self, *parts: Any) -> str:
        segments = [self.path.strip("/")] + [str(p).strip("/") for p in parts if p != ""]
        return "/".join(s for s in segments if s)

    def _list_path(self) -> str:
        return self.list_route or self._path(self.list_path)

    # ===== Generic CRUD =====

    def list_page(
        self,
        page: int = 1,
        page_size: int = 10,
        filters: Optional[Dict[str, Any]] = None,
    ) -> PageEnvelope:
        """Fetch one page of records matching ``filters``."""
        filters = dict(filters or {})
        if not self.paginated:
            return self._page_locally(page, page_size, filters)

        params = {"page": page, self.page_size_param: page_size, **filters}
        body = self.client.get(self._list_path(), params=params)
        envelope = parse_page(body, self.items_key, page, page_size)
        if isinstance(body, list):
            envelope.total_count = self._total_for_bare_page(envelope, page, page_size, filters)
        return envelope

    def _total_for_bare_page(
        self,
        envelope: PageEnvelope,
        page: int,
        page_size: int,
        filters: Dict[str, Any],
    ) -> int:
        """
        Total for a paged endpoint that returns a bare array.

        A short page pins the total exactly. A full page asks the count
        endpoint when the resource has one. The count only narrows by
        "search", so it is trusted when no other filter is active.
        """
        seen = (page - 1) * page_size + len(envelope.items)
        if len(envelope.items) < page_size:
            return seen
        active = {k: v for k, v in filters.items() if v is not None and v != ""}
        if self.count_path and set(active) <= {"search"}:
            count = self.client.get(self._path(self.count_path), params=active)
            if isinstance(count, int):
                return max(count, seen)
        # Unknown: advertise one more page so the user can keep paging
        return seen + 1

    def _page_locally(self, page: int, page_size: int, filters: Dict[str, Any]) -> PageEnvelope:
        search = filters.pop("search", None)
        body = self.client.get(self._list_path(), params=filters)
        items = parse_page(body, self.items_key, 1, page_size).items
        if search:
            needle = str(search).lower()
            items = [
                item for item in items
                if any(needle in str(item.get(f) or "").lower() for f in self.search_fields)
            ]
        start = (page - 1) * page_size
        return PageEnvelope(
            items=items[start:start + page_size],
            total_count=len(items),
            page=page,
            page_size=page_size,
        )

    def list_all(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Fetch every record, walking pages of MAX_PAGE_SIZE.

        Used for lookup collections that populate select inputs.
        """
        collected: List[Dict[str, Any]] = []
        page = 1
        while True:
            envelope = self.list_page(page=page, page_size=MAX_PAGE_SIZE, filters=filters)
            collected.extend(envelope.items)
            if not envelope.items or len(collected) >= envelope.total_count:
                break
            page += 1
        return collected

    def get(self, item_id: Any) -> Dict[str, Any]:
        return self.client.get(self._path(item_id))

    def create(self, payload: Dict[str, Any]) -> Any:
        logger.info(f"Creating {self.name}")
        return self.client.post(self._path(), json=payload)

    def update(self, item_id: Any, payload: Dict[str, Any]) -> Any:
        logger.info(f"Updating {self.name} {item_id}")
        return self.client.put(self._path(item_id), json=payload)

    def delete(self, item_id: Any) -> Any:
        logger.info(f"Deleting {self.name} {item_id}")
        return self.client.delete(self._path(item_id))


class LookupClient(ResourceClient):
    """Read-only reference collection (statuses, types, roles)."""

    paginated = False

    def create(self, payload):
        raise TypeError(f"{self.name} is read-only")

    def update(self, item_id, payload):
        raise TypeError(f"{self.name} is read-only")

    def delete(self, item_id):
        raise TypeError(f"{self.name} is read-only")
