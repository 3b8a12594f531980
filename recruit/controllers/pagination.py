"""Server-side pagination state."""

import math
from dataclasses import dataclass


@dataclass
class PaginationState:
    current_page: int = 1
    items_per_page: int = 10
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_count / self.items_per_page))

    def clamp(self, page: int) -> int:
        """Clamp ``page`` into [1, total_pages]."""
        return min(max(1, page), self.total_pages)

    def reset(self) -> None:
        self.current_page = 1

    @property
    def first_item(self) -> int:
        """1-based index of the first item on the current page (0 when empty)."""
        if self.total_count == 0:
            return 0
        return (self.current_page - 1) * self.items_per_page + 1

    @property
    def last_item(self) -> int:
        return min(self.current_page * self.items_per_page, self.total_count)
