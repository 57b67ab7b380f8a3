"""Typed listing spec for the product catalogue.

Every recognised filter and sort field is enumerated here. Raw query-string
values are coerced with silent fallback: an out-of-range page or limit, or an
unknown sort field/order, resolves to the default instead of erroring.
"""
import math
from dataclasses import dataclass
from enum import Enum

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class SortField(str, Enum):
    NAME = "name"
    PRICE = "price"
    STOCK = "stock"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _to_int(raw) -> int | None:
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None

def _to_enum(enum_cls, raw, default):
    try:
        return enum_cls(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class ProductQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    search: str = ""
    category_id: int | None = None
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def from_params(
        cls,
        page: str | None = None,
        limit: str | None = None,
        search: str | None = None,
        category_id: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> "ProductQuery":
        page_n = _to_int(page)
        if page_n is None or page_n < 1:
            page_n = DEFAULT_PAGE

        limit_n = _to_int(limit)
        if limit_n is None or limit_n < 1:
            limit_n = DEFAULT_LIMIT
        limit_n = min(limit_n, MAX_LIMIT)

        return cls(
            page=page_n,
            limit=limit_n,
            search=(search or "").strip(),
            category_id=_to_int(category_id),
            sort_by=_to_enum(SortField, sort_by, SortField.CREATED_AT),
            sort_order=_to_enum(SortOrder, (sort_order or "").lower(), SortOrder.DESC),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total_items: int) -> int:
        return math.ceil(total_items / self.limit)
