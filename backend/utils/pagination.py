import math
from typing import Any, List, NamedTuple

from sqlalchemy.orm import Query


class Page(NamedTuple):
    docs: List[Any]
    total: int
    pages: int


def paginate(query: Query, page: int = 1, page_size: int = 10) -> Page:
    """Apply offset/limit to ``query`` and count the unpaged rows.

    ``page`` is 1-based; values below 1 are treated as 1.
    """
    page = max(page, 1)
    page_size = max(page_size, 1)

    total = query.order_by(None).count()
    docs = query.offset((page - 1) * page_size).limit(page_size).all()
    return Page(docs=docs, total=total, pages=math.ceil(total / page_size))
