# order_service/utils/pagination.py

import math
from typing import Optional, Tuple

from order_service.config import settings


def resolve_pagination(page: Optional[int] = None, limit: Optional[int] = None) -> Tuple[int, int, int]:
    """
    page/limit -> (page, limit, offset).
    Не переданные (или нулевые) значения заменяются на значения по умолчанию:
    page = 1, limit = 10. offset = (page - 1) * limit.
    """
    page = page or settings.DEFAULT_PAGE
    limit = limit or settings.DEFAULT_LIMIT
    if page < 0 or limit < 0:
        raise ValueError(f"page and limit must be positive, got page={page}, limit={limit}")
    return page, limit, (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    # ceil(0 / limit) == 0
    return math.ceil(total / limit)
