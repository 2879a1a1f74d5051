import math
from pydantic import BaseModel

# largest value SQL backends accept for OFFSET or an INTEGER key
MAX_SQL_INT = 2**63 - 1

class Pagination(BaseModel):
    total_pages: int
    current_page: int
    page_size: int
    total_records: int

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.page_size

    @property
    def beyond_storage(self) -> bool:
        return self.offset > MAX_SQL_INT

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

def paginate(page: int, total_records: int, page_size: int) -> Pagination:
    """Page metadata for a listing. The page is not clamped to total_pages;
    a page past the end simply selects nothing."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return Pagination(
        total_pages=math.ceil(total_records / page_size),
        current_page=page,
        page_size=page_size,
        total_records=total_records,
    )

def _positive_int(raw) -> int | None:
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value > 0 else None

def parse_page(raw) -> int:
    """Missing, non-numeric and non-positive input all mean page 1."""
    return _positive_int(raw) or 1

def parse_page_size(raw, default: int, maximum: int) -> int:
    size = _positive_int(raw) or default
    return min(size, maximum)
