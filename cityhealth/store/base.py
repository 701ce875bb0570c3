from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence, Tuple

# (field, value) pairs, all ANDed
EqualityFilters = Sequence[Tuple[str, Any]]
# (field, "asc" | "desc") pairs, most significant first
OrderBy = Sequence[Tuple[str, str]]

PROVIDERS = "providers"


@dataclass
class QueryResult:
    records: List[dict] = field(default_factory=list)
    last_cursor: Optional[Any] = None


class DocumentStore(Protocol):
    async def query(
        self,
        collection: str,
        filters: EqualityFilters,
        order_by: OrderBy,
        limit: int,
        start_after: Optional[Any] = None,
    ) -> QueryResult: ...

    async def close(self) -> None: ...
