import json
import logging
import time
from typing import List, Optional

from cityhealth.core.config import settings
from cityhealth.core.errors import SEARCH_FAILED, QueryFailure, ValidationError
from cityhealth.models import (
    AppliedFilters,
    Provider,
    ProviderCategory,
    ResultPage,
    SearchRequest,
    parse_providers,
)
from cityhealth.ranking.ranker import Ranker
from cityhealth.search.cache import TTLCache
from cityhealth.store.base import PROVIDERS, QueryResult

logger = logging.getLogger(__name__)

BY_RATING = [("rating", "desc")]
BY_POPULARITY = [("rating", "desc"), ("viewCount", "desc")]
BY_ID = [("id", "asc")]
ANY = ("", "all")
CATEGORIES = {c.value for c in ProviderCategory}


class SearchService:
    """
    Query builder over the provider collection.

    The store does the coarse work (verified gate, equality filters, rating
    order, cursor pagination); free-text matching and relevance ranking run
    on the returned page.
    """

    def __init__(
        self,
        store,
        ranker: Ranker = None,
        page_size: int = None,
        cache: TTLCache = None,
        max_cursors: int = None,
    ):
        self.store = store
        self.ranker = ranker or Ranker()
        self.page_size = page_size or settings.SEARCH_PAGE_SIZE
        self.cache = cache or TTLCache(
            settings.SEARCH_CACHE_TTL_SECONDS, settings.SEARCH_CACHE_MAX_ENTRIES
        )
        self.max_cursors = max_cursors or settings.PAGINATION_MAX_CURSORS
        self.scan_batch = settings.SCAN_BATCH_SIZE
        # pagination key -> {page: cursor after that page}
        self._cursors = {}

    async def search(self, request: SearchRequest) -> ResultPage:
        category = self._normalize_category(request.category)
        location = None if (request.location or "") in ANY else request.location

        cache_key = request.model_dump_json()
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached.model_copy(update={"from_cache": True})

        filters = self._build_filters(category, location, request)
        pagination_key = self._pagination_key(request, category, location)

        start = time.perf_counter()
        try:
            result = await self._fetch_page(pagination_key, filters, request.page)
        except QueryFailure as e:
            logger.error(f"Search failed for {pagination_key}: {e}")
            raise QueryFailure(SEARCH_FAILED["en"]) from e
        query_time_ms = (time.perf_counter() - start) * 1000

        providers = [p for p in parse_providers(result.records) if p.verified]

        query = request.query.strip()
        if query:
            providers = self.ranker.filter(providers, query)
            providers = self.ranker.rank(providers, query)

        if request.lat is not None and request.lon is not None:
            providers = self.ranker.annotate_distances(
                providers, request.lat, request.lon
            )

        page = ResultPage(
            providers=providers,
            total=len(providers),
            page=request.page,
            page_size=self.page_size,
            has_more=len(result.records) == self.page_size,
            query_time_ms=query_time_ms,
            filters=AppliedFilters(
                query=request.query,
                category=category,
                location=location,
                accessibility=request.filters.accessibility,
                home_visits=request.filters.home_visits,
                available_24_7=request.filters.available_24_7,
            ),
        )
        self.cache.set(cache_key, page)
        logger.info(
            f"Search q={query!r} category={category} location={location} "
            f"page={request.page}: {len(providers)} results in {query_time_ms:.1f}ms"
        )
        return page

    async def emergency_providers(self, limit: int = None) -> List[Provider]:
        limit = limit or settings.EMERGENCY_LIMIT
        filters = [("verified", True), ("available24_7", True)]
        try:
            result = await self.store.query(PROVIDERS, filters, BY_RATING, limit)
        except QueryFailure as e:
            raise QueryFailure("Failed to load emergency providers.") from e
        return [p for p in parse_providers(result.records) if p.verified]

    async def popular_providers(self, limit: int = None) -> List[Provider]:
        limit = limit or settings.POPULAR_LIMIT
        cache_key = f"popular_{limit}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        result = await self.store.query(
            PROVIDERS, [("verified", True)], BY_POPULARITY, limit
        )
        providers = [p for p in parse_providers(result.records) if p.verified]
        self.cache.set(cache_key, providers)
        return providers

    async def service_types(self) -> List[str]:
        """Distinct provider types among verified providers, sorted."""
        try:
            return await self._distinct("type")
        except QueryFailure as e:
            logger.error(f"Error fetching service types: {e}")
            return [c.value for c in ProviderCategory]

    async def cities(self) -> List[str]:
        """Distinct cities among verified providers, sorted."""
        try:
            return await self._distinct("city")
        except QueryFailure as e:
            logger.error(f"Error fetching cities: {e}")
            return [settings.DEFAULT_CITY]

    def reset_pagination(self):
        self._cursors = {}

    def clear_cache(self):
        self.cache.clear()

    def _normalize_category(self, category: Optional[str]) -> Optional[str]:
        if category is None or category in ANY:
            return None
        if category not in CATEGORIES:
            raise ValidationError(f"Unknown provider category: {category!r}")
        return category

    def _build_filters(self, category, location, request: SearchRequest) -> list:
        filters = [("verified", True)]
        if category:
            filters.append(("type", category))
        if location:
            filters.append(("city", location))
        if request.filters.accessibility:
            filters.append(("accessibility", True))
        if request.filters.home_visits:
            filters.append(("homeVisits", True))
        if request.filters.available_24_7:
            filters.append(("available24_7", True))
        return filters

    def _pagination_key(self, request: SearchRequest, category, location) -> str:
        return json.dumps(
            {
                "query": request.query,
                "category": category,
                "location": location,
                "filters": request.filters.model_dump(),
            },
            sort_keys=True,
            ensure_ascii=False,
        )

    async def _fetch_page(self, key: str, filters: list, page: int) -> QueryResult:
        cursors = self._cursors.setdefault(key, {})

        if page == 1:
            cursor = None
        elif page - 1 in cursors:
            cursor = cursors[page - 1]
        else:
            # Unknown cursor: walk forward from the closest page we know
            walked = [p for p in cursors if p < page]
            current = max(walked) if walked else 0
            cursor = cursors.get(current)
            while current < page - 1:
                result = await self.store.query(
                    PROVIDERS, filters, BY_RATING, self.page_size, cursor
                )
                current += 1
                if len(result.records) < self.page_size:
                    return QueryResult()
                self._set_cursor(key, current, result.last_cursor)
                cursor = result.last_cursor

        result = await self.store.query(
            PROVIDERS, filters, BY_RATING, self.page_size, cursor
        )
        if result.records:
            self._set_cursor(key, page, result.last_cursor)
        return result

    async def _distinct(self, field: str) -> List[str]:
        # Scan the verified providers in id order, one batch at a time
        values = set()
        cursor = None
        while True:
            result = await self.store.query(
                PROVIDERS, [("verified", True)], BY_ID, self.scan_batch, cursor
            )
            for record in result.records:
                if record.get("verified") and record.get(field):
                    values.add(record[field])
            if len(result.records) < self.scan_batch:
                return sorted(values)
            cursor = result.last_cursor

    def _set_cursor(self, key: str, page: int, cursor):
        cursors = self._cursors.setdefault(key, {})
        cursors[page] = cursor
        if len(cursors) > self.max_cursors:
            del cursors[min(cursors)]
