import logging

from elasticsearch import ApiError, AsyncElasticsearch, TransportError

from cityhealth.core.config import settings
from cityhealth.core.errors import QueryFailure
from cityhealth.store.base import QueryResult

logger = logging.getLogger(__name__)


class ElasticsearchStore:
    """
    Document store backed by Elasticsearch.

    Each collection maps to its own index (``ES_INDEX_PREFIX + collection``).
    Equality filters become ``term`` clauses in filter context, ordering maps
    to ``sort`` and cursors are the ``sort`` values of the last hit, replayed
    through ``search_after``.
    """

    def __init__(self, host: str = None, index_prefix: str = None, tiebreak_field=None):
        self.client = AsyncElasticsearch(host or settings.ES_HOST)
        self.index_prefix = (
            settings.ES_INDEX_PREFIX if index_prefix is None else index_prefix
        )
        self.tiebreak_field = (
            settings.ES_TIEBREAK_FIELD if tiebreak_field is None else tiebreak_field
        )

    def index_for(self, collection: str) -> str:
        return f"{self.index_prefix}{collection}"

    def build_query(self, filters) -> dict:
        return {
            "bool": {
                "filter": [{"term": {field: value}} for field, value in filters]
            }
        }

    def build_sort(self, order_by) -> list:
        sort = [{field: {"order": direction}} for field, direction in order_by]
        # search_after needs a total order to page without skipping ties
        fields = {field for field, _ in order_by}
        if self.tiebreak_field and self.tiebreak_field not in fields:
            sort.append({self.tiebreak_field: {"order": "asc"}})
        return sort

    async def query(self, collection, filters, order_by, limit, start_after=None):
        params = {
            "index": self.index_for(collection),
            "query": self.build_query(filters),
            "sort": self.build_sort(order_by),
            "size": limit,
        }
        if start_after is not None:
            params["search_after"] = start_after

        try:
            resp = await self.client.search(**params)
        except (ApiError, TransportError) as e:
            logger.error(f"Query on {params['index']} failed: {e}")
            raise QueryFailure(f"Query on {collection} failed") from e

        hits = resp["hits"]["hits"]
        records = [self._parse_hit(hit) for hit in hits]
        last_cursor = hits[-1].get("sort") if hits else None
        return QueryResult(records=records, last_cursor=last_cursor)

    def _parse_hit(self, hit) -> dict:
        record = dict(hit["_source"])
        record["id"] = hit["_id"]
        return record

    async def close(self):
        await self.client.close()
