import pytest
from unittest.mock import AsyncMock, patch
from elasticsearch import ConnectionError as ESConnectionError

from cityhealth.core.errors import QueryFailure
from cityhealth.store.es_client import ElasticsearchStore


@pytest.mark.asyncio
async def test_query_construction():
    # Mock AsyncElasticsearch
    with patch("cityhealth.store.es_client.AsyncElasticsearch") as MockES:
        mock_es_instance = AsyncMock()
        MockES.return_value = mock_es_instance

        mock_es_instance.search.return_value = {
            "hits": {
                "hits": [
                    {
                        "_id": "p1",
                        "_score": None,
                        "_source": {"name": "Heart Care Clinic", "rating": 4.8},
                        "sort": [4.8, "p1"],
                    }
                ]
            }
        }

        store = ElasticsearchStore(index_prefix="test_", tiebreak_field="id")
        result = await store.query(
            "providers",
            [("verified", True), ("city", "Oran")],
            [("rating", "desc")],
            20,
        )

        call_args = mock_es_instance.search.call_args
        assert call_args is not None
        kwargs = call_args.kwargs

        assert kwargs["index"] == "test_providers"
        assert kwargs["query"]["bool"]["filter"] == [
            {"term": {"verified": True}},
            {"term": {"city": "Oran"}},
        ]
        # Rating first, then the tiebreaker for search_after
        assert kwargs["sort"] == [
            {"rating": {"order": "desc"}},
            {"id": {"order": "asc"}},
        ]
        assert kwargs["size"] == 20
        assert "search_after" not in kwargs

        assert result.records == [
            {"name": "Heart Care Clinic", "rating": 4.8, "id": "p1"}
        ]
        assert result.last_cursor == [4.8, "p1"]


@pytest.mark.asyncio
async def test_cursor_is_replayed_as_search_after():
    with patch("cityhealth.store.es_client.AsyncElasticsearch") as MockES:
        mock_es_instance = AsyncMock()
        MockES.return_value = mock_es_instance
        mock_es_instance.search.return_value = {"hits": {"hits": []}}

        store = ElasticsearchStore(index_prefix="", tiebreak_field="id")
        result = await store.query(
            "providers",
            [("verified", True)],
            [("rating", "desc"), ("viewCount", "desc")],
            5,
            start_after=[4.8, "p1"],
        )

        kwargs = mock_es_instance.search.call_args.kwargs
        assert kwargs["index"] == "providers"
        assert kwargs["search_after"] == [4.8, "p1"]
        assert [list(s)[0] for s in kwargs["sort"]] == ["rating", "viewCount", "id"]

        assert result.records == []
        assert result.last_cursor is None


@pytest.mark.asyncio
async def test_tiebreaker_not_duplicated():
    with patch("cityhealth.store.es_client.AsyncElasticsearch") as MockES:
        MockES.return_value = AsyncMock()
        store = ElasticsearchStore(index_prefix="", tiebreak_field="id")

        assert store.build_sort([("id", "desc")]) == [{"id": {"order": "desc"}}]


@pytest.mark.asyncio
async def test_transport_error_becomes_query_failure():
    with patch("cityhealth.store.es_client.AsyncElasticsearch") as MockES:
        mock_es_instance = AsyncMock()
        MockES.return_value = mock_es_instance
        mock_es_instance.search.side_effect = ESConnectionError("connection refused")

        store = ElasticsearchStore()

        with pytest.raises(QueryFailure) as exc_info:
            await store.query("providers", [("verified", True)], [("rating", "desc")], 20)

        assert isinstance(exc_info.value.__cause__, ESConnectionError)

        await store.close()
        mock_es_instance.close.assert_awaited_once()
