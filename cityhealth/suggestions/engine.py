import asyncio
import logging
import random
from typing import List, Optional

from cityhealth.core.config import settings
from cityhealth.models import Provider, SuggestionCandidate, parse_providers
from cityhealth.store.base import PROVIDERS
from cityhealth.storage.local import DismissalSet, InteractionLog, SearchHistory

logger = logging.getLogger(__name__)

BY_RATING = [("rating", "desc")]
BY_POPULARITY = [("rating", "desc"), ("viewCount", "desc")]

# (source, reason, icon), in tagging priority order
SOURCES = [
    ("recent", "Based on your recent searches", "bi-clock-history"),
    ("popular", "Highly rated by users", "bi-star-fill"),
    ("nearby", "Near your location", "bi-geo-alt-fill"),
    ("similar", "Similar to providers you viewed", "bi-eye-fill"),
    ("emergency", "Available 24/7 for emergencies", "bi-exclamation-triangle-fill"),
]


class SuggestionEngine:
    def __init__(
        self,
        store,
        history: SearchHistory,
        interactions: InteractionLog,
        dismissed: DismissalSet,
        limit: int = None,
        rng: random.Random = None,
    ):
        self.store = store
        self.history = history
        self.interactions = interactions
        self.dismissed = dismissed
        self.limit = limit or settings.SUGGESTIONS_LIMIT
        self.rng = rng or random.Random()

    async def suggest(self, user_location: str = None) -> List[SuggestionCandidate]:
        # Sources are independent; fetch them together, merge in priority order
        results = await asyncio.gather(
            self._safe("recent", self._from_history()),
            self._safe("popular", self._popular(5)),
            self._safe("nearby", self._nearby(user_location, 3)),
            self._safe("similar", self._from_interactions(3)),
            self._safe("emergency", self._emergency(2)),
        )

        dismissed = set(self.dismissed.ids())
        seen_ids = set()
        suggestions = []
        for (_, reason, icon), providers in zip(SOURCES, results):
            for provider in providers:
                if provider.id in dismissed or provider.id in seen_ids:
                    continue
                seen_ids.add(provider.id)
                suggestions.append(
                    SuggestionCandidate(provider=provider, reason=reason, reason_icon=icon)
                )

        self.rng.shuffle(suggestions)
        return suggestions[: self.limit]

    def dismiss(self, provider_id: str) -> None:
        self.dismissed.dismiss(provider_id)

    def clear_dismissed(self) -> None:
        self.dismissed.clear()

    def track_interaction(self, provider_id: str, kind: str = "viewed", category=None):
        self.interactions.track(provider_id, kind, category)

    async def _safe(self, source: str, fetch) -> List[Provider]:
        try:
            return await fetch
        except Exception as e:
            # One broken source only costs its own candidates
            logger.warning(f"Suggestion source '{source}' unavailable: {e}", exc_info=True)
            return []

    async def _top(self, filters, limit, order_by=BY_RATING) -> List[Provider]:
        result = await self.store.query(
            PROVIDERS, [("verified", True)] + filters, order_by, limit
        )
        return [p for p in parse_providers(result.records) if p.verified]

    async def _from_history(self) -> List[Provider]:
        recent = self.history.latest()
        if recent is None:
            return []
        filters = []
        if recent.get("category") not in (None, "", "all"):
            filters.append(("type", recent["category"]))
        if recent.get("location") not in (None, "", "all"):
            filters.append(("city", recent["location"]))
        return await self._top(filters, 3)

    async def _popular(self, limit: int) -> List[Provider]:
        return await self._top([], limit, BY_POPULARITY)

    async def _nearby(self, location: Optional[str], limit: int) -> List[Provider]:
        if not location:
            return []
        return await self._top([("city", location)], limit)

    async def _from_interactions(self, limit: int) -> List[Provider]:
        viewed = self.interactions.recent("viewed")
        if not viewed or not viewed[0].get("type"):
            return []
        last = viewed[0]
        # One extra so dropping the viewed provider still leaves `limit`
        similar = await self._top([("type", last["type"])], limit + 1)
        return [p for p in similar if p.id != last["id"]][:limit]

    async def _emergency(self, limit: int) -> List[Provider]:
        return await self._top([("available24_7", True)], limit)
