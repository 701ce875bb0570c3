from dataclasses import dataclass

from cityhealth.chatbot.bot import Chatbot
from cityhealth.core.config import settings
from cityhealth.search.service import SearchService
from cityhealth.storage.local import (
    DismissalSet,
    InteractionLog,
    LocalStorage,
    SearchHistory,
)
from cityhealth.store.es_client import ElasticsearchStore
from cityhealth.store.retrying import RetryingStore
from cityhealth.suggestions.engine import SuggestionEngine


@dataclass
class Services:
    store: object
    search: SearchService
    suggestions: SuggestionEngine
    chatbot: Chatbot
    history: SearchHistory

    async def close(self):
        await self.store.close()


def build_services(store=None, storage: LocalStorage = None) -> Services:
    """Construct the service graph once per process and share it by reference."""
    if store is None:
        store = RetryingStore(ElasticsearchStore())
    storage = storage or LocalStorage(settings.LOCAL_STORAGE_PATH)

    history = SearchHistory(storage)
    search = SearchService(store)
    suggestions = SuggestionEngine(
        store,
        history=history,
        interactions=InteractionLog(storage),
        dismissed=DismissalSet(storage),
    )
    chatbot = Chatbot(search)
    return Services(
        store=store,
        search=search,
        suggestions=suggestions,
        chatbot=chatbot,
        history=history,
    )
