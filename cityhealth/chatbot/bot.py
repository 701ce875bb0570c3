import logging
from typing import List, Optional

from cityhealth.chatbot import responses
from cityhealth.core.config import settings
from cityhealth.core.errors import CityHealthError
from cityhealth.models import (
    ChatReply,
    Intent,
    IntentType,
    Provider,
    SearchFilters,
    SearchRequest,
)
from cityhealth.nlp.intent import IntentClassifier

logger = logging.getLogger(__name__)

SHOW_PROVIDERS = "showProviders"


class Chatbot:
    """
    Rule-based assistant. Every message is handled on its own: classify,
    then route to the builder for that intent. Builders that need providers
    go through the search service; any failure there becomes an apology.
    """

    def __init__(
        self,
        search_service,
        classifier: IntentClassifier = None,
        max_providers: int = None,
        default_language: str = None,
    ):
        self.search = search_service
        self.classifier = classifier or IntentClassifier()
        self.max_providers = max_providers or settings.CHAT_MAX_PROVIDERS
        self.default_language = default_language or settings.DEFAULT_LANGUAGE
        self.handlers = {
            IntentType.FIND_PROVIDER: self._find_provider,
            IntentType.EMERGENCY: self._emergency,
            IntentType.HOURS: self._hours,
            IntentType.LOCATION: self._location,
            IntentType.ACCESSIBILITY: self._accessibility,
            IntentType.HOME_VISIT: self._home_visit,
            IntentType.GREETING: self._greeting,
            IntentType.HELP: self._help,
            IntentType.THANKS: self._thanks,
        }

    def classify(self, message: str, language: str = None) -> Intent:
        return self.classifier.classify(message, language or self.default_language)

    async def reply(self, message: str, language: str = None) -> ChatReply:
        language = language or self.default_language
        intent = self.classify(message, language)
        logger.info(
            f"Chat intent={intent.type.value} confidence={intent.confidence:.2f} lang={language}"
        )

        handler = self.handlers.get(intent.type, self._unknown)
        try:
            return await handler(message, language)
        except Exception:
            logger.exception(f"Chatbot failed to answer {intent.type.value}")
            return ChatReply(
                text=responses.localized(responses.APOLOGY, language),
                intent=intent.type,
                error=True,
            )

    async def suggest_providers(
        self,
        specialty: str = None,
        location: str = None,
        filters: Optional[SearchFilters] = None,
    ) -> List[Provider]:
        request = SearchRequest(
            query=specialty or "",
            location=location or None,
            filters=filters or SearchFilters(),
        )
        try:
            page = await self.search.search(request)
        except CityHealthError as e:
            logger.warning(f"Provider suggestions unavailable: {e}")
            return []
        return page.providers[: self.max_providers]

    # Static builders

    def _static(self, intent: IntentType, table: dict, language: str) -> ChatReply:
        return ChatReply(
            text=responses.localized(table, language),
            intent=intent,
            suggestions=responses.quick_replies(language),
        )

    async def _greeting(self, message, language):
        return self._static(IntentType.GREETING, responses.GREETING, language)

    async def _help(self, message, language):
        return self._static(IntentType.HELP, responses.HELP, language)

    async def _thanks(self, message, language):
        return self._static(IntentType.THANKS, responses.THANKS, language)

    async def _unknown(self, message, language):
        return self._static(IntentType.UNKNOWN, responses.UNKNOWN, language)

    async def _hours(self, message, language):
        return ChatReply(
            text=responses.localized(responses.HOURS, language),
            intent=IntentType.HOURS,
            suggestions=responses.emergency_reply(language),
        )

    # Search-backed builders

    def _providers_reply(self, intent, table, language, page) -> ChatReply:
        return ChatReply(
            text=responses.localized(table, language, count=page.total),
            intent=intent,
            providers=page.providers[: self.max_providers],
            action=SHOW_PROVIDERS,
        )

    async def _find_provider(self, message, language):
        specialty = self.classifier.extract_specialty(message, language)
        page = await self.search.search(SearchRequest(query=specialty or ""))
        if not page.providers:
            return self._static(
                IntentType.FIND_PROVIDER, responses.NO_PROVIDERS, language
            )
        return self._providers_reply(
            IntentType.FIND_PROVIDER, responses.PROVIDERS_FOUND, language, page
        )

    async def _emergency(self, message, language):
        page = await self.search.search(
            SearchRequest(filters=SearchFilters(available_24_7=True))
        )
        return self._providers_reply(
            IntentType.EMERGENCY, responses.EMERGENCY_FOUND, language, page
        )

    async def _location(self, message, language):
        specialty = self.classifier.extract_specialty(message, language)
        if specialty:
            page = await self.search.search(SearchRequest(query=specialty))
            if page.providers:
                return self._providers_reply(
                    IntentType.LOCATION, responses.LOCATION_FOUND, language, page
                )
        return self._static(IntentType.LOCATION, responses.LOCATION, language)

    async def _accessibility(self, message, language):
        page = await self.search.search(
            SearchRequest(filters=SearchFilters(accessibility=True))
        )
        return self._providers_reply(
            IntentType.ACCESSIBILITY, responses.ACCESSIBLE_FOUND, language, page
        )

    async def _home_visit(self, message, language):
        page = await self.search.search(
            SearchRequest(filters=SearchFilters(home_visits=True))
        )
        return self._providers_reply(
            IntentType.HOME_VISIT, responses.HOME_VISIT_FOUND, language, page
        )
