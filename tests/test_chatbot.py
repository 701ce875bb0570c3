import pytest
from unittest.mock import AsyncMock

from cityhealth.chatbot import responses
from cityhealth.chatbot.bot import Chatbot
from cityhealth.models import IntentType, SearchFilters
from cityhealth.search.service import SearchService


@pytest.fixture
def bot(search_service):
    return Chatbot(search_service, max_providers=5, default_language="en")


def provider_ids(reply):
    return [p.id for p in reply.providers]


@pytest.mark.asyncio
async def test_find_provider_with_specialty(bot):
    reply = await bot.reply("I need a heart doctor", "en")

    assert reply.intent == IntentType.FIND_PROVIDER
    assert provider_ids(reply) == ["p1"]
    assert reply.text == "I found 1 healthcare providers for you:"
    assert reply.action == "showProviders"
    assert reply.error is False


@pytest.mark.asyncio
async def test_find_provider_without_results(bot):
    reply = await bot.reply("find a dentist", "en")

    assert reply.intent == IntentType.FIND_PROVIDER
    assert reply.text == responses.NO_PROVIDERS["en"]
    assert reply.providers is None
    assert [q.action for q in reply.suggestions] == [
        "findDoctor",
        "emergency",
        "accessibility",
        "homeVisit",
    ]


@pytest.mark.asyncio
async def test_emergency_lists_24_7_providers(bot, store):
    reply = await bot.reply("emergency please", "en")

    assert reply.intent == IntentType.EMERGENCY
    assert provider_ids(reply) == ["p3", "p4"]
    assert reply.text.startswith("I found 2 emergency healthcare providers")
    assert ("available24_7", True) in store.calls[-1]["filters"]


@pytest.mark.asyncio
async def test_accessibility_and_home_visit(bot):
    accessible = await bot.reply("wheelchair access", "en")
    assert accessible.intent == IntentType.ACCESSIBILITY
    assert provider_ids(accessible) == ["p1", "p3"]

    home = await bot.reply("home visit please", "en")
    assert home.intent == IntentType.HOME_VISIT
    assert provider_ids(home) == ["p7", "p6"]
    assert home.text == "I found 2 healthcare providers offering home visits:"


@pytest.mark.asyncio
async def test_hours_offers_only_emergency_quick_reply(bot, store):
    reply = await bot.reply("what time do you open", "en")

    assert reply.intent == IntentType.HOURS
    assert reply.text == responses.HOURS["en"]
    assert [q.action for q in reply.suggestions] == ["emergency"]
    assert store.calls == []


@pytest.mark.asyncio
async def test_location_with_specialty_searches(bot):
    reply = await bot.reply("address and directions for a heart specialist", "en")

    assert reply.intent == IntentType.LOCATION
    assert provider_ids(reply) == ["p1"]
    assert reply.action == "showProviders"


@pytest.mark.asyncio
async def test_location_without_specialty_is_static(bot, store):
    reply = await bot.reply("what is your address", "en")

    assert reply.intent == IntentType.LOCATION
    assert reply.text == responses.LOCATION["en"]
    assert reply.providers is None
    assert store.calls == []


@pytest.mark.asyncio
async def test_static_replies_are_localized(bot):
    greeting = await bot.reply("مرحبا", "ar")
    assert greeting.intent == IntentType.GREETING
    assert greeting.text == responses.GREETING["ar"]
    assert greeting.suggestions[0].text == "ابحث عن طبيب"

    thanks = await bot.reply("merci beaucoup", "fr")
    assert thanks.intent == IntentType.THANKS
    assert thanks.text == responses.THANKS["fr"]


@pytest.mark.asyncio
async def test_unknown_message(bot):
    reply = await bot.reply("qqq")

    assert reply.intent == IntentType.UNKNOWN
    assert reply.text == responses.UNKNOWN["en"]
    assert len(reply.suggestions) == 4


@pytest.mark.asyncio
async def test_provider_list_is_truncated(search_service):
    bot = Chatbot(search_service, max_providers=1)

    reply = await bot.reply("emergency please", "en")

    assert provider_ids(reply) == ["p3"]
    # Count reflects all matches, not the truncated list
    assert reply.text.startswith("I found 2 ")


@pytest.mark.asyncio
async def test_search_failure_becomes_apology(bot, store):
    store.fail_when = lambda filters: True

    reply = await bot.reply("emergency please", "fr")

    assert reply.error is True
    assert reply.intent == IntentType.EMERGENCY
    assert reply.text == responses.APOLOGY["fr"]


@pytest.mark.asyncio
async def test_unexpected_error_becomes_apology():
    search = AsyncMock()
    search.search.side_effect = RuntimeError("boom")
    bot = Chatbot(search)

    reply = await bot.reply("I need a heart doctor", "en")

    assert reply.error is True
    assert reply.text == responses.APOLOGY["en"]


@pytest.mark.asyncio
async def test_suggest_providers(bot, store):
    providers = await bot.suggest_providers(
        "clinic", "Sidi Bel Abbès", SearchFilters(accessibility=True)
    )

    assert [p.id for p in providers] == ["p1"]
    assert store.calls[-1]["filters"] == [
        ("verified", True),
        ("city", "Sidi Bel Abbès"),
        ("accessibility", True),
    ]


@pytest.mark.asyncio
async def test_suggest_providers_swallows_store_errors(store):
    store.fail_when = lambda filters: True
    bot = Chatbot(SearchService(store))

    assert await bot.suggest_providers("cardiology") == []

