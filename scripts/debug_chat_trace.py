import asyncio
import json
import os
import sys

# Add the project root directory to the python path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cityhealth.core.config import settings
from cityhealth.models import SearchRequest
from cityhealth.services import build_services


class TraceOutput:
    """Echoes everything printed to the console and the chat trace log."""

    def __init__(self, console, trace_file):
        self.console = console
        self.trace_file = trace_file

    def write(self, text):
        self.console.write(text)
        self.trace_file.write(text)

    def flush(self):
        self.console.flush()
        self.trace_file.flush()


async def trace_message(services, message: str, language: str):
    chatbot = services.chatbot
    print(f"\n{'='*60}", flush=True)
    print(f"MESSAGE [{language}]: {message}", flush=True)
    print(f"{'='*60}", flush=True)

    # 1. Classification
    print("\n--- [Phase 1] Intent Scores ---", flush=True)
    text = message.lower().strip()
    for intent in chatbot.classifier.all_intents():
        keywords = chatbot.classifier.keywords_for(intent, language)
        hits = [kw for kw in keywords if kw.lower() in text]
        print(
            f"  {intent:<14} {len(hits)}/{len(keywords)} = {len(hits) / len(keywords):.3f} {hits}",
            flush=True,
        )
    intent = chatbot.classify(message, language)
    specialty = chatbot.classifier.extract_specialty(message, language)
    print(f"Winner: {intent.type.value} ({intent.confidence:.3f})", flush=True)
    print(f"Specialty: {specialty}", flush=True)

    # 2. Search (what a find-provider reply would see)
    print("\n--- [Phase 2] Search ---", flush=True)
    page = await services.search.search(SearchRequest(query=specialty or ""))
    print(f"Total: {page.total} in {page.query_time_ms:.1f}ms", flush=True)
    for i, p in enumerate(page.providers[:5]):
        print(
            f"[{i+1}] ID: {p.id} | {p.name} ({p.type.value}, rating {p.rating}, score {p.relevance_score})",
            flush=True,
        )

    # 3. Reply
    print("\n--- [Phase 3] Reply ---", flush=True)
    reply = await chatbot.reply(message, language)
    print(
        json.dumps(
            reply.model_dump(mode="json", by_alias=True, exclude_none=True),
            indent=2,
            ensure_ascii=False,
        ),
        flush=True,
    )


async def main():
    os.makedirs(os.path.dirname(settings.TRACE_LOG_PATH) or ".", exist_ok=True)
    trace_file = open(settings.TRACE_LOG_PATH, "a", encoding="utf-8")
    console = sys.stdout
    sys.stdout = TraceOutput(console, trace_file)

    services = build_services()
    try:
        await trace_message(services, "I need a heart doctor now", "en")
        await trace_message(services, "مرحبا", "ar")
        await trace_message(services, "Je cherche une clinique accessible", "fr")
    finally:
        await services.close()
        sys.stdout = console
        trace_file.close()


if __name__ == "__main__":
    asyncio.run(main())
