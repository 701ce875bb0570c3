import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Logging
    LOG_DIR = os.getenv("LOG_DIR", "logs")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    APP_LOG_FILENAME = os.getenv("APP_LOG_FILENAME", "cityhealth.log")
    APP_LOG_PATH = os.path.join(LOG_DIR, APP_LOG_FILENAME)
    TRACE_LOG_FILENAME = os.getenv("TRACE_LOG_FILENAME", "chat_trace.log")
    TRACE_LOG_PATH = os.path.join(LOG_DIR, TRACE_LOG_FILENAME)

    # Elasticsearch (document store)
    ES_HOST = os.getenv("ES_HOST", "http://localhost:9200")
    ES_INDEX_PREFIX = os.getenv("ES_INDEX_PREFIX", "cityhealth_")
    ES_TIEBREAK_FIELD = os.getenv("ES_TIEBREAK_FIELD", "id")

    # Search
    SEARCH_PAGE_SIZE = int(os.getenv("SEARCH_PAGE_SIZE", "20"))
    SEARCH_CACHE_TTL_SECONDS = float(os.getenv("SEARCH_CACHE_TTL_SECONDS", "300"))
    SEARCH_CACHE_MAX_ENTRIES = int(os.getenv("SEARCH_CACHE_MAX_ENTRIES", "50"))
    PAGINATION_MAX_CURSORS = int(os.getenv("PAGINATION_MAX_CURSORS", "20"))
    EMERGENCY_LIMIT = int(os.getenv("EMERGENCY_LIMIT", "10"))
    POPULAR_LIMIT = int(os.getenv("POPULAR_LIMIT", "10"))
    SCAN_BATCH_SIZE = int(os.getenv("SCAN_BATCH_SIZE", "500"))
    DEFAULT_CITY = os.getenv("DEFAULT_CITY", "Sidi Bel Abbès")

    # Suggestions & device-local state
    SUGGESTIONS_LIMIT = int(os.getenv("SUGGESTIONS_LIMIT", "10"))
    HISTORY_MAX_ENTRIES = int(os.getenv("HISTORY_MAX_ENTRIES", "10"))
    INTERACTIONS_MAX_ENTRIES = int(os.getenv("INTERACTIONS_MAX_ENTRIES", "10"))
    LOCAL_STORAGE_PATH = os.getenv("LOCAL_STORAGE_PATH", "data/local_storage.json")

    # Retry wrapper around store calls
    RETRY_MAX_ATTEMPTS = int(os.getenv("RETRY_MAX_ATTEMPTS", "3"))
    RETRY_INITIAL_DELAY = float(os.getenv("RETRY_INITIAL_DELAY", "1.0"))
    RETRY_MAX_DELAY = float(os.getenv("RETRY_MAX_DELAY", "10.0"))
    RETRY_BACKOFF = float(os.getenv("RETRY_BACKOFF", "2.0"))

    # Chatbot
    CHAT_MAX_PROVIDERS = int(os.getenv("CHAT_MAX_PROVIDERS", "5"))
    DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en")

    # Application
    APP_PORT = int(os.getenv("APP_PORT", "8000"))
    SERVICE_HOST = os.getenv("SERVICE_HOST", "127.0.0.1")

    # Ingestion
    INGEST_BATCH_SIZE = int(os.getenv("INGEST_BATCH_SIZE", "100"))
    PROVIDERS_SEED_PATH = os.getenv("PROVIDERS_SEED_PATH", "data/providers.json")


settings = Settings()
