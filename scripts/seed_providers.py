import json
import logging
import os
import sys

from elasticsearch import Elasticsearch, helpers

# Add the project root directory to the python path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cityhealth.core.config import settings
from cityhealth.core.log import setup_logging
from cityhealth.models import Provider
from cityhealth.store.base import PROVIDERS

# Configuration from centralized settings
ES_HOST = settings.ES_HOST
INDEX_NAME = f"{settings.ES_INDEX_PREFIX}{PROVIDERS}"
SEED_FILE = settings.PROVIDERS_SEED_PATH
BATCH_SIZE = settings.INGEST_BATCH_SIZE

logger = logging.getLogger(__name__)

MAPPINGS = {
    "properties": {
        "id": {"type": "keyword"},
        "name": {"type": "text", "fields": {"raw": {"type": "keyword"}}},
        "nameAr": {"type": "text"},
        "nameFr": {"type": "text"},
        "specialty": {"type": "text"},
        "specialtyAr": {"type": "text"},
        "specialtyFr": {"type": "text"},
        "type": {"type": "keyword"},
        "city": {"type": "keyword"},
        "address": {
            "properties": {
                "street": {"type": "text"},
                "city": {"type": "keyword"},
            }
        },
        "location": {"type": "geo_point"},
        "phone": {"type": "keyword"},
        "accessibility": {"type": "boolean"},
        "homeVisits": {"type": "boolean"},
        "available24_7": {"type": "boolean"},
        "verified": {"type": "boolean"},
        "claimed": {"type": "boolean"},
        "rating": {"type": "float"},
        "viewCount": {"type": "integer"},
        "images": {"type": "keyword"},
        "createdAt": {"type": "date"},
        "updatedAt": {"type": "date"},
    }
}


class ProviderImporter:
    """Validates provider records and bulk-indexes them, one batch at a time."""

    def __init__(self):
        self.buffer = []
        self.count = 0
        self.skipped = 0
        self.es = Elasticsearch(ES_HOST)
        self.create_index()

    def create_index(self):
        if not self.es.indices.exists(index=INDEX_NAME):
            self.es.indices.create(index=INDEX_NAME, mappings=MAPPINGS)
            logger.info(f"Created index {INDEX_NAME}")

    def add(self, record: dict):
        try:
            provider = Provider.model_validate(record)
        except ValueError as e:
            self.skipped += 1
            logger.warning(f"Skipping invalid provider {record.get('id')}: {e}")
            return

        source = provider.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"distance_km", "relevance_score"},
        )
        # The city filter reads the top-level field
        if not source["city"]:
            source["city"] = provider.address.city

        self.buffer.append({"_index": INDEX_NAME, "_id": provider.id, "_source": source})
        self.count += 1

        if len(self.buffer) >= BATCH_SIZE:
            self.flush()

    def flush(self):
        if self.buffer:
            success, _ = helpers.bulk(self.es, self.buffer)
            logger.info(f"Indexed {success} documents")
            self.buffer = []


def main():
    setup_logging()
    if not os.path.exists(SEED_FILE):
        logger.error(f"File {SEED_FILE} not found.")
        logger.info("Expected a JSON array of provider documents (camelCase keys).")
        return

    with open(SEED_FILE, encoding="utf-8") as f:
        records = json.load(f)

    importer = ProviderImporter()
    logger.info(f"Importing {len(records)} providers into {INDEX_NAME}...")
    for record in records:
        importer.add(record)
    importer.flush()
    logger.info(f"Import complete: {importer.count} indexed, {importer.skipped} skipped.")


if __name__ == "__main__":
    main()
