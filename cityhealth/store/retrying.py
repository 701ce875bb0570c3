from functools import partial

from cityhealth.core.retry import with_retry


class RetryingStore:
    """Wraps any document store so each query goes through ``with_retry``."""

    def __init__(self, store, **policy):
        self.store = store
        self.policy = policy

    async def query(self, collection, filters, order_by, limit, start_after=None):
        operation = partial(
            self.store.query, collection, filters, order_by, limit, start_after
        )
        return await with_retry(operation, **self.policy)

    async def close(self):
        await self.store.close()
