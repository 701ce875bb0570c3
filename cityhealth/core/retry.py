import asyncio
import logging

from cityhealth.core.config import settings
from cityhealth.core.errors import CityHealthError

logger = logging.getLogger(__name__)


async def with_retry(
    operation,
    max_attempts: int = None,
    initial_delay: float = None,
    max_delay: float = None,
    backoff: float = None,
    sleep=asyncio.sleep,
):
    """
    Await ``operation()`` until it succeeds or ``max_attempts`` is reached.

    Only errors flagged ``retryable`` are retried; anything else (validation,
    not found, programming errors) is raised on the first failure. The delay
    between attempts grows by ``backoff`` and is capped at ``max_delay``.
    """
    max_attempts = max_attempts or settings.RETRY_MAX_ATTEMPTS
    delay = settings.RETRY_INITIAL_DELAY if initial_delay is None else initial_delay
    max_delay = settings.RETRY_MAX_DELAY if max_delay is None else max_delay
    backoff = backoff or settings.RETRY_BACKOFF

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except CityHealthError as e:
            if not e.retryable or attempt == max_attempts:
                raise
            logger.warning(
                f"Retry attempt {attempt}/{max_attempts - 1} after {delay:.1f}s: {e}"
            )
            await sleep(delay)
            delay = min(delay * backoff, max_delay)
