import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from atsmatch.core.config import settings
from atsmatch.services.scoring_service import ExtractionContext

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    context = ExtractionContext.from_settings(settings)
    context.start()
    app.state.extraction_context = context

    stop_event = asyncio.Event()

    async def periodic_purge() -> None:
        while not stop_event.is_set():
            try:
                purged = context.cache.purge_expired()
                if purged:
                    logger.info("remote_cache_purge purged=%s", purged)
            except Exception as exc:  # pragma: no cover
                logger.warning("remote_cache_purge_failed: %s", exc)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=settings.remote_cache_ttl_s)
            except asyncio.TimeoutError:
                continue

    purge_task = asyncio.create_task(periodic_purge())
    yield
    stop_event.set()
    if not purge_task.done():
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
    await context.aclose()
