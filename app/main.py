"""FastAPI application entrypoint."""

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import AsyncIterator

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI  # noqa: E402

from app.adapters.inbound.http.routes import router  # noqa: E402
from app.infrastructure.config.settings import settings  # noqa: E402
from app.infrastructure.logging.logger import logger  # noqa: E402
from app.infrastructure.wiring.container import container  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start the session monitor with the application and stop it on shutdown."""
    monitor_task = None
    if settings.session_monitor_enabled:
        monitor_task = asyncio.create_task(
            container.session_monitor.run(settings.session_monitor_interval_seconds)
        )
        logger.info(
            f"Session monitor started (interval={settings.session_monitor_interval_seconds}s)"
        )

    yield

    if monitor_task is not None:
        monitor_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await monitor_task
        logger.info("Session monitor stopped")

    await container.dedup_store.close()


app = FastAPI(
    title="El Manicero Lucas WhatsApp Bot",
    description="WhatsApp commerce bot: catalog search, cart and order capture",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(router)
