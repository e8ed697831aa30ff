import asyncio
import contextlib
from contextlib import asynccontextmanager

from fastapi import FastAPI

from salon_calendar.api.v1.calendar import router as calendar_router
from salon_calendar.api.v1.session import router as session_router
from salon_calendar.api.webhooks import router as webhooks_router
from salon_calendar.core.config import settings
from salon_calendar.core.log_setup import configure_logging
from salon_calendar.wiring.dependencies import get_calendar_view, get_realtime_bridge, shutdown

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await get_calendar_view().start()
    subscription = asyncio.create_task(
        get_realtime_bridge().maintain_subscription(
            retry_seconds=settings.REALTIME_RETRY_SECONDS,
            renew_seconds=settings.REALTIME_RENEW_SECONDS,
        )
    )
    yield
    subscription.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await subscription
    await shutdown()


app = FastAPI(title="Salon Admin Calendar", version="1.0.0", lifespan=lifespan)

app.include_router(webhooks_router, tags=["webhooks"])
app.include_router(calendar_router, prefix="/api/v1", tags=["calendar"])
app.include_router(session_router, prefix="/api/v1", tags=["session"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
