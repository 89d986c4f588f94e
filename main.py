import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from adapters.entry.http.admin_router import router as admin_router
from adapters.entry.http.market_router import router as market_router
from config.settings import settings
from workers.market_supervisor import MarketSupervisor


def _setup_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


supervisor = MarketSupervisor()


@asynccontextmanager
async def lifespan(app: FastAPI):
    _setup_logging()
    logging.getLogger(__name__).info("Starting api-market-views (lifespan startup)...")

    supervisor.start()
    app.state.market_views = supervisor.market_views
    app.state.ingest = supervisor.ingest

    try:
        yield
    finally:
        logging.getLogger(__name__).info("Shutting down api-market-views (lifespan shutdown)...")
        supervisor.stop()


app = FastAPI(title="api-market-views", version="0.1.0", lifespan=lifespan)
app.include_router(market_router)
app.include_router(admin_router)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
