"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ohla.config import settings
from ohla.database import create_db_and_tables, engine
from ohla.errors import register_exception_handlers
from ohla.utils.logging import setup_logging
from ohla.api import config, node, system

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    create_db_and_tables()

    from ohla.services.node_store import NodeProfileStore, seed_profile_from_settings
    seed_profile_from_settings(NodeProfileStore(engine), settings)

    yield

    engine.dispose()


app = FastAPI(
    title="Ohla",
    description="Bitcoin node connection profiles and live node status",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
    return response


register_exception_handlers(app)

# Mount routers
app.include_router(system.router)
app.include_router(config.router)
app.include_router(node.router)
