"""
Schema Crawler — catalog introspection and model generation service.
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import deps
from api import cache, generate, health, metadata
from config import settings

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("schema_crawler")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Schema Crawler starting up…")
    yield
    deps.shutdown()
    logger.info("Schema Crawler shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="Schema Crawler",
    description="Crawls database catalog metadata and generates typed model classes.",
    version=health.APP_VERSION,
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router,   prefix="/api")
app.include_router(metadata.router, prefix="/api")
app.include_router(generate.router, prefix="/api")
app.include_router(cache.router,    prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT)
