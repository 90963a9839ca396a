from __future__ import annotations
import asyncio
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from reservoir.config import settings
from reservoir.db import make_engine, make_sessionmaker
from reservoir.logging_setup import configure_logging
from reservoir.routes.system import router as system_router
from reservoir.routes.reservoir import router as reservoir_router
from reservoir.routes.moderation import router as moderation_router
from reservoir.services.reservoir import Reservoir
from reservoir.services.storage import MinioBlobStore
from reservoir.services.store import SqlSubmissionStore
import structlog

configure_logging(settings.log_level)
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one store handle and one blob handle for the whole process
    log.info("startup", env=settings.environment, version=settings.app_version, git_sha=settings.git_sha)
    engine = make_engine(settings.database_url)
    blobs = MinioBlobStore.from_endpoint(
        settings.s3_endpoint, settings.s3_access_key, settings.s3_secret_key, settings.s3_bucket_photos
    )
    await asyncio.to_thread(blobs.ensure_bucket)
    app.state.reservoir = Reservoir(
        store=SqlSubmissionStore(make_sessionmaker(engine)),
        blobs=blobs,
        goal_litres=settings.goal_litres,
        photo_prefix=settings.photo_prefix,
        cleanup_orphan_photos=settings.cleanup_orphan_photos,
    )
    await app.state.reservoir.refresh()
    yield
    # Shutdown
    await engine.dispose()
    log.info("shutdown")

app = FastAPI(
    title=f"{settings.app_display_name} API",
    version=settings.app_version,
    lifespan=lifespan,
    description=f"{settings.app_display_name} API: log a water butt, watch the reservoir fill",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(system_router)
app.include_router(reservoir_router)
app.include_router(moderation_router)

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    structlog.contextvars.bind_contextvars(request_id=rid)
    response: Response = await call_next(request)
    response.headers["X-Request-ID"] = rid
    structlog.contextvars.clear_contextvars()
    return response
