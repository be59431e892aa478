import logging
import os
import time
from contextlib import asynccontextmanager

import asyncpg
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import frontend
from core.db import Database
from core.log import configure_logging
from core.schema import create_schema
from fellows import router as fellows_router
from posts import router as posts_router

configure_logging()
logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process, handed to the routes through app.state.
    db = Database.from_env()
    await db.connect()
    app.state.db = db
    if _env_flag("DB_CREATE_SCHEMA"):
        await create_schema(db)
        logger.info("schema_created")
    try:
        yield
    finally:
        app.state.db = None
        await db.close()


app = FastAPI(title="Fellows Tracker API", lifespan=lifespan)

# Allow the local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request method=%s path=%s status=%s duration_ms=%.1f",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


@app.exception_handler(asyncpg.PostgresError)
async def database_error_handler(request: Request, exc: asyncpg.PostgresError) -> JSONResponse:
    logger.exception("database_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Database error."})


app.include_router(fellows_router.router, prefix="/api", tags=["fellows"])
app.include_router(posts_router.router, prefix="/api", tags=["posts"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


# Registered last: catches every GET path the API did not claim.
app.include_router(frontend.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8080")),
    )
