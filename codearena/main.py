import os
import time
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from codearena.config import Config, logger
from codearena.data.repositories import init_db, redis_client
from codearena.errors import register_exception_handlers
from codearena.presentation.routes import (
    auth_router,
    dashboard_router,
    judge_router,
    problem_router,
    submission_router,
)

API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}"

http_logger = logger.getChild("http")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request with a generated id, echoed back in ``X-Request-ID``."""

    async def dispatch(self, request: Request, call_next):
        request_id = uuid.uuid4().hex
        request.state.request_id = request_id
        route = f"{request.method} {request.url.path}"
        http_logger.info(f"[{request_id}] {route} started")

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            http_logger.error(
                f"[{request_id}] {route} failed after "
                f"{time.perf_counter() - started:.4f}s: {str(e)}"
            )
            raise

        response.headers["X-Request-ID"] = request_id
        http_logger.info(
            f"[{request_id}] {route} -> {response.status_code} "
            f"in {time.perf_counter() - started:.4f}s"
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    if os.environ.get("TESTING") == "True":
        logger.info("Test mode: skipping table creation")
    else:
        await init_db()
        logger.info("Database tables are ready")
    yield
    await redis_client.close()
    logger.info("Shutdown complete")


app = FastAPI(
    title="CodeArena API",
    description="Coding practice platform: problems, judged submissions, progress dashboard and leaderboard",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

for router in (auth_router, problem_router, submission_router, dashboard_router, judge_router):
    app.include_router(router, prefix=API_PREFIX)


@app.get("/health", tags=["health"])
async def health():
    return {"status": "healthy", "service": "codearena", "version": API_VERSION}


if __name__ == "__main__":
    uvicorn.run(app, host=Config.API_SERVER_HOST, port=Config.API_SERVER_PORT)
