"""
FastAPI server for the prayer tracker. Tracker routes are mounted under /api
from prayer_tracker.tracker.api (get_router(config)).
Docs: http://<host>:<port>/docs
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from prayer_tracker.tracker.api import get_router
from prayer_tracker.tracker.errors import InvalidArgument

logger = logging.getLogger(__name__)


def create_app(config: Any) -> FastAPI:
    """Create FastAPI app with routes that read the given Config."""
    app = FastAPI(title="Prayer Tracker API", description="Daily prayer completion and monthly calendar")

    @app.exception_handler(InvalidArgument)
    async def invalid_argument_handler(request: Request, exc: InvalidArgument) -> JSONResponse:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(get_router(config), prefix="/api")
    return app


def run_api_server(config: Any) -> None:
    """
    Serve the API in the foreground with uvicorn.
    Reads api.host (default 127.0.0.1) and api.port (default 8765) from config.
    """
    import uvicorn

    api_config = config.get_section("api")
    host = api_config.get("host", "127.0.0.1")
    port = int(api_config.get("port", 8765))
    fastapi_app = create_app(config)
    logger.info(f"API server listening at http://{host}:{port} (docs at /docs)")
    uvicorn.run(fastapi_app, host=host, port=port, log_config=None)
