# carrier_api/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from carrier_api.config import Settings, get_settings
from carrier_api.fmcsa_client import FmcsaClient
from carrier_api.routes.fmcsa_verification import router as fmcsa_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("carrier_api").setLevel(level)


def create_app(settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Build the API. `transport` swaps the FMCSA HTTP transport (tests pass an
    httpx.MockTransport so nothing leaves the process).
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    fmcsa_client = FmcsaClient.from_settings(settings, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Carrier Verification API running on port %s", settings.port)
        logger.info("Test endpoint: http://localhost:%s/verify-carrier?mc_number=317740", settings.port)
        yield
        await fmcsa_client.aclose()
        logger.info("FMCSA client closed")

    app = FastAPI(title="Carrier Verification API", lifespan=lifespan)
    app.state.settings = settings
    app.state.fmcsa_client = fmcsa_client

    # Public lookup endpoint, any origin may call it
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(fmcsa_router)

    @app.get("/")
    def root():
        return {
            "message": "Carrier Verification API is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        # Starlette re-raises after this response is sent and uvicorn logs the traceback,
        # so only the one-line summary is logged here.
        logger.error("Server Error: %s: %s", type(exc).__name__, exc)
        detail = str(exc) if settings.is_development else "Something went wrong"
        return JSONResponse(status_code=500, content={"error": "Internal server error", "message": detail})

    return app


app = create_app()


def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
