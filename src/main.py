from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.nearby import router as nearby_router
from src.adapters.config import env_bool
from src.domain.exceptions import FeedError

app = FastAPI(title="Nearby Trains")
app.include_router(nearby_router)


@app.exception_handler(FeedError)
@app.exception_handler(httpx.HTTPError)
async def feed_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """The upstream feed was unreachable or unusable; report a bad gateway."""

    logging.getLogger("uvicorn.error").warning(
        "Feed error: %s", exc, extra={"path": str(request.url.path)}
    )
    return JSONResponse(
        status_code=502, content={"detail": str(exc) or exc.__class__.__name__}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep 500s as JSON.

    A missing stops.txt and malformed numeric settings are operator errors
    whose message is worth showing; anything else stays opaque unless
    NEARBY_REVEAL_ERRORS is set.
    """

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    if env_bool("NEARBY_REVEAL_ERRORS") or isinstance(
        exc, (FileNotFoundError, ValueError)
    ):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
