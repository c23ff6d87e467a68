from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .ad import DirectoryError
from .bootstrap import initialize_application
from .routers.auth import router as auth_router

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    initialize_application()
    yield


app = FastAPI(title="AD Auth", lifespan=lifespan)
app.include_router(auth_router)


@app.exception_handler(DirectoryError)
async def directory_error_handler(request: Request, exc: DirectoryError):
    log.error("Directory error on %s: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Directory unavailable"},
    )


@app.get("/health")
def health():
    return {"status": "ok"}
