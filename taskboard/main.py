from __future__ import annotations

import logging
from time import monotonic

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.trustedhost import TrustedHostMiddleware

from taskboard.config import settings
from taskboard.db import create_tables
from taskboard.errors import BoardError, Internal, Malformed
from taskboard.log import configure_logging
from taskboard.routers.boards import router as boards_router
from taskboard.routers.cards import router as cards_router
from taskboard.routers.checklists import router as checklists_router
from taskboard.routers.lists import router as lists_router
from taskboard.routers.users import router as users_router

configure_logging()
logger = logging.getLogger("taskboard")

app = FastAPI(title="Taskboard API", version="0.1.0")


def _error_body(exc: BoardError) -> dict:
  body: dict = {"detail": exc.message}
  if settings.debug and exc.dev is not None:
    body["dev"] = jsonable_encoder(exc.dev)
  return body


@app.exception_handler(BoardError)
async def _board_error_handler(_, exc: BoardError) -> JSONResponse:
  return JSONResponse(status_code=exc.status_code, content=_error_body(exc))


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(_, exc: RequestValidationError) -> JSONResponse:
  fields = [
    {"field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"), "message": err.get("msg", "")}
    for err in exc.errors()
  ]
  malformed = Malformed()
  return JSONResponse(status_code=malformed.status_code, content={"detail": malformed.message, "errors": fields})


@app.exception_handler(Exception)
async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
  logger.exception("unhandled error on %s %s", request.method, request.url.path)
  return JSONResponse(status_code=500, content=_error_body(Internal(dev=str(exc))))


app.add_middleware(
  CORSMiddleware,
  allow_origins=settings.cors_origin_list(),
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_host_list())

app.include_router(users_router)
app.include_router(boards_router)
app.include_router(lists_router)
app.include_router(cards_router)
app.include_router(checklists_router)


@app.middleware("http")
async def _request_log_middleware(request: Request, call_next):
  start = monotonic()
  response = await call_next(request)
  elapsed_ms = (monotonic() - start) * 1000.0
  logger.info("%s %s -> %s (%.1fms)", request.method, request.url.path, response.status_code, elapsed_ms)
  response.headers.setdefault("X-Content-Type-Options", "nosniff")
  response.headers.setdefault("X-Frame-Options", "DENY")
  response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
  return response


@app.get("/health")
async def health() -> dict:
  return {"ok": True}


@app.get("/version")
async def version() -> dict:
  return {"version": settings.app_version}


@app.on_event("startup")
async def _startup() -> None:
  if settings.is_test_db():
    return
  if not settings.app_secret or settings.app_secret.strip().lower() in {"dev-secret-change-me", "replace_with_strong_random_secret"}:
    raise RuntimeError("APP_SECRET is required and must not be a placeholder")
  if settings.auto_create_tables:
    await create_tables()
    logger.info("database tables created")
