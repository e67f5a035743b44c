from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .config import configure_logging, get_settings
from .errors import ParseError, SendError
from .pipeline import CommandHandler
from .sms import InboundEvent
from .ubidots_client import UbidotsClient
from .vonage_client import VonageClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: runs once before the app starts serving requests
    configure_logging()
    yield


app = FastAPI(title="sms-ubidots", version="0.1.0", lifespan=lifespan)


# --- Handler dependency ---


def get_handler() -> Generator[CommandHandler, None, None]:
    settings = get_settings()
    lookup = UbidotsClient(settings)
    sender = VonageClient(settings)
    try:
        yield CommandHandler(settings=settings, lookup=lookup, sender=sender)
    finally:
        lookup.close()
        sender.close()


def _to_event(data: dict[str, Any]) -> InboundEvent:
    try:
        return InboundEvent.model_validate(data)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422, detail=exc.errors(include_url=False, include_context=False)
        ) from exc


async def _read_body(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError as exc:
            raise HTTPException(status_code=422, detail="Invalid JSON body") from exc
        if not isinstance(data, dict):
            raise HTTPException(status_code=422, detail="Expected a JSON object")
        return data
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


# --- Error mapping ---


@app.exception_handler(ParseError)
async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": str(exc)})


@app.exception_handler(SendError)
async def send_error_handler(request: Request, exc: SendError) -> JSONResponse:
    logger.error("Reply could not be sent: %s", exc)
    return JSONResponse(status_code=502, content={"message": str(exc)})


# --- Routes ---


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/webhooks/inbound")
def inbound_get(request: Request, handler: CommandHandler = Depends(get_handler)) -> Any:
    """
    Vonage inbound-SMS webhook, GET flavour (fields in the query string).
    """
    event = _to_event(dict(request.query_params))
    return handler.handle(event)


@app.post("/webhooks/inbound")
async def inbound_post(request: Request, handler: CommandHandler = Depends(get_handler)) -> Any:
    """
    Vonage inbound-SMS webhook, POST flavour (JSON or form-encoded body).

    Returns the delivery receipt unchanged, `{"message": ...}` when a lookup
    failed, or Vonage's response to our reply.
    """
    event = _to_event(await _read_body(request))
    # The handler does blocking HTTP calls; keep them off the event loop.
    return await run_in_threadpool(handler.handle, event)


@app.post("/webhooks/status")
async def status_post(request: Request, handler: CommandHandler = Depends(get_handler)) -> Any:
    """Delivery receipts for the replies we sent."""
    event = _to_event(await _read_body(request))
    return await run_in_threadpool(handler.handle, event)
