"""
NoteKeeper — Note Route Handlers
==================================

What:  Handles every request on /note: one handler per operation plus the
       dispatcher that picks a handler by HTTP method.
How:   Handlers check the method, extract the `id` query parameter and the
       JSON body, delegate to NoteService and encode the response.
       Failures are raised as NoteKeeperError subclasses and rendered as
       plain-text responses by the global exception handlers in main.py.

Route Table:
    POST   /note            {name, text}  → 201 {id}
    GET    /note?id=<id>                  → 200 note
    PUT    /note?id=<id>    {name, text}  → 200 note
    DELETE /note?id=<id>                  → 204 (empty)
    any other method                      → 405
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from notekeeper.config import settings
from notekeeper.exceptions import (
    BadRequestError,
    EncodingError,
    MethodNotAllowedError,
    RequestTimeoutError,
)
from notekeeper.schemas.note import NoteCreatedResponse, NotePayload, NoteResponse
from notekeeper.services.note_service import NoteService, get_note_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(tags=["Notes"])

Handler = Callable[[Request, NoteService], Awaitable[Response]]

# Methods the /note route is registered for. Anything without a handler in
# HANDLERS is answered with 405 by the dispatcher itself.
ROUTED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


# ══════════════════════════════════════════════════════════════════════════
# Request / Response Helpers
# ══════════════════════════════════════════════════════════════════════════


def _require_method(request: Request, method: str) -> None:
    if request.method != method:
        raise MethodNotAllowedError(request.method, allowed=(method,))


def _require_id(request: Request) -> str:
    """Return the `id` query parameter; absent and empty are both missing."""
    note_id = request.query_params.get("id", "")
    if not note_id:
        raise BadRequestError("missing id parameter", field="id")
    return note_id


async def _read_body(request: Request) -> bytes:
    try:
        return await asyncio.wait_for(request.body(), timeout=settings.read_timeout)
    except asyncio.TimeoutError:
        raise RequestTimeoutError(settings.read_timeout)


async def _decode_payload(request: Request) -> NotePayload:
    body = await _read_body(request)
    try:
        return NotePayload.model_validate_json(body)
    except ValidationError as e:
        logger.debug("Rejected note payload: %s", e)
        raise BadRequestError(
            "failed to unmarshal",
            field="body",
            context={"errors": e.error_count()},
        )


def _json_response(model: BaseModel, status_code: int = 200) -> Response:
    """
    Encode a response model as JSON.

    Runs after the store has already been changed, so a failure here is
    logged and reported as 500 but nothing is undone.
    """
    try:
        content = model.model_dump_json()
    except (PydanticSerializationError, ValueError) as e:
        logger.error("Failed to encode %s: %s", type(model).__name__, e)
        raise EncodingError(context={"model": type(model).__name__})
    return Response(content=content, status_code=status_code, media_type="application/json")


# ══════════════════════════════════════════════════════════════════════════
# Handlers
# ══════════════════════════════════════════════════════════════════════════


async def create_note(request: Request, service: NoteService) -> Response:
    """POST /note: store a new note and return its id."""
    _require_method(request, "POST")
    payload = await _decode_payload(request)
    note = service.create_note(payload)
    return _json_response(NoteCreatedResponse(id=note.id), status_code=201)


async def read_note(request: Request, service: NoteService) -> Response:
    """GET /note?id=: return the full note."""
    _require_method(request, "GET")
    note_id = _require_id(request)
    note = service.get_note(note_id)
    return _json_response(NoteResponse.model_validate(note))


async def update_note(request: Request, service: NoteService) -> Response:
    """
    PUT /note?id=: overwrite name and text.

    Checked in order: id present, body decodable, note exists.
    """
    _require_method(request, "PUT")
    note_id = _require_id(request)
    payload = await _decode_payload(request)
    note = service.update_note(note_id, payload)
    return _json_response(NoteResponse.model_validate(note))


async def delete_note(request: Request, service: NoteService) -> Response:
    """DELETE /note?id=: remove the note; empty 204 on success."""
    _require_method(request, "DELETE")
    note_id = _require_id(request)
    service.delete_note(note_id)
    return Response(status_code=204)


HANDLERS: Dict[str, Handler] = {
    "POST": create_note,
    "GET": read_note,
    "PUT": update_note,
    "DELETE": delete_note,
}


# ══════════════════════════════════════════════════════════════════════════
# Dispatcher
# ══════════════════════════════════════════════════════════════════════════


@router.api_route(
    "/note",
    methods=ROUTED_METHODS,
    response_model=None,
    responses={
        200: {"description": "Full note", "model": NoteResponse},
        201: {"description": "Note created", "model": NoteCreatedResponse},
        204: {"description": "Note deleted"},
        400: {"description": "Missing id parameter or malformed body"},
        404: {"description": "Note not found"},
        405: {"description": "Method not allowed"},
    },
    summary="Create, read, update or delete a note",
)
async def dispatch_note(
    request: Request,
    service: NoteService = Depends(get_note_service),
) -> Response:
    """Forward the request to the handler registered for its method."""
    handler = HANDLERS.get(request.method)
    if handler is None:
        raise MethodNotAllowedError(request.method, allowed=tuple(HANDLERS))
    return await handler(request, service)
