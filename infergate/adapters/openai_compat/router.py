"""OpenAI-compatible routes."""

from __future__ import annotations

import asyncio
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from infergate.adapters.openai_compat.mapper import (
    ALLOWED_METHOD,
    error_text_response,
    parse_chat_request,
    render_chat_response,
)
from infergate.config.settings import settings
from infergate.core.correlation import resolve_request_id
from infergate.core.errors import ForwardError, MalformedPayload, MethodNotAllowed
from infergate.core.responders import Responder, select_responder
from infergate.observability.logging import log_completion
from infergate.util.logger import logger


router = APIRouter()
_ROUTE = "/v1/chat/completions"
# 非 POST 也要进入处理函数，由解析器返回 405
_ACCEPTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
_responder_lock: asyncio.Lock | None = None


async def get_responder(request: Request) -> Responder:
    """Return the app's responder, selecting it once if the startup hook did not run."""

    global _responder_lock
    state = request.app.state
    responder = getattr(state, "responder", None)
    if responder is not None:
        return responder
    if _responder_lock is None:
        _responder_lock = asyncio.Lock()
    async with _responder_lock:
        responder = getattr(state, "responder", None)
        if responder is None:
            responder = select_responder(settings)
            state.responder = responder
    return responder


@router.api_route("/chat/completions", methods=_ACCEPTED_METHODS)
async def chat_completions(request: Request, responder: Responder = Depends(get_responder)) -> Response:
    started = time.perf_counter()
    request_id = resolve_request_id(request.headers)

    try:
        req = await parse_chat_request(request)
    except MethodNotAllowed as exc:
        logger.info("reject method request_id=%s method=%s", request_id, request.method)
        log_completion(request_id=request_id, route=_ROUTE, mode=responder.mode, status=exc.status_code, started=started)
        return error_text_response(exc.status_code, str(exc), request_id, headers={"Allow": ALLOWED_METHOD})
    except MalformedPayload as exc:
        logger.info("reject payload request_id=%s error=%s", request_id, exc)
        log_completion(request_id=request_id, route=_ROUTE, mode=responder.mode, status=exc.status_code, started=started)
        return error_text_response(exc.status_code, str(exc), request_id)

    logger.debug(
        "chat completion request_id=%s mode=%s messages=%d stream=%s",
        request_id,
        responder.mode,
        len(req.messages),
        req.stream,
    )

    try:
        result = await responder.respond(req, request_id)
    except ForwardError as exc:
        logger.error("backend error request_id=%s kind=%s error=%s", request_id, exc.kind, exc)
        log_completion(request_id=request_id, route=_ROUTE, mode=responder.mode, status=exc.status_code, started=started)
        return error_text_response(exc.status_code, f"Backend error: {exc}", request_id)

    log_completion(request_id=request_id, route=_ROUTE, mode=responder.mode, status=200, started=started)
    return render_chat_response(result, request_id)
