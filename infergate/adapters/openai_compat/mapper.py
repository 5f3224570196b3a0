"""HTTP <-> chat completion model mapping."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from infergate.core.correlation import REQUEST_ID_HEADER
from infergate.core.errors import MalformedPayload, MethodNotAllowed
from infergate.core.models import ChatCompletionRequest, ChatCompletionResponse
from infergate.util.logger import logger

ALLOWED_METHOD = "POST"


async def parse_chat_request(request: Request) -> ChatCompletionRequest:
    if request.method.upper() != ALLOWED_METHOD:
        raise MethodNotAllowed("Method not allowed")
    body = await request.body()
    try:
        return ChatCompletionRequest.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedPayload(f"Invalid JSON: {exc}", cause=exc) from exc


def render_chat_response(response: ChatCompletionResponse, request_id: str) -> Response:
    stamped = response.model_copy(update={"id": request_id})
    headers = {REQUEST_ID_HEADER: request_id}
    try:
        content = stamped.model_dump_json()
    except (TypeError, ValueError) as exc:
        # 状态码已按成功处理，序列化失败只记录日志，客户端可能收到空正文
        logger.error("encode response failed request_id=%s error=%s", request_id, exc)
        content = b""
    return Response(content=content, status_code=200, media_type="application/json", headers=headers)


def error_text_response(status_code: int, message: str, request_id: str, headers: dict[str, str] | None = None) -> PlainTextResponse:
    merged = {REQUEST_ID_HEADER: request_id, **(headers or {})}
    return PlainTextResponse(content=f"{message}\n", status_code=status_code, headers=merged)
