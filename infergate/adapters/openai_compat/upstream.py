"""
后端连接池与 HTTP 转发。连接池在启动时构建一次，注入 BackendForwarder，便于单测替换 transport。
"""

from __future__ import annotations

import asyncio

import httpx
from pydantic import ValidationError

from infergate.config.settings import Settings
from infergate.core.correlation import REQUEST_ID_HEADER
from infergate.core.errors import BackendError, DecodeError, TransportError
from infergate.core.models import ChatCompletionRequest, ChatCompletionResponse
from infergate.util.logger import logger

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"


def _backend_http_limits(config: Settings) -> httpx.Limits:
    # 只有一个后端主机，空闲连接上限取全局与单主机上限的较小值
    idle_cap = min(
        int(config.backend_max_idle_connections),
        int(config.backend_max_idle_connections_per_host),
    )
    return httpx.Limits(
        max_connections=None,
        max_keepalive_connections=max(1, idle_cap),
        keepalive_expiry=float(config.backend_idle_connection_timeout_seconds),
    )


def _backend_http_timeout(config: Settings) -> httpx.Timeout:
    return httpx.Timeout(
        float(config.backend_timeout_seconds),
        connect=float(config.backend_tls_handshake_timeout_seconds),
    )


def build_backend_client(config: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        http2=False,
        timeout=_backend_http_timeout(config),
        limits=_backend_http_limits(config),
    )


def build_backend_url(base_url: str) -> str:
    return f"{base_url.removesuffix('/')}{CHAT_COMPLETIONS_PATH}"


class BackendForwarder:
    """Single-shot relay of chat completion requests to one backend."""

    def __init__(self, *, base_url: str, client: httpx.AsyncClient, timeout_seconds: float = 30.0) -> None:
        self.base_url = base_url.strip()
        self.url = build_backend_url(self.base_url)
        self.timeout_seconds = max(0.001, float(timeout_seconds))
        self._client = client

    async def _post(self, body: bytes, request_id: str) -> httpx.Response:
        headers = {
            "Content-Type": "application/json",
            REQUEST_ID_HEADER: request_id,
        }
        return await self._client.post(self.url, content=body, headers=headers)

    async def forward(self, req: ChatCompletionRequest, request_id: str) -> ChatCompletionResponse:
        outgoing = req.model_copy(update={"stream": False})
        body = outgoing.model_dump_json().encode("utf-8")
        logger.debug("forward start request_id=%s url=%s payload_bytes=%d", request_id, self.url, len(body))
        try:
            response = await asyncio.wait_for(self._post(body, request_id), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as exc:
            logger.warning("forward timeout request_id=%s url=%s timeout=%s", request_id, self.url, self.timeout_seconds)
            raise TransportError(
                f"failed to forward request: timed out after {self.timeout_seconds:g}s",
                cause=exc,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            detail = (str(exc) or "").strip() or exc.__class__.__name__
            logger.warning("forward http_error request_id=%s url=%s error=%s", request_id, self.url, detail)
            raise TransportError(f"failed to forward request: {detail}", cause=exc) from exc

        logger.debug("forward done request_id=%s url=%s status=%s", request_id, self.url, response.status_code)
        if response.status_code != 200:
            raise BackendError(response.status_code, response.content.decode("utf-8", errors="replace"))

        try:
            return ChatCompletionResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(f"failed to decode backend response: {exc}", cause=exc) from exc
