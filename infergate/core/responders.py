"""Reply strategies: relay to the backend or echo locally."""

from __future__ import annotations

from abc import ABC, abstractmethod

import httpx

from infergate.adapters.openai_compat.upstream import BackendForwarder, build_backend_client
from infergate.config.settings import Settings
from infergate.core.echo import build_echo_response, extract_last_user_message
from infergate.core.models import ChatCompletionRequest, ChatCompletionResponse
from infergate.util.logger import logger


class Responder(ABC):
    mode = "base"

    @abstractmethod
    async def respond(self, req: ChatCompletionRequest, request_id: str) -> ChatCompletionResponse:
        raise NotImplementedError

    async def aclose(self) -> None:
        return None


class EchoResponder(Responder):
    mode = "echo"

    async def respond(self, req: ChatCompletionRequest, request_id: str) -> ChatCompletionResponse:
        prompt = extract_last_user_message(req.messages)
        return build_echo_response(request_id, prompt)


class BackendResponder(Responder):
    mode = "backend"

    def __init__(self, forwarder: BackendForwarder, client: httpx.AsyncClient | None = None) -> None:
        self.forwarder = forwarder
        self._client = client

    async def respond(self, req: ChatCompletionRequest, request_id: str) -> ChatCompletionResponse:
        return await self.forwarder.forward(req, request_id)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def select_responder(config: Settings, client: httpx.AsyncClient | None = None) -> Responder:
    """Pick the reply strategy once from configuration.

    A provided ``client`` is used as-is and stays owned by the caller; otherwise a
    pooled client is built and closed together with the responder.
    """
    backend_url = config.backend_url.strip()
    if not backend_url:
        logger.info("no backend configured, echo mode enabled")
        return EchoResponder()

    owned_client = None
    if client is None:
        client = owned_client = build_backend_client(config)
    forwarder = BackendForwarder(
        base_url=backend_url,
        client=client,
        timeout_seconds=config.backend_timeout_seconds,
    )
    logger.info("backend mode enabled url=%s", forwarder.url)
    return BackendResponder(forwarder, client=owned_client)
