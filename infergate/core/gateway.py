"""FastAPI app entry."""

from __future__ import annotations

import uvicorn
from fastapi import Depends, FastAPI

from infergate.adapters.openai_compat.router import get_responder, router as openai_router
from infergate.config.settings import settings
from infergate.core.responders import Responder, select_responder
from infergate.util.logger import logger

app = FastAPI(title=settings.app_name)
app.include_router(openai_router, prefix="/v1")


@app.get("/health")
async def health(responder: Responder = Depends(get_responder)) -> dict:
    logger.debug("health check mode=%s", responder.mode)
    return {"status": "ok", "mode": responder.mode}


@app.on_event("startup")
async def startup_responder() -> None:
    if getattr(app.state, "responder", None) is None:
        app.state.responder = select_responder(settings)
    logger.info("responder ready mode=%s", app.state.responder.mode)


@app.on_event("shutdown")
async def shutdown_cleanup() -> None:
    responder = getattr(app.state, "responder", None)
    if responder is not None:
        await responder.aclose()
        app.state.responder = None


def run() -> None:
    mode = "backend" if settings.backend_url.strip() else "echo"
    logger.info("starting inference gateway on port %s mode=%s", settings.port, mode)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
