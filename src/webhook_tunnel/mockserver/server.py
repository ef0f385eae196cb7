import asyncio
import json
from typing import Any, AsyncIterator, Dict, List, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import StreamingResponse
from loguru import logger

from webhook_tunnel import __version__
from webhook_tunnel.common.config import MockServerConfig
from webhook_tunnel.mockserver.events import SAMPLE_EVENTS


STREAM_FINISHED = ":Stream finished.\n"


async def event_stream(
    events: List[Dict[str, Any]], interval: float
) -> AsyncIterator[str]:
    """Emit each event as a compact ``data:`` line, then a closing comment."""
    for event in events:
        yield f"data: {json.dumps(event, separators=(',', ':'))}\n"
        # Simulate waiting for the next event
        await asyncio.sleep(interval)
    yield STREAM_FINISHED


def create_app(
    config: MockServerConfig, events: Optional[List[Dict[str, Any]]] = None
) -> FastAPI:
    app = FastAPI(
        title="Webhook Tunnel Mock Stream",
        description="Replays sample webhook events as a server-sent event stream",
        version=__version__,
    )
    replay = SAMPLE_EVENTS if events is None else events

    @app.get("/stream")
    async def stream():
        logger.info(f"Client connected, replaying {len(replay)} events")
        return StreamingResponse(
            event_stream(replay, config.interval),
            media_type="text/event-stream",
        )

    return app


def run_server(config: MockServerConfig, events: Optional[List[Dict[str, Any]]] = None):
    app = create_app(config, events)

    logger.info(f"Mock stream server listening on {config.host}:{config.port}")
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
