import json
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from webhook_tunnel.mockserver.events import SAMPLE_EVENTS
from webhook_tunnel.mockserver.server import (
    STREAM_FINISHED,
    create_app,
    event_stream,
    run_server,
)
from webhook_tunnel.relay.classifier import classify_line
from webhook_tunnel.common.models import CommentFrame, DataFrame


class TestEventStream:

    @pytest.mark.asyncio
    async def test_event_stream(self):
        """Test that events are emitted as compact data lines and a final comment."""
        events = [{"id": 1, "type": "grant.created"}, {"id": 2}]
        lines = [line async for line in event_stream(events, 0)]

        assert lines == [
            'data: {"id":1,"type":"grant.created"}\n',
            'data: {"id":2}\n',
            STREAM_FINISHED,
        ]

    @pytest.mark.asyncio
    async def test_event_stream_waits_between_events(self):
        """Test that the configured interval is slept after each event."""
        with patch("webhook_tunnel.mockserver.server.asyncio.sleep") as mock_sleep:
            lines = [line async for line in event_stream([{"a": 1}, {"b": 2}], 2.5)]

        assert len(lines) == 3
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(2.5)


class TestMockServer:

    def test_create_app(self, mock_server_config):
        """Test that create_app returns a FastAPI app."""
        app = create_app(mock_server_config)
        assert isinstance(app, FastAPI)
        assert app.title == "Webhook Tunnel Mock Stream"

    def test_stream_replays_sample_events(self, mock_server_config):
        """Test that the stream is readable by the relay's classifier."""
        client = TestClient(create_app(mock_server_config))
        response = client.get("/stream")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")

        frames = [classify_line(line) for line in response.text.splitlines()]
        assert frames[-1] == CommentFrame(text="Stream finished.")
        payloads = [json.loads(frame.payload) for frame in frames[:-1]]
        assert payloads == SAMPLE_EVENTS
        assert all(isinstance(frame, DataFrame) for frame in frames[:-1])

    def test_stream_custom_events(self, mock_server_config):
        """Test that custom events replace the sample set."""
        client = TestClient(create_app(mock_server_config, [{"type": "custom"}]))
        response = client.get("/stream")

        assert response.text == 'data: {"type":"custom"}\n' + STREAM_FINISHED

    def test_run_server(self, mock_server_config):
        """Test that run_server starts uvicorn with the configured address."""
        with patch("webhook_tunnel.mockserver.server.uvicorn.run") as mock_run:
            run_server(mock_server_config)

        mock_run.assert_called_once()
        assert isinstance(mock_run.call_args[0][0], FastAPI)
        assert mock_run.call_args[1]["host"] == "127.0.0.1"
        assert mock_run.call_args[1]["port"] == 8080
        assert mock_run.call_args[1]["log_level"] == "info"
