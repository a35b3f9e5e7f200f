"""End-to-end tests against a real uvicorn server built by server.build_server."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pytest
from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed

from app.config import Settings
from server import GameServer, build_server

PING = json.dumps({"command": "PING"})


@asynccontextmanager
async def running_server(settings: Settings) -> AsyncIterator[tuple[GameServer, str]]:
    server = build_server(settings)
    task = asyncio.create_task(server.serve())
    try:
        for _ in range(500):
            if server.started or task.done():
                break
            await asyncio.sleep(0.01)
        assert server.started, "uvicorn did not start"
        port = server.servers[0].sockets[0].getsockname()[1]
        yield server, f"ws://127.0.0.1:{port}/ws"
    finally:
        server.should_exit = True
        await asyncio.wait_for(task, timeout=10)


def _settings(**overrides: object) -> Settings:
    return Settings(host="127.0.0.1", port=0, log_level="WARNING", **overrides)


@pytest.mark.anyio
async def test_game_round_trip_over_real_socket() -> None:
    async with running_server(_settings()) as (_, url):
        async with connect(url) as ws:
            await ws.send(json.dumps({"command": "GENERATE_NEW_GAME"}))
            created = json.loads(await ws.recv())
            assert created["code"] == 201

            await ws.send("{not json")
            assert json.loads(await ws.recv()) == {"code": 400, "error": "Malformed message"}


@pytest.mark.anyio
async def test_client_over_capacity_sees_try_again_later() -> None:
    async with running_server(_settings(max_connections=1)) as (_, url):
        async with connect(url) as first:
            await first.send(PING)
            assert json.loads(await first.recv())["code"] == 200

            async with connect(url) as second:
                with pytest.raises(ConnectionClosed) as exc:
                    await second.recv()
            assert exc.value.rcvd is not None
            assert exc.value.rcvd.code == 1013

            await first.send(PING)
            assert json.loads(await first.recv())["code"] == 200


@pytest.mark.anyio
async def test_shutdown_closes_open_sockets_going_away(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="services.connection_registry")
    async with running_server(_settings()) as (server, url):
        async with connect(url) as ws:
            await ws.send(PING)
            assert json.loads(await ws.recv())["code"] == 200

            server.should_exit = True
            with pytest.raises(ConnectionClosed) as exc:
                await ws.recv()

    assert exc.value.rcvd is not None
    assert exc.value.rcvd.code == 1001
    assert "Closing 1 open game socket" in caplog.text
