from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

client = TestClient(create_app(settings=Settings()))


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_default_app_serves_game_socket() -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"command": "GENERATE_NEW_GAME"})
        assert ws.receive_json()["code"] == 201
