import pytest


@pytest.fixture
def anyio_backend() -> str:
    # InMemoryGameStore and ConnectionRegistry use asyncio.Lock.
    return "asyncio"
