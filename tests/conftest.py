import httpx
import pytest

from lexruntime.client import LexRuntimeClient
from lexruntime.http_client import SignedTransport
from lexruntime.settings import Settings

from _helpers import StaticSession


@pytest.fixture
def static_session() -> StaticSession:
    return StaticSession()


@pytest.fixture
def build_client(static_session: StaticSession):
    def _build(handler) -> LexRuntimeClient:
        async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return LexRuntimeClient(
            SignedTransport(async_client),
            Settings(),
            static_session,
        )

    return _build
