# Pytest fixtures: build the gateway from explicit Settings and point its
# upstream client at an in-process httpx.MockTransport.

import httpx
import pytest
from fastapi.testclient import TestClient

from ds2openai import create_app
from ds2openai.config import Settings

AUTH = {"Authorization": "Bearer sk-test"}


class FakeUpstream:
    """Records every upstream request and answers with `self.respond`."""

    def __init__(self):
        self.requests = []
        self.respond = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)


async def aiter_chunks(chunks, error=None):
    for chunk in chunks:
        yield chunk
    if error is not None:
        raise error


def sse_response(chunks, error=None) -> httpx.Response:
    return httpx.Response(
        200,
        headers={"Content-Type": "text/event-stream"},
        content=aiter_chunks(chunks, error),
    )


@pytest.fixture(autouse=True)
def reset_sse_app_status():
    # sse-starlette keeps a module-level exit event bound to the first event loop
    from sse_starlette.sse import AppStatus
    if hasattr(AppStatus, "should_exit_event"):
        AppStatus.should_exit_event = None
    yield


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def make_client(upstream):
    def _make(**overrides):
        settings = Settings(_env_file=None, **overrides)
        app = create_app(settings, transport=httpx.MockTransport(upstream))
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    with make_client() as test_client:
        yield test_client
