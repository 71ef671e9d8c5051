"""Shared pytest fixtures and configuration."""

import json
from unittest.mock import patch

import httpx
import pytest
from loguru import logger

from propdesk.config import ClientConfig
from propdesk.context import build_context
from propdesk.session import MemoryStorage, PersistedStore

API_URL = "http://api.test/api/v1"


class FakeApi:
    """Canned responses for the REST API, served through httpx.MockTransport."""

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body=None):
        self.routes[(method.upper(), path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        status, body = self.routes[key]
        if isinstance(body, Exception):
            raise body
        if body is None:
            return httpx.Response(status)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last(self, method: str, path: str) -> httpx.Request:
        for request in reversed(self.requests):
            if request.method == method and request.url.path == path:
                return request
        raise AssertionError(f"No {method} {path} request was made")

    def json_body(self, method: str, path: str) -> dict:
        return json.loads(self.last(method, path).content)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Drop sinks left behind by CLI runs, whose streams are closed by then."""
    yield
    logger.remove()


@pytest.fixture
def config(tmp_path):
    return ClientConfig(api_url=API_URL, data_dir=tmp_path, timeout=5.0)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def make_ctx(config, storage, fake_api):
    """Build contexts sharing one storage slot, like reloads of one page."""
    contexts = []

    def _make(current_path: str = "/"):
        ctx = build_context(
            config=config,
            storage=storage,
            transport=fake_api.transport,
            current_path=current_path,
        )
        contexts.append(ctx)
        return ctx

    yield _make

    for ctx in contexts:
        ctx.close()


@pytest.fixture
def cli_env(make_ctx):
    """Route CLI commands through the fake API and in-memory storage."""
    with patch(
        "propdesk.cli._view.build_context",
        side_effect=lambda current_path="/": make_ctx(current_path),
    ):
        yield


@pytest.fixture
def tenant_user():
    return {"id": "u1", "email": "tenant@example.com", "userType": "tenant"}


@pytest.fixture
def signed_in(storage, config, tenant_user):
    """Seed storage with a persisted tenant session."""

    def _seed(user=None, token="abc"):
        store = PersistedStore(storage, key=config.storage_key)
        storage.set_item(
            store.key,
            json.dumps(
                {"user": user or tenant_user, "token": token, "isAuthenticated": True}
            ),
        )

    return _seed
