"""Shared fixtures. Environment is set before petscan is imported anywhere."""

import os
import sqlite3
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="petscan-tests-")
DB_PATH = os.path.join(_DB_DIR, "petscan.db")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("GO_UPC_API_KEY", None)

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from petscan.main import app  # noqa: E402
from petscan.services.product_lookup import clear_lookup_cache, get_http_client  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_lookup_cache():
    clear_lookup_cache()
    yield
    clear_lookup_cache()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    with sqlite3.connect(DB_PATH) as conn:
        conn.execute("DELETE FROM profiles")


@pytest.fixture
def upstream(client):
    """
    Route upstream provider calls to a dict of url-substring → (status, json).
    Returns the dict so tests can fill it in; unmatched URLs answer 404.
    """
    routes: dict[str, tuple[int, dict]] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        for fragment, (status_code, body) in routes.items():
            if fragment in url:
                return httpx.Response(status_code, json=body)
        return httpx.Response(404, json={"status": 0})

    async def _override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as c:
            yield c

    app.dependency_overrides[get_http_client] = _override
    return routes
