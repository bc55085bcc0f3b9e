"""
Pytest configuration for backend tests.

Why: Make `wafer_session` and the web adapter (`main`, `routes.*`) importable
without installation, force AnyIO onto asyncio, and provide a recording fake
for the session server so no test touches the network.
"""
import sys
from pathlib import Path
from typing import Any, Dict, List
import types

import pytest

# Ensure modules in backend/ and backend/web are importable across tests
REPO_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = REPO_ROOT / "backend"
WEB_DIR = BACKEND_DIR / "web"
TESTS_DIR = BACKEND_DIR / "tests"
for p in (str(REPO_ROOT), str(BACKEND_DIR), str(WEB_DIR), str(TESTS_DIR)):
    if p not in sys.path:
        sys.path.insert(0, p)


APPID = "wx-test-appid"
AUTH_URL = "http://auth.test/mina_auth/"

USER_INFO_WIRE = {
    "openId": "o-123",
    "unionId": "u-456",
    "nickName": "Mina",
    "gender": 2,
    "language": "zh_CN",
    "city": "Shenzhen",
    "province": "Guangdong",
    "country": "CN",
    "avatarUrl": "https://img.test/a.png",
}

SESSION_WIRE = {
    "id": "session-uuid-1",
    "skey": "skey-abc",
    "user_info": USER_INFO_WIRE,
    "duration": 7200,
}


class FakeSessionServer:
    """Stand-in for `wafer_session.client.http_post` that records every call."""

    def __init__(self, body: Any = None, exc: Exception | None = None, status_code: int = 200):
        self.body = body if body is not None else {"returnCode": 0, "returnMessage": "OK", "returnData": SESSION_WIRE}
        self.exc = exc
        self.status_code = status_code
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        body = self.body

        def _json():
            if isinstance(body, Exception):
                raise body
            return body

        return types.SimpleNamespace(status_code=self.status_code, json=_json)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_server(monkeypatch: pytest.MonkeyPatch):
    """Install a successful fake session server; tests may tweak `.body`/`.exc`."""
    server = FakeSessionServer()
    monkeypatch.setattr("wafer_session.client.http_post", server)
    return server


@pytest.fixture(autouse=True)
def _reset_web_sdk():
    """Reset the shared SDK of the web routes so env/config changes do not leak."""
    try:
        import routes.session as session_routes  # type: ignore
    except Exception:
        yield
        return
    session_routes.set_sdk(None)
    yield
    session_routes.set_sdk(None)
