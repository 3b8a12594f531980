"""
Global fixtures for all unit tests.

This conftest provides autouse fixtures that keep tests off the network and
away from the developer's configuration:
- Environment variable isolation (no real backend URL or token file)
- Settings cache reset between tests

It also provides a FakeBackend that stands in for requests.Session: routes
are registered per (method, path) and every call is recorded.
"""

import json
import os
from typing import Any, Dict, List, Optional

import pytest
import requests
from unittest.mock import MagicMock

# Set test environment BEFORE any imports so settings never see real values
os.environ["RECRUIT_ENVIRONMENT"] = "development"

from recruit.api import AuthSession, MemoryTokenStore, Navigator, create_api
from recruit.common.config import ClientSettings, get_settings

BASE_URL = "http://testserver/api"


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """
    Isolate tests from real credentials and configuration.

    This prevents:
    - Requests to a real backend configured in the shell
    - Reading or overwriting the developer's token file
    - Exports landing in the working directory
    """
    for name in list(os.environ):
        if name.startswith("RECRUIT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RECRUIT_ENVIRONMENT", "development")
    monkeypatch.setenv("RECRUIT_API_BASE_URL", BASE_URL)
    monkeypatch.setenv("RECRUIT_TOKEN_FILE", str(tmp_path / "token"))
    monkeypatch.setenv("RECRUIT_DOWNLOAD_DIR", str(tmp_path / "downloads"))

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def build_response(
    status_code: int = 200,
    body: Any = None,
    content: Optional[bytes] = None,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """
    Build a real requests.Response.

    Dicts, lists and numbers are sent as JSON; strings as text/plain;
    ``content`` as raw bytes.
    """
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if content is not None:
        response._content = content
    elif body is None:
        response._content = b""
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
        response.headers["Content-Type"] = "text/plain; charset=utf-8"
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    response.headers.update(headers or {})
    return response


@pytest.fixture
def make_response():
    return build_response


class FakeBackend:
    """
    Routes requests.Session.request calls to canned responses.

    Handlers are a Response, a list of Responses (served in order) or a
    callable ``handler(call) -> Response``. Unrouted calls get a 404.
    """

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.routes: Dict[tuple, Any] = {}
        self.calls: List[Dict[str, Any]] = []
        self.http = MagicMock(spec=requests.Session)
        self.http.request.side_effect = self.dispatch

    def add(self, method: str, path: str, handler: Any = None, **response_kwargs) -> None:
        if handler is None:
            handler = build_response(**response_kwargs)
        self.routes[(method.upper(), path.strip("/"))] = handler

    def dispatch(self, method: str, url: str, **kwargs) -> requests.Response:
        path = url[len(self.base_url):].strip("/")
        call = {"method": method, "path": path, **kwargs}
        self.calls.append(call)

        handler = self.routes.get((method, path))
        if handler is None:
            return build_response(404, {"message": f"No route for {method} {path}"})
        if isinstance(handler, list):
            return handler.pop(0)
        if callable(handler):
            return handler(call)
        return handler

    def calls_to(self, method: str, path: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["method"] == method and c["path"] == path.strip("/")]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def session():
    return AuthSession(MemoryTokenStore("test-token"))


@pytest.fixture
def navigator():
    return Navigator(location="/skills")


@pytest.fixture
def settings():
    return ClientSettings(api_base_url=BASE_URL)


@pytest.fixture
def api(backend, session, navigator, settings):
    """RecruitApi wired to the FakeBackend with the standard interceptors."""
    return create_api(session, navigator=navigator, settings=settings, http=backend.http)


@pytest.fixture
def sample_skills():
    return [
        {"id": "s-1", "skillName": "Python"},
        {"id": "s-2", "skillName": "React"},
        {"id": "s-3", "skillName": "SQL"},
    ]


@pytest.fixture
def sample_statuses():
    return [
        {"id": "st-open", "status": "Open", "context": "job"},
        {"id": "st-closed", "status": "Closed", "context": "job"},
    ]
