"""
HTTP client for the recruitment backend.

Thin wrapper over requests.Session that:
- joins routes onto the configured base URL
- runs request interceptors (bearer token attachment)
- runs response interceptors (global 401 logout + redirect)
- raises normalized ApiError subclasses for every failure

No retries, no caching, no deduplication: every call hits the network.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from .errors import AuthError, error_from_exception, error_from_response
from .session import AuthSession, Navigator

logger = logging.getLogger(__name__)

_FILENAME_RE = re.compile(r"""filename\*?=(?:UTF-8'')?"?([^";]+)"?""", re.IGNORECASE)


@dataclass
class ApiRequest:
    """Outgoing request as seen by request interceptors."""
    method: str
    path: str
    params: Dict[str, Any] = field(default_factory=dict)
    json: Any = None
    files: Any = None
    data: Any = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class BinaryContent:
    """A blob response (document download, PDF, CSV export)."""
    content: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None


RequestInterceptor = Callable[[ApiRequest], None]
ResponseInterceptor = Callable[[requests.Response, ApiRequest], None]


class BearerTokenInterceptor:
    """Attach ``Authorization: Bearer <token>`` when the session has a token."""

    def __init__(self, session: AuthSession):
        self.session = session

    def __call__(self, request: ApiRequest) -> None:
        token = self.session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"


class UnauthorizedInterceptor:
    """
    Global 401 handler: clear the session token and go to the login screen.

    Runs before the caller sees the AuthError, so it applies regardless of
    which controller issued the request. Routes under ``exempt_prefixes``
    (the login and register calls) keep their 401 for the caller: a wrong
    password there is a credential error, not an expired session.
    """

    def __init__(
        self,
        session: AuthSession,
        navigator: Navigator,
        exempt_prefixes: Tuple[str, ...] = ("auth/",),
    ):
        self.session = session
        self.navigator = navigator
        self.exempt_prefixes = exempt_prefixes

    def __call__(self, response: requests.Response, request: ApiRequest) -> None:
        if response.status_code != 401:
            return
        if request.path.lstrip("/").startswith(self.exempt_prefixes):
            logger.info(f"401 from {request.path} left to the caller")
            return
        logger.warning("Received 401 from backend, clearing session and redirecting to login")
        self.session.clear()
        self.navigator.redirect_to_login()


def _clean_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop unset filters so they are not sent as empty query params."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None and v != ""}


def filename_from_headers(headers) -> Optional[str]:
    disposition = headers.get("Content-Disposition") if headers else None
    if not disposition:
        return None
    match = _FILENAME_RE.search(disposition)
    return match.group(1).strip() if match else None


class ApiClient:
    """
    Issues requests against the backend and normalizes failures.

    Interceptors are opt-in: build_api_client() installs the bearer and
    401 interceptors, tests can construct a bare client.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        http: Optional[requests.Session] = None,
        request_interceptors: Optional[List[RequestInterceptor]] = None,
        response_interceptors: Optional[List[ResponseInterceptor]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()
        self.request_interceptors: List[RequestInterceptor] = list(request_interceptors or [])
        self.response_interceptors: List[ResponseInterceptor] = list(response_interceptors or [])

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> None:
        self.request_interceptors.append(interceptor)

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> None:
        self.response_interceptors.append(interceptor)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        files: Any = None,
        data: Any = None,
        raw: bool = False,
    ) -> Any:
        """
        Send a request and return the parsed body.

        Args:
            method: HTTP verb
            path: Route relative to the base URL (e.g. "skills/123")
            params: Query parameters; None/"" values are dropped
            json: JSON body
            files: Multipart files (requests format)
            data: Multipart form fields
            raw: Return BinaryContent instead of parsing JSON

        Returns:
            Parsed JSON, text, None (empty body) or BinaryContent

        Raises:
            ApiError: subclass matching the failure
        """
        api_request = ApiRequest(
            method=method.upper(),
            path=path,
            params=_clean_params(params),
            json=json,
            files=files,
            data=data,
            headers={"Accept": "application/json"},
        )
        for interceptor in self.request_interceptors:
            interceptor(api_request)

        url = self.url_for(api_request.path)
        logger.debug(f"{api_request.method} {url} params={api_request.params}")

        try:
            response = self.http.request(
                api_request.method,
                url,
                params=api_request.params or None,
                json=api_request.json,
                files=api_request.files,
                data=api_request.data,
                headers=api_request.headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"{api_request.method} {url} failed without response: {e}")
            raise error_from_exception(e) from e

        for interceptor in self.response_interceptors:
            interceptor(response, api_request)

        if not 200 <= response.status_code < 300:
            error = error_from_response(response)
            log = logger.info if isinstance(error, AuthError) else logger.warning
            log(f"{api_request.method} {url} -> {response.status_code}: {error.message}")
            raise error

        if raw:
            return BinaryContent(
                content=response.content,
                filename=filename_from_headers(response.headers),
                content_type=response.headers.get("Content-Type"),
            )
        return self._parse(response)

    @staticmethod
    def _parse(response: requests.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)


def build_api_client(
    base_url: str,
    session: AuthSession,
    navigator: Optional[Navigator] = None,
    timeout: float = 30.0,
    http: Optional[requests.Session] = None,
    handle_unauthorized: bool = True,
) -> ApiClient:
    """
    Build a client with the standard interceptors installed.

    Args:
        base_url: Backend root URL
        session: Token holder injected into the bearer interceptor
        navigator: Receives the login redirect on 401
        timeout: Per-request timeout in seconds
        http: Optional requests.Session (tests inject a mock)
        handle_unauthorized: Install the global 401 interceptor

    Returns:
        Configured ApiClient
    """
    client = ApiClient(base_url, timeout=timeout, http=http)
    client.add_request_interceptor(BearerTokenInterceptor(session))
    if handle_unauthorized:
        client.add_response_interceptor(UnauthorizedInterceptor(session, navigator or Navigator()))
    return client
