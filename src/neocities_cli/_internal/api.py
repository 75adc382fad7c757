"""Low-level access to the Neocities HTTP API."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

import httpx

from neocities_cli._version import __version__
from neocities_cli.exceptions import ServerError, UnexpectedResponseError
from neocities_cli.models import Credential, KeyCredential, PasswordCredential

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://neocities.org"
USER_AGENT = f"neo/{__version__}"

# Longest slice of a raw body quoted in an error message
_MAX_DETAIL = 200


class BearerAuth(httpx.Auth):
    """Attach an API key as a bearer token."""

    def __init__(self, token: str) -> None:
        self._token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


def build_auth(credential: Credential) -> httpx.Auth:
    """Return the httpx auth for a credential: bearer for keys, basic for passwords."""
    if isinstance(credential, KeyCredential):
        return BearerAuth(credential.key)
    if isinstance(credential, PasswordCredential):
        return httpx.BasicAuth(credential.user, credential.password)
    raise TypeError(f"Unsupported credential type: {type(credential).__name__}")


def _server_error(body: Any) -> ServerError | None:
    """Decode a {result, error_type, message} payload, if body is one."""
    if not isinstance(body, dict):
        return None
    error_type = body.get("error_type")
    message = body.get("message")
    if isinstance(error_type, str) and isinstance(message, str):
        return ServerError(error_type, message)
    return None


def _detail(response: httpx.Response) -> str:
    text = response.text.strip()
    if len(text) > _MAX_DETAIL:
        text = text[:_MAX_DETAIL] + "..."
    return text or response.reason_phrase or "empty body"


def decode_response(response: httpx.Response) -> dict[str, Any]:
    """Return the JSON body of a successful response.

    Raises:
        ServerError: If the server reported a structured error
        UnexpectedResponseError: If the response is an error or cannot be decoded
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if response.is_success and isinstance(body, dict) and body.get("result") != "error":
        return body

    error = _server_error(body)
    if error is not None:
        logger.debug(f"Server error {response.status_code}: {error}")
        raise error

    raise UnexpectedResponseError(_detail(response), status_code=response.status_code)


class ApiSession:
    """Authenticated requests against the API for a single credential."""

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self._auth = build_auth(credential)
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        if client is not None:
            self._client = client
        elif timeout is not None:
            self._client = httpx.Client(timeout=timeout)
        else:
            self._client = httpx.Client()

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Any = None,
        files: Any = None,
    ) -> dict[str, Any]:
        """Send one request and return its decoded JSON body."""
        url = f"{self._base_url}{endpoint}"
        logger.debug(f"{method} {url}")
        try:
            response = self._client.request(
                method,
                url,
                params=params,
                files=files,
                headers={"User-Agent": USER_AGENT},
                auth=self._auth,
            )
        except httpx.HTTPError as e:
            raise UnexpectedResponseError(str(e) or type(e).__name__) from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return decode_response(response)

    def close(self) -> None:
        """Close the HTTP client if this session created it."""
        if self._owns_client:
            self._client.close()
