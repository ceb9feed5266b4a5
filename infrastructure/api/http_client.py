import logging
from typing import Any, Callable, Optional

import requests

from infrastructure.api.errors import (
    ApiUnavailableError,
    ApiValidationError,
    AuthorizationError,
)

log = logging.getLogger(__name__)

UnauthorizedHook = Callable[[Optional[str]], Any]


def _error_message(resp: requests.Response, default: str) -> str:
    try:
        body = resp.json()
    except ValueError:
        return default
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return default


class ApiClient:
    """Single chokepoint for calls to the admin backend.

    Every call reads the token slot right before dispatch, so a token written by
    a login in the same session is picked up by the next request.
    """

    def __init__(
        self,
        base_url: str,
        token_storage,
        *,
        health_url: Optional[str] = None,
        timeout: float = 15.0,
        health_timeout: float = 3.0,
        on_unauthorized: Optional[UnauthorizedHook] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.health_url = health_url
        self.timeout = timeout
        self.health_timeout = health_timeout
        self.token_storage = token_storage
        self.on_unauthorized = on_unauthorized

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def build_headers(self, authenticated: bool = True) -> tuple[dict, Optional[str]]:
        headers = {"Accept": "application/json"}
        token = self.token_storage.get() if authenticated else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers, token

    def send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict] = None,
        authenticated: bool = True,
    ) -> requests.Response:
        headers, token = self.build_headers(authenticated)
        url = self._url(path)
        try:
            resp = requests.request(
                method,
                url,
                headers=headers,
                json=json,
                params=params,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            log.warning(f"⏱️ {method} {path} timed out after {self.timeout}s")
            raise ApiUnavailableError("The server took too long to respond. Please try again.") from e
        except requests.RequestException as e:
            log.warning(f"❌ Network error on {method} {path}: {e}")
            raise ApiUnavailableError("Cannot reach the server. Check your connection and try again.") from e

        if 200 <= resp.status_code < 300:
            return resp

        if resp.status_code == 401:
            message = _error_message(resp, "Your session has expired. Please log in again.")
            if authenticated:
                log.info(f"🔒 {method} {path} rejected with 401, evicting session")
                if self.on_unauthorized is not None:
                    self.on_unauthorized(token)
            raise AuthorizationError(message, status_code=401)

        if 400 <= resp.status_code < 500:
            message = _error_message(resp, f"Request failed (HTTP {resp.status_code}).")
            log.info(f"⚠️ {method} {path} rejected: HTTP {resp.status_code}")
            raise ApiValidationError(message, status_code=resp.status_code)

        log.error(f"❌ {method} {path} failed: HTTP {resp.status_code}")
        raise ApiUnavailableError(
            _error_message(resp, "Server error. Please try again later."),
            status_code=resp.status_code,
        )

    def check_server_status(self) -> bool:
        """Reachability probe: True only for HTTP 200 within the health timeout."""
        if not self.health_url:
            return False
        try:
            resp = requests.get(self.health_url, timeout=self.health_timeout)
        except Exception as e:
            log.warning(f"⚠️ Health probe to {self.health_url} failed: {e}")
            return False
        if resp.status_code != 200:
            log.warning(f"⚠️ Health probe returned HTTP {resp.status_code}")
            return False
        return True
