"""
HTTP session against a Tudidi server.

Holds the base URL and the cookie jar established by login(). Every verb
returns the raw requests.Response; status handling lives in the dispatcher.
"""

import json
from typing import Optional

import requests

from ..utils.logger import get_logger
from .errors import AuthenticationError, TransportError

log = get_logger(__name__)

LOGIN_PATH = "/api/login"
JSON_CONTENT_TYPE = "application/json"


class SessionClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def url_for(self, path: str) -> str:
        return self.base_url + path

    def login(self, email: str, password: str) -> None:
        """Authenticate and keep the session cookie for later calls."""
        body = json.dumps({"email": email, "password": password}).encode("utf-8")
        try:
            resp = self.request("POST", LOGIN_PATH, body)
        except requests.RequestException as e:
            raise TransportError(f"login request failed: {e}", cause=e) from e

        if resp.status_code != 200:
            raise AuthenticationError(f"login failed with status {resp.status_code}")
        log.debug("Logged in to %s as %s", self.base_url, email)

    def request(self, method: str, path: str, body: Optional[bytes] = None) -> requests.Response:
        headers = {"Content-Type": JSON_CONTENT_TYPE} if body is not None else None
        log.debug("%s %s", method, path)
        return self.session.request(
            method,
            self.url_for(path),
            data=body,
            headers=headers,
            timeout=self.timeout,
        )

    def get(self, path: str) -> requests.Response:
        return self.request("GET", path)

    def post(self, path: str, body: bytes) -> requests.Response:
        return self.request("POST", path, body)

    def put(self, path: str, body: bytes) -> requests.Response:
        return self.request("PUT", path, body)

    def patch(self, path: str, body: bytes) -> requests.Response:
        return self.request("PATCH", path, body)

    def delete(self, path: str) -> requests.Response:
        return self.request("DELETE", path)
