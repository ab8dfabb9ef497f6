# VaultSync Remote Client
# Typed wrapper around the sync server HTTP API

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import requests


class RemoteStoreError(Exception):
    """Failed request against the sync server."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class RemoteFile:
    """A file as reported by the sync server."""

    path: str
    size: int = 0
    modified: Optional[str] = None
    hash: str = ""
    content: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RemoteFile":
        """Create from a server response object."""
        return cls(
            path=data.get("path", ""),
            size=int(data.get("size") or 0),
            modified=data.get("modified"),
            hash=data.get("hash", ""),
            content=data.get("content"),
        )


@dataclass
class ConnectionStatus:
    """Outcome of a connection test."""

    ok: bool
    error: Optional[str] = None


class RemoteStoreClient:
    """
    Client for the sync server.

    Every request resolves the bearer token through ``token_provider``,
    so token changes apply to the next request without rebuilding the client.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Callable[[], str],
        *,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize client.

        Args:
            base_url: Server base URL, e.g. "https://sync.example.com".
            token_provider: Callable returning the current bearer token.
            timeout: Per-request timeout in seconds.
            session: Optional requests session (created if not provided).
        """
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, *, json_body: bool = True) -> dict[str, str]:
        token = self.token_provider()
        if not token:
            raise RemoteStoreError("No access token configured")
        headers = {"Authorization": f"Bearer {token}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _request(self, method: str, endpoint: str, body: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Send a request and decode the JSON response.

        Raises:
            RemoteStoreError: On transport failure or HTTP status >= 400.
        """
        url = f"{self.base_url}{endpoint}"
        headers = self._headers()

        try:
            response = self.session.request(method, url, headers=headers, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteStoreError(f"{method} {endpoint} failed: {e}") from e

        if response.status_code >= 400:
            raise RemoteStoreError(_error_message(response), status_code=response.status_code)

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise RemoteStoreError(f"Invalid JSON from {endpoint}", status_code=response.status_code) from e

    @staticmethod
    def _endpoint(action: str, path: str) -> str:
        return f"/sync/{action}?path={quote(path, safe='')}"

    def list_remote(self, path: str) -> list[RemoteFile]:
        """List files below a remote folder (no content)."""
        data = self._request("GET", self._endpoint("list", path))
        return [RemoteFile.from_dict(item) for item in data.get("files", [])]

    def read_remote(self, path: str) -> RemoteFile:
        """Read a remote file including its content."""
        data = self._request("GET", self._endpoint("read", path))
        remote = RemoteFile.from_dict(data)
        if remote.content is None:
            remote.content = ""
        return remote

    def write_remote(self, path: str, content: str, expected_hash: Optional[str] = None) -> RemoteFile:
        """
        Write a remote file.

        Args:
            path: Remote file path.
            content: New content.
            expected_hash: Hash the server copy is expected to have (optimistic concurrency).

        Returns:
            Updated metadata as reported by the server.
        """
        body: dict[str, Any] = {"content": content}
        if expected_hash is not None:
            body["expectedHash"] = expected_hash

        data = self._request("POST", self._endpoint("write", path), body)
        if not data.get("path"):
            data = {**data, "path": path}
        return RemoteFile.from_dict(data)

    def test_connection(self) -> ConnectionStatus:
        """Check that the server is reachable and accepts the token."""
        try:
            response = self.session.request(
                "GET",
                f"{self.base_url}/sync/status",
                headers=self._headers(json_body=False),
                timeout=self.timeout,
            )
        except (requests.RequestException, RemoteStoreError) as e:
            return ConnectionStatus(ok=False, error=str(e))

        if response.status_code == 200:
            return ConnectionStatus(ok=True)

        return ConnectionStatus(ok=False, error=f"HTTP {response.status_code}")


def _error_message(response: requests.Response) -> str:
    """Server supplied error message, or a generic one."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])

    return f"HTTP {response.status_code}"
