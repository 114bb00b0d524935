"""GitHub gist API client via httpx."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from gistbadge import __version__

logger = logging.getLogger(__name__)


class GistError(Exception):
    """A gist API request failed. ``status_code`` is None for transport errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class GistClient:
    """Read and write files of one gist via the GitHub REST API.

    Pass ``http_client`` to reuse a session or to swap in a mock transport;
    a client created here is closed by :meth:`close`.
    """

    API_BASE = "https://api.github.com"
    USER_AGENT = f"gistbadge/{__version__}"

    def __init__(
        self,
        token: str,
        gist_id: str,
        api_url: str = API_BASE,
        timeout: float = 10.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.token = token
        self.gist_id = gist_id
        self.url = f"{api_url.rstrip('/')}/gists/{gist_id}"
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)

    def __enter__(self) -> "GistClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.USER_AGENT,
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github.v3+json",
        }

    def _request(self, method: str, url: str, body: Optional[dict] = None) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            return self._client.request(method, url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise GistError(f"Gist request {method} {url} failed: {e}") from e

    def get(self) -> Dict[str, Any]:
        """GET the gist. Raises GistError on any non-success status."""
        resp = self._request("GET", self.url)
        if not resp.is_success:
            raise GistError(
                f"Failed to get gist: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
                body=resp.text,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise GistError(f"Gist response is not valid JSON: {e}", status_code=resp.status_code) from e
        if not isinstance(data, dict):
            raise GistError("Gist response is not a JSON object", status_code=resp.status_code)
        return data

    def fetch_file(self, filename: str) -> Optional[str]:
        """Return the stored content of ``filename``, or None if the gist lacks it.

        Files the API reports as truncated are re-read from their raw URL.
        """
        files = self.get().get("files") or {}
        if not isinstance(files, dict):
            raise GistError("Gist response 'files' is not a JSON object")
        entry = files.get(filename)
        if not isinstance(entry, dict):
            return None
        if entry.get("truncated") and entry.get("raw_url"):
            resp = self._request("GET", entry["raw_url"])
            if not resp.is_success:
                raise GistError(
                    f"Failed to get raw gist file: {resp.status_code} {resp.reason_phrase}",
                    status_code=resp.status_code,
                    body=resp.text,
                )
            return resp.text
        return entry.get("content")

    def update_file(self, filename: str, content: str) -> None:
        """Create or replace ``filename`` in the gist."""
        resp = self._request("POST", self.url, {"files": {filename: {"content": content}}})
        if not resp.is_success:
            raise GistError(
                "Failed to update gist, response status code: "
                f"{resp.status_code}, status message: {resp.reason_phrase}",
                status_code=resp.status_code,
                body=resp.text,
            )
