"""HTTP client with a fixed user agent and default headers."""

from __future__ import annotations

import requests
from requests.structures import CaseInsensitiveDict

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "WebRecon-Tool/1.0"


class HTTPRequestError(Exception):
    """Raised when a request cannot be completed or returns an unexpected status."""


class HTTPClient:
    """Thin wrapper around a requests session used by the scanners."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.session = requests.Session()
        self.default_headers: dict[str, str] = {}
        self.user_agent = DEFAULT_USER_AGENT

    def add_default_header(self, key: str, value: str) -> None:
        """Send this header with every request."""
        self.default_headers[key] = value

    def _headers(self) -> CaseInsensitiveDict:
        headers = CaseInsensitiveDict({"User-Agent": self.user_agent})
        headers.update(self.default_headers)
        return headers

    def request(self, method: str, url: str) -> requests.Response:
        """Send a request and return the response whatever its status."""
        try:
            return self.session.request(
                method,
                url,
                headers=self._headers(),
                timeout=self.timeout,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise HTTPRequestError(f"request failed: {exc}") from exc

    def get(self, url: str) -> requests.Response:
        """Send a GET request."""
        return self.request("GET", url)

    def get_body(self, url: str) -> str:
        """Return the body of a GET request, which must answer 200."""
        with self.get(url) as response:
            if response.status_code != 200:
                raise HTTPRequestError(f"unexpected status code: {response.status_code}")
            try:
                return response.text
            except requests.RequestException as exc:
                raise HTTPRequestError(f"failed to read response body: {exc}") from exc

    def get_headers(self, url: str) -> CaseInsensitiveDict:
        """Return the headers of a HEAD request."""
        with self.request("HEAD", url) as response:
            return response.headers