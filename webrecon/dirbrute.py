"""Directory and file discovery by requesting paths from a wordlist."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from webrecon.httpclient import HTTPClient, HTTPRequestError
from webrecon.results import Results
from webrecon.target import Target

DEFAULT_WORDLIST = "wordlists/directories.txt"
DEFAULT_CONCURRENCY = 10
DEFAULT_TIMEOUT = 10.0


class DirBruteError(RuntimeError):
    """Raised when the target or the wordlist cannot be used."""


@dataclass
class DirBruteInfo:
    """Paths found on a target and how the search went."""

    target: str
    base_url: str
    discovered_paths: dict[str, int] = field(default_factory=dict)
    wordlist: str = ""
    paths_checked: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime | None = None


def category_for_status(status: int) -> str:
    """Return the severity category for a discovered path's status code."""
    if 200 <= status < 300:
        return "low"
    if status >= 500:
        return "medium"
    return "info"


class DirBruteScanner:
    """Requests every wordlist entry as a path and records those that exist."""

    def __init__(
        self,
        target: Target,
        results: Results,
        concurrency: int = DEFAULT_CONCURRENCY,
        wordlist: str | Path = "",
        client: HTTPClient | None = None,
    ) -> None:
        self.target = target
        self.results = results
        self.concurrency = concurrency if concurrency > 0 else DEFAULT_CONCURRENCY
        self.wordlist = str(wordlist) if wordlist else DEFAULT_WORDLIST
        self.client = client if client is not None else HTTPClient(DEFAULT_TIMEOUT)

    def _base_url(self) -> str:
        domain = self.target.domain
        for scheme in ("https", "http"):
            url = f"{scheme}://{domain}"
            try:
                self.client.get_headers(url)
            except HTTPRequestError as exc:
                error = exc
                continue
            return url
        raise DirBruteError(f"failed to connect to target: {error}") from error

    def _paths(self) -> list[str]:
        try:
            with open(self.wordlist, encoding="utf-8", errors="replace") as handle:
                words = [line.strip() for line in handle]
        except OSError as exc:
            raise DirBruteError(f"failed to open wordlist file: {exc}") from exc
        return [word if word.startswith("/") else "/" + word for word in words if word]

    def _check_path(self, base_url: str, path: str) -> int | None:
        try:
            with self.client.get(base_url + path) as response:
                return response.status_code
        except HTTPRequestError:
            return None

    def scan(self) -> DirBruteInfo:
        """Request every path and record each one that is not a 404."""
        domain = self.target.domain
        print(f"Performing directory brute forcing on {domain}...")

        base_url = self._base_url()
        info = DirBruteInfo(target=domain, base_url=base_url, wordlist=self.wordlist)
        paths = self._paths()

        with ThreadPoolExecutor(max_workers=self.concurrency) as pool:
            futures = {pool.submit(self._check_path, base_url, path): path for path in paths}
            for future in as_completed(futures):
                info.paths_checked += 1
                status = future.result()
                if status is None or status == 404:
                    continue
                path = futures[future]
                info.discovered_paths[path] = status
                self.results.add(
                    "dirbrute",
                    category_for_status(status),
                    "Directory/File Found",
                    f"Found {path} (Status: {status})",
                    {"path": path, "status_code": status, "url": base_url + path},
                )

        info.end_time = datetime.now()
        self.results.add(
            "dirbrute",
            "info",
            "Directory Brute Forcing Summary",
            f"Found {len(info.discovered_paths)} paths on {domain}",
            info,
        )
        return info


def new_directory_scanner(target: Target, results: Results, concurrency: int) -> DirBruteScanner:
    """Return a scanner using the default directory wordlist."""
    return DirBruteScanner(target, results, concurrency, DEFAULT_WORDLIST)