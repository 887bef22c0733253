"""Subdomain discovery by resolving names from a wordlist."""

from __future__ import annotations

import ipaddress
import socket
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from webrecon.results import Results
from webrecon.target import Target

DEFAULT_WORDLIST = "wordlists/subdomains.txt"
DEFAULT_CONCURRENCY = 10


@dataclass
class SubdomainInfo:
    """Subdomains found under a base domain and their IPv4 addresses."""

    base_domain: str
    subdomains: list[str] = field(default_factory=list)
    ip_addresses: dict[str, list[str]] = field(default_factory=dict)


def _resolve(host: str) -> list[str] | None:
    """Return the host's addresses, or None when it does not resolve."""
    try:
        infos = socket.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    except (OSError, UnicodeError):
        return None
    addresses: list[str] = []
    for _, _, _, _, sockaddr in infos:
        if sockaddr[0] not in addresses:
            addresses.append(sockaddr[0])
    return addresses


def _ipv4_only(addresses: list[str]) -> list[str]:
    found: list[str] = []
    for text in addresses:
        try:
            address = ipaddress.ip_address(text)
        except ValueError:
            continue
        if isinstance(address, ipaddress.IPv6Address):
            address = address.ipv4_mapped
        if address is not None and str(address) not in found:
            found.append(str(address))
    return found


class SubdomainScanner:
    """Tries every word of a wordlist as a subdomain of the base domain."""

    def __init__(
        self,
        target: Target,
        results: Results,
        concurrency: int = DEFAULT_CONCURRENCY,
        wordlist: str | Path = "",
    ) -> None:
        self.target = target
        self.results = results
        self.concurrency = concurrency if concurrency > 0 else DEFAULT_CONCURRENCY
        self.wordlist = wordlist or DEFAULT_WORDLIST

    def _candidates(self) -> list[str]:
        base = self.target.base_domain
        with open(self.wordlist, encoding="utf-8", errors="replace") as handle:
            return [f"{word}.{base}" for word in (line.strip() for line in handle) if word]

    def scan(self) -> SubdomainInfo:
        """Resolve every candidate and record those that exist."""
        print(f"Performing subdomain enumeration for {self.target.domain}...")

        info = SubdomainInfo(base_domain=self.target.base_domain)
        candidates = self._candidates()

        with ThreadPoolExecutor(max_workers=self.concurrency) as pool:
            futures = {pool.submit(_resolve, name): name for name in candidates}
            for future in as_completed(futures):
                if future.result() is None:
                    continue
                subdomain = futures[future]
                info.subdomains.append(subdomain)
                self.target.add_subdomain(subdomain)

                ips = _ipv4_only(_resolve(subdomain) or [])
                if ips:
                    info.ip_addresses[subdomain] = ips

                self.results.add(
                    "subdomain",
                    "info",
                    "Subdomain Discovered",
                    f"Discovered subdomain: {subdomain}",
                    {"subdomain": subdomain, "ips": info.ip_addresses.get(subdomain)},
                )

        self.results.add(
            "subdomain",
            "info",
            "Subdomain Enumeration",
            f"Discovered {len(info.subdomains)} subdomains for {self.target.base_domain}",
            info,
        )
        return info