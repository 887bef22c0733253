"""Scan targets parsed from user input."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import SplitResult, urlsplit

_SCHEMES = ("http://", "https://")


class TargetError(ValueError):
    """Raised when a target cannot be parsed."""


@dataclass
class Target:
    """A host to scan, with what has been learnt about it."""

    raw_input: str
    url: SplitResult
    domain: str
    base_domain: str
    ip_addresses: list[str] = field(default_factory=list)
    subdomains: list[str] = field(default_factory=list)

    def add_ip_address(self, ip: str) -> None:
        """Record an IP address unless it is already known."""
        if ip not in self.ip_addresses:
            self.ip_addresses.append(ip)

    def add_subdomain(self, subdomain: str) -> None:
        """Record a subdomain unless it is already known."""
        if subdomain not in self.subdomains:
            self.subdomains.append(subdomain)

    def __str__(self) -> str:
        return self.domain


def _hostname(netloc: str) -> str:
    host = netloc.rpartition("@")[2]
    if host.startswith("["):
        end = host.find("]")
        return host[1:end] if end != -1 else host[1:]
    return host.partition(":")[0]


def parse_target(raw_input: str) -> Target:
    """Build a target from a host name or URL, defaulting to https."""
    if not raw_input.startswith(_SCHEMES):
        raw_input = "https://" + raw_input

    try:
        url = urlsplit(raw_input)
        url.port  # validates the port part
    except ValueError as exc:
        raise TargetError(f"invalid target URL: {exc}") from exc

    domain = _hostname(url.netloc)
    if not domain:
        raise TargetError("could not extract domain from URL")

    parts = domain.split(".")
    base_domain = ".".join(parts[-2:]) if len(parts) >= 2 else domain

    return Target(raw_input=raw_input, url=url, domain=domain, base_domain=base_domain)