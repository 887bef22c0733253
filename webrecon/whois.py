"""WHOIS lookups through a web lookup page."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from webrecon.httpclient import HTTPClient, HTTPRequestError
from webrecon.results import Results
from webrecon.target import Target

WHOIS_LOOKUP_URL = "https://www.whois.com/whois/{domain}"

_REGISTRAR = re.compile(r"Registrar:\s*(.+)", re.IGNORECASE)
_CREATED = re.compile(r"Creation Date:\s*(.+)", re.IGNORECASE)
_EXPIRY = re.compile(r"Registry Expiry Date:\s*(.+)", re.IGNORECASE)
_NAME_SERVER = re.compile(r"Name Server:\s*(.+)", re.IGNORECASE)


class WhoisError(RuntimeError):
    """Raised when the WHOIS data cannot be fetched."""


@dataclass
class WhoisInfo:
    """Registration details of a domain."""

    domain: str
    registrar: str = ""
    created_date: str = ""
    expiry_date: str = ""
    name_servers: list[str] = field(default_factory=list)
    registrant: str = ""
    raw_data: str = ""


def _first(pattern: re.Pattern[str], body: str) -> str:
    match = pattern.search(body)
    return match.group(1).strip() if match else ""


def parse_whois(domain: str, body: str) -> WhoisInfo:
    """Extract registrar, dates and name servers from WHOIS text."""
    return WhoisInfo(
        domain=domain,
        registrar=_first(_REGISTRAR, body),
        created_date=_first(_CREATED, body),
        expiry_date=_first(_EXPIRY, body),
        name_servers=[match.group(1).strip() for match in _NAME_SERVER.finditer(body)],
        raw_data=body,
    )


class WhoisScanner:
    """Fetches and parses the WHOIS record of the target domain."""

    def __init__(
        self,
        target: Target,
        results: Results,
        client: HTTPClient | None = None,
        lookup_url: str = WHOIS_LOOKUP_URL,
    ) -> None:
        self.target = target
        self.results = results
        self.client = client if client is not None else HTTPClient(30.0)
        self.lookup_url = lookup_url

    def scan(self) -> WhoisInfo:
        """Look up the domain and record what was found."""
        domain = self.target.domain
        print(f"Performing WHOIS lookup for {domain}...")

        url = self.lookup_url.format(domain=domain)
        try:
            body = self.client.get_body(url)
        except HTTPRequestError as exc:
            raise WhoisError(f"WHOIS lookup failed: {exc}") from exc

        info = parse_whois(domain, body)
        self.results.add(
            "whois", "info", "WHOIS Information", f"WHOIS information for {domain}", info
        )
        return info