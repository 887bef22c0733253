"""DNS record lookups for a target domain."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass, field
from typing import Any

import dns.exception
import dns.resolver

from webrecon.results import Results
from webrecon.target import Target

DEFAULT_TIMEOUT = 5.0


@dataclass
class DNSInfo:
    """DNS records gathered for a domain."""

    domain: str
    a_records: list[str] = field(default_factory=list)
    aaaa_records: list[str] = field(default_factory=list)
    mx_records: list[str] = field(default_factory=list)
    ns_records: list[str] = field(default_factory=list)
    txt_records: list[str] = field(default_factory=list)
    cname_records: list[str] = field(default_factory=list)
    soa_record: str = ""


def _lookup_addresses(
    host: str,
) -> list[ipaddress.IPv4Address | ipaddress.IPv6Address]:
    """Resolve a host through the system resolver; empty when it fails."""
    try:
        infos = socket.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    except (OSError, UnicodeError):
        return []

    addresses: list[ipaddress.IPv4Address | ipaddress.IPv6Address] = []
    for family, _, _, _, sockaddr in infos:
        if family not in (socket.AF_INET, socket.AF_INET6):
            continue
        try:
            address = ipaddress.ip_address(sockaddr[0])
        except ValueError:
            continue
        if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
            address = address.ipv4_mapped
        if address not in addresses:
            addresses.append(address)
    return addresses


class DNSScanner:
    """Looks up A, AAAA, MX, NS, TXT and CNAME records for the target."""

    def __init__(
        self,
        target: Target,
        results: Results,
        resolver: Any = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.target = target
        self.results = results
        self.timeout = timeout
        self._resolver = resolver

    def _records(self, rdtype: str) -> list[Any]:
        try:
            if self._resolver is None:
                resolver = dns.resolver.Resolver()
                resolver.lifetime = self.timeout
                self._resolver = resolver
            return list(self._resolver.resolve(self.target.domain, rdtype))
        except (dns.exception.DNSException, OSError):
            return []

    def scan(self) -> DNSInfo:
        """Gather the domain's records and record them as results."""
        domain = self.target.domain
        print(f"Performing DNS lookups for {domain}...")

        info = DNSInfo(domain=domain)

        for address in _lookup_addresses(domain):
            if isinstance(address, ipaddress.IPv4Address):
                info.a_records.append(str(address))
                self.target.add_ip_address(str(address))
            else:
                info.aaaa_records.append(str(address))

        mx_records = sorted(self._records("MX"), key=lambda mx: mx.preference)
        info.mx_records = [f"{mx.exchange} (priority: {mx.preference})" for mx in mx_records]

        info.ns_records = [str(ns.target) for ns in self._records("NS")]

        info.txt_records = [
            b"".join(txt.strings).decode("utf-8", errors="replace")
            for txt in self._records("TXT")
        ]

        cnames = self._records("CNAME")
        if cnames:
            cname = str(cnames[0].target)
            if cname != domain + ".":
                info.cname_records.append(cname)

        self.results.add("dns", "info", "DNS Information", f"DNS records for {domain}", info)
        if info.a_records:
            self.results.add(
                "dns", "info", "A Records", f"IPv4 addresses for {domain}", info.a_records
            )
        if info.mx_records:
            self.results.add(
                "dns", "info", "MX Records", f"Mail servers for {domain}", info.mx_records
            )
        if info.ns_records:
            self.results.add(
                "dns", "info", "NS Records", f"Name servers for {domain}", info.ns_records
            )

        return info