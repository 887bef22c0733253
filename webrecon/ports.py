"""TCP connect port scanning."""

from __future__ import annotations

import ipaddress
import socket
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime

from webrecon.results import Results
from webrecon.target import Target

DEFAULT_CONCURRENCY = 100
DEFAULT_TIMEOUT = 2.0
DEFAULT_START_PORT = 1
DEFAULT_END_PORT = 1024
MAX_PORT = 65535

_SERVICES = {
    21: "FTP",
    22: "SSH",
    23: "Telnet",
    25: "SMTP",
    53: "DNS",
    80: "HTTP",
    110: "POP3",
    143: "IMAP",
    443: "HTTPS",
    465: "SMTPS",
    587: "SMTP (Submission)",
    993: "IMAPS",
    995: "POP3S",
    3306: "MySQL",
    5432: "PostgreSQL",
    8080: "HTTP (Alternate)",
    8443: "HTTPS (Alternate)",
}


class PortScanError(RuntimeError):
    """Raised when the target cannot be scanned."""


@dataclass
class PortInfo:
    """Open ports found on a target."""

    target: str
    open_ports: dict[int, str] = field(default_factory=dict)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime | None = None


def service_name(port: int) -> str:
    """Return the usual service on a port, or "Unknown"."""
    return _SERVICES.get(port, "Unknown")


def _resolve_ipv4(host: str) -> list[str]:
    try:
        infos = socket.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    except (OSError, UnicodeError) as exc:
        raise PortScanError(f"failed to resolve domain: {exc}") from exc

    found: list[str] = []
    for _, _, _, _, sockaddr in infos:
        try:
            address = ipaddress.ip_address(sockaddr[0])
        except ValueError:
            continue
        if isinstance(address, ipaddress.IPv6Address):
            address = address.ipv4_mapped
        if address is not None and str(address) not in found:
            found.append(str(address))
    return found


class PortScanner:
    """Connects to each port in a range on the target's first IPv4 address."""

    def __init__(
        self,
        target: Target,
        results: Results,
        concurrency: int = DEFAULT_CONCURRENCY,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.target = target
        self.results = results
        self.concurrency = concurrency if concurrency > 0 else DEFAULT_CONCURRENCY
        self.timeout = timeout
        self.start_port = DEFAULT_START_PORT
        self.end_port = DEFAULT_END_PORT

    def set_port_range(self, start: int, end: int) -> None:
        """Scan ports start..end inclusive; an invalid range is ignored."""
        if start > 0 and start <= end <= MAX_PORT:
            self.start_port = start
            self.end_port = end

    def _is_open(self, ip: str, port: int) -> bool:
        try:
            with socket.create_connection((ip, port), timeout=self.timeout):
                return True
        except OSError:
            return False

    def scan(self) -> PortInfo:
        """Scan the port range and record every open port."""
        domain = self.target.domain
        print(f"Performing port scan on {domain} (ports {self.start_port}-{self.end_port})...")

        info = PortInfo(target=domain)

        if not self.target.ip_addresses:
            for ip in _resolve_ipv4(domain):
                self.target.add_ip_address(ip)
        if not self.target.ip_addresses:
            raise PortScanError("no IP addresses found for target")

        target_ip = self.target.ip_addresses[0]
        ports = range(self.start_port, self.end_port + 1)

        with ThreadPoolExecutor(max_workers=self.concurrency) as pool:
            futures = {pool.submit(self._is_open, target_ip, port): port for port in ports}
            for future in as_completed(futures):
                if not future.result():
                    continue
                port = futures[future]
                service = service_name(port)
                info.open_ports[port] = service
                self.results.add(
                    "portscan",
                    "info",
                    "Open Port",
                    f"Port {port} ({service}) is open on {domain}",
                    {"port": port, "service": service, "ip": target_ip},
                )

        info.end_time = datetime.now()
        self.results.add(
            "portscan",
            "info",
            "Port Scan Summary",
            f"Found {len(info.open_ports)} open ports on {domain}",
            info,
        )
        return info