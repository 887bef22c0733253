"""Checks for common web security weaknesses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Mapping

from webrecon.httpclient import HTTPClient, HTTPRequestError
from webrecon.results import Results
from webrecon.target import Target

ADMIN_PATHS = (
    "/admin",
    "/administrator",
    "/wp-admin",
    "/login",
    "/wp-login.php",
    "/admin.php",
    "/admin/login",
    "/adminlogin",
    "/admin/index.php",
    "/user/login",
    "/cpanel",
    "/phpmyadmin",
    "/dashboard",
)

# (header, name, description, severity, recommendation)
_SECURITY_HEADERS = (
    (
        "Content-Security-Policy",
        "Missing Content-Security-Policy Header",
        "The Content-Security-Policy header is missing. This header helps prevent XSS attacks.",
        "medium",
        "Implement a Content-Security-Policy header",
    ),
    (
        "X-Frame-Options",
        "Missing X-Frame-Options Header",
        "The X-Frame-Options header is missing. This header helps prevent clickjacking attacks.",
        "medium",
        "Implement X-Frame-Options header with DENY or SAMEORIGIN value",
    ),
    (
        "X-XSS-Protection",
        "Missing X-XSS-Protection Header",
        "The X-XSS-Protection header is missing. "
        "This header helps prevent XSS attacks in older browsers.",
        "low",
        "Implement X-XSS-Protection header with '1; mode=block' value",
    ),
    (
        "X-Content-Type-Options",
        "Missing X-Content-Type-Options Header",
        "The X-Content-Type-Options header is missing. This header prevents MIME type sniffing.",
        "low",
        "Implement X-Content-Type-Options header with 'nosniff' value",
    ),
)


@dataclass
class Vulnerability:
    """A single weakness found on the target."""

    name: str
    description: str
    severity: str
    url: str
    details: dict[str, str] = field(default_factory=dict)


@dataclass
class VulnInfo:
    """All weaknesses found during one scan."""

    target: str
    vulnerabilities: list[Vulnerability] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime | None = None


def _header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        value = next((v for k, v in headers.items() if k.lower() == lowered), "")
    return value or ""


def header_findings(headers: Mapping[str, str], url: str) -> list[Vulnerability]:
    """Return the weaknesses revealed by a response's headers."""
    findings = [
        Vulnerability(
            name=name,
            description=description,
            severity=severity,
            url=url,
            details={"header": header, "recommendation": recommendation},
        )
        for header, name, description, severity, recommendation in _SECURITY_HEADERS
        if not _header(headers, header)
    ]

    if not _header(headers, "Strict-Transport-Security") and url.startswith("https"):
        findings.append(
            Vulnerability(
                name="Missing Strict-Transport-Security Header",
                description="The Strict-Transport-Security header is missing. "
                "This header enforces secure connections to the server.",
                severity="medium",
                url=url,
                details={
                    "header": "Strict-Transport-Security",
                    "recommendation": "Implement Strict-Transport-Security header with "
                    "'max-age=31536000; includeSubDomains' value",
                },
            )
        )

    server = _header(headers, "Server")
    if server:
        findings.append(
            Vulnerability(
                name="Server Information Disclosure",
                description="The Server header discloses information about "
                "the web server software and version.",
                severity="low",
                url=url,
                details={
                    "header": "Server",
                    "value": server,
                    "recommendation": "Configure the server to hide version information",
                },
            )
        )
    return findings


def method_findings(methods: str, url: str) -> list[Vulnerability]:
    """Return the weaknesses revealed by an Allow or Public header value."""
    findings: list[Vulnerability] = []
    if not methods:
        return findings

    if "TRACE" in methods:
        findings.append(
            Vulnerability(
                name="TRACE Method Enabled",
                description="The TRACE method is enabled on the server. "
                "This can lead to Cross-Site Tracing (XST) attacks.",
                severity="medium",
                url=url,
                details={
                    "methods": methods,
                    "recommendation": "Disable the TRACE method on the server",
                },
            )
        )
    if "PUT" in methods or "DELETE" in methods:
        findings.append(
            Vulnerability(
                name="Dangerous HTTP Methods Enabled",
                description="Dangerous HTTP methods (PUT/DELETE) are enabled on the server. "
                "This can lead to unauthorized modifications.",
                severity="high",
                url=url,
                details={
                    "methods": methods,
                    "recommendation": "Disable dangerous HTTP methods "
                    "or implement proper authentication",
                },
            )
        )
    return findings


class VulnScanner:
    """Runs header, method, HTTPS and admin-path checks against the target."""

    def __init__(
        self,
        target: Target,
        results: Results,
        client: HTTPClient | None = None,
    ) -> None:
        self.target = target
        self.results = results
        self.client = client if client is not None else HTTPClient(30.0)

    def scan(self) -> VulnInfo:
        """Run every check, record each finding and a summary."""
        domain = self.target.domain
        print(f"Performing vulnerability scanning on {domain}...")

        info = VulnInfo(target=domain)
        checks: tuple[tuple[str, Callable[[VulnInfo], None]], ...] = (
            ("security headers", self._check_security_headers),
            ("HTTP methods", self._check_http_methods),
            ("SSL/TLS", self._check_ssl_tls),
            ("common vulnerabilities", self._check_common_vulnerabilities),
        )
        for label, check in checks:
            try:
                check(info)
            except HTTPRequestError as exc:
                print(f"Warning: Failed to check {label}: {exc}")

        info.end_time = datetime.now()
        self.results.add(
            "vulnscan",
            "info",
            "Vulnerability Scan Summary",
            f"Found {len(info.vulnerabilities)} vulnerabilities on {domain}",
            info,
        )
        return info

    def _record(self, info: VulnInfo, vuln: Vulnerability) -> None:
        info.vulnerabilities.append(vuln)
        self.results.add("vulnscan", vuln.severity, vuln.name, vuln.description, vuln)

    def _check_security_headers(self, info: VulnInfo) -> None:
        domain = self.target.domain
        url = f"https://{domain}"
        try:
            headers = self.client.get_headers(url)
        except HTTPRequestError:
            url = f"http://{domain}"
            try:
                headers = self.client.get_headers(url)
            except HTTPRequestError as exc:
                raise HTTPRequestError(f"failed to get headers: {exc}") from exc
        for vuln in header_findings(headers, url):
            self._record(info, vuln)

    def _check_http_methods(self, info: VulnInfo) -> None:
        domain = self.target.domain
        url = f"https://{domain}"
        try:
            response = self.client.request("OPTIONS", url)
        except HTTPRequestError:
            url = f"http://{domain}"
            try:
                response = self.client.request("OPTIONS", url)
            except HTTPRequestError as exc:
                raise HTTPRequestError(f"failed to send request: {exc}") from exc
        with response:
            methods = response.headers.get("Allow") or response.headers.get("Public") or ""
        for vuln in method_findings(methods, url):
            self._record(info, vuln)

    def _check_ssl_tls(self, info: VulnInfo) -> None:
        domain = self.target.domain
        try:
            self.client.get_headers(f"https://{domain}")
        except HTTPRequestError as exc:
            self._record(
                info,
                Vulnerability(
                    name="HTTPS Not Available",
                    description="The website does not support HTTPS "
                    "or has an invalid SSL/TLS certificate.",
                    severity="high",
                    url=f"http://{domain}",
                    details={
                        "error": str(exc),
                        "recommendation": "Implement HTTPS with a valid SSL/TLS certificate",
                    },
                ),
            )

    def _check_common_vulnerabilities(self, info: VulnInfo) -> None:
        domain = self.target.domain
        for path in ADMIN_PATHS:
            url = f"https://{domain}{path}"
            try:
                response = self.client.get(url)
            except HTTPRequestError:
                url = f"http://{domain}{path}"
                try:
                    response = self.client.get(url)
                except HTTPRequestError:
                    continue
            with response:
                status = response.status_code
            if status == 404:
                continue
            self._record(
                info,
                Vulnerability(
                    name="Admin Interface Exposed",
                    description=f"An admin interface was found at {path}",
                    severity="medium",
                    url=url,
                    details={
                        "path": path,
                        "status_code": str(status),
                        "recommendation": "Restrict access to admin interfaces",
                    },
                ),
            )