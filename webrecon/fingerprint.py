"""Technology fingerprinting from HTTP headers and page content."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from requests.structures import CaseInsensitiveDict

from webrecon.httpclient import HTTPClient, HTTPRequestError
from webrecon.results import Results
from webrecon.target import Target

_JQUERY_VERSION = re.compile(r"jquery[.-](\d+\.\d+\.\d+)")

_OS_HINTS = (
    ("Windows", ("windows",)),
    ("Linux", ("ubuntu", "debian", "centos", "fedora")),
    ("macOS", ("macos", "darwin")),
)


class FingerprintError(RuntimeError):
    """Raised when the target cannot be reached at all."""


@dataclass
class TechInfo:
    """The technology stack detected on a target."""

    target: str
    web_server: str = ""
    operating_system: str = ""
    programming_languages: list[str] = field(default_factory=list)
    frameworks: list[str] = field(default_factory=list)
    cms: str = ""
    javascript_libraries: list[str] = field(default_factory=list)
    analytics: list[str] = field(default_factory=list)
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    cookies: list[str] = field(default_factory=list)


def guess_operating_system(server: str) -> str:
    """Guess the server OS from a Server header, or return an empty string."""
    lowered = server.lower()
    for name, hints in _OS_HINTS:
        if any(hint in lowered for hint in hints):
            return name
    return ""


def _contains_any(text: str, *needles: str) -> bool:
    return any(needle in text for needle in needles)


class FingerprintScanner:
    """Detects server software, languages, frameworks, CMS, JS libraries and analytics."""

    def __init__(
        self,
        target: Target,
        results: Results,
        client: HTTPClient | None = None,
    ) -> None:
        self.target = target
        self.results = results
        self.client = client if client is not None else HTTPClient(30.0)

    def _found(self, title: str, name: str) -> None:
        self.results.add("fingerprint", "info", title, f"{name} detected", name)

    def _fetch_headers(self) -> tuple[str, CaseInsensitiveDict]:
        domain = self.target.domain
        try:
            url = f"https://{domain}"
            return url, self.client.get_headers(url)
        except HTTPRequestError:
            url = f"http://{domain}"
            try:
                return url, self.client.get_headers(url)
            except HTTPRequestError as exc:
                raise FingerprintError(f"failed to get headers: {exc}") from exc

    def scan(self) -> TechInfo:
        """Fingerprint the target and record every detection."""
        domain = self.target.domain
        print(f"Performing technology fingerprinting on {domain}...")

        info = TechInfo(target=domain)
        url, headers = self._fetch_headers()

        server = headers.get("Server", "")
        if server:
            info.web_server = server
            info.headers["Server"] = server
            self.results.add("fingerprint", "info", "Web Server", f"Web server: {server}", server)
            info.operating_system = guess_operating_system(server)

        info.headers.update(headers)

        try:
            body = self.client.get_body(url)
        except HTTPRequestError as exc:
            print(f"Warning: Failed to get page content: {exc}")
        else:
            self.analyze(body, info)

        self.results.add(
            "fingerprint",
            "info",
            "Technology Fingerprinting",
            f"Technology stack for {domain}",
            info,
        )
        return info

    def analyze(self, body: str, info: TechInfo) -> None:
        """Run every content-based detection on a page body."""
        self._detect_languages(body, info)
        self._detect_frameworks(body, info)
        self._detect_cms(body, info)
        self._detect_javascript_libraries(body, info)
        self._detect_analytics(body, info)

    def _add_language(self, info: TechInfo, name: str) -> None:
        info.programming_languages.append(name)
        self._found("Programming Language", name)

    def _detect_languages(self, body: str, info: TechInfo) -> None:
        powered_by = info.headers.get("X-Powered-By", "")
        server = info.headers.get("Server", "")

        if _contains_any(body, "PHP", "php") or "PHP" in powered_by:
            self._add_language(info, "PHP")
        if (
            "ASP.NET" in body
            or "ASP.NET" in powered_by
            or info.headers.get("X-AspNet-Version", "")
        ):
            self._add_language(info, "ASP.NET")
        if "Java" in body or _contains_any(powered_by, "JSP", "Servlet"):
            self._add_language(info, "Java")
        if "Python" in body or "Python" in powered_by or "Python" in server:
            self._add_language(info, "Python")
        if "Ruby" in body or "Ruby" in powered_by or "Ruby" in server:
            self._add_language(info, "Ruby")

    def _detect_frameworks(self, body: str, info: TechInfo) -> None:
        powered_by = info.headers.get("X-Powered-By", "")
        checks = (
            ("Laravel", "Laravel", "Laravel"),
            ("Django", "Django", "Django"),
            ("Ruby on Rails", "Ruby on Rails", "Rails"),
            ("Express.js", "Express", "Express"),
        )
        for name, in_body, in_header in checks:
            if in_body in body or in_header in powered_by:
                info.frameworks.append(name)
                self._found("Framework", name)

    def _detect_cms(self, body: str, info: TechInfo) -> None:
        checks = (
            ("WordPress", ("wp-content", "WordPress")),
            ("Joomla", ("joomla", "Joomla")),
            ("Drupal", ("drupal", "Drupal")),
            ("Magento", ("magento", "Magento")),
        )
        for name, needles in checks:
            if _contains_any(body, *needles):
                info.cms = name
                self._found("CMS", name)

    def _detect_javascript_libraries(self, body: str, info: TechInfo) -> None:
        match = _JQUERY_VERSION.search(body)
        if match:
            jquery = f"jQuery {match.group(1)}"
        elif "jquery" in body:
            jquery = "jQuery"
        else:
            jquery = ""
        if jquery:
            info.javascript_libraries.append(jquery)
            self._found("JavaScript Library", jquery)

        checks = (
            ("React", ("react", "React")),
            ("Angular", ("angular", "Angular")),
            ("Vue.js", ("vue", "Vue")),
        )
        for name, needles in checks:
            if _contains_any(body, *needles):
                info.javascript_libraries.append(name)
                self._found("JavaScript Library", name)

    def _detect_analytics(self, body: str, info: TechInfo) -> None:
        checks = (
            ("Google Analytics", ("google-analytics.com", "GoogleAnalytics")),
            ("Matomo/Piwik", ("matomo", "piwik")),
        )
        for name, needles in checks:
            if _contains_any(body, *needles):
                info.analytics.append(name)
                self._found("Analytics", name)