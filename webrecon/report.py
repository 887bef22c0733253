"""Markdown, JSON and HTML reports built from scan results."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from string import Template
from typing import Any
from urllib.parse import SplitResult

from webrecon.results import Results, ScanResult
from webrecon.target import Target, parse_target

_SEVERITIES = ("critical", "high", "medium", "low", "info")

_HTML_TEMPLATE = Template(
    """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Web Reconnaissance Report for $domain</title>
    <style>
        body {
            font-family: Arial, sans-serif;
            line-height: 1.6;
            margin: 0;
            padding: 20px;
            color: #333;
        }
        h1, h2, h3, h4 {
            color: #2c3e50;
        }
        table {
            border-collapse: collapse;
            width: 100%;
            margin-bottom: 20px;
        }
        th, td {
            border: 1px solid #ddd;
            padding: 8px;
            text-align: left;
        }
        th {
            background-color: #f2f2f2;
        }
        tr:nth-child(even) {
            background-color: #f9f9f9;
        }
        .critical {
            color: #d9534f;
            font-weight: bold;
        }
        .high {
            color: #f0ad4e;
            font-weight: bold;
        }
        .medium {
            color: #5bc0de;
        }
        .low {
            color: #5cb85c;
        }
    </style>
</head>
<body>
    <div class="container">
        <pre>$markdown</pre>
    </div>
</body>
</html>"""
)


class ReportFormat(str, Enum):
    """Supported report formats; the value is the file extension."""

    JSON = "json"
    MARKDOWN = "md"
    HTML = "html"


class ReportError(RuntimeError):
    """Raised when a report cannot be produced or written."""


def _now() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return _jsonable(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, SplitResult):
        return value.geturl()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return str(value)


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


class ReportGenerator:
    """Turns collected results into a report for a target."""

    def __init__(
        self,
        target: Target,
        results: Results,
        output_file: str | Path = "",
        format: ReportFormat | str = ReportFormat.MARKDOWN,
    ) -> None:
        self.target = target
        self.results = results
        self.output_file = str(output_file)
        self.format = format

    def _format_value(self) -> str:
        return self.format.value if isinstance(self.format, ReportFormat) else str(self.format)

    def _output_path(self) -> str:
        extension = self._format_value()
        path = self.output_file
        if len(path) > len(extension) + 1 and path.endswith("." + extension):
            return path
        return f"{path}.{extension}"

    def generate(self) -> str:
        """Write the report in the configured format and return the file path."""
        extension = self._format_value()
        print(f"Generating {extension} report for {self.target.domain}...")
        output_file = self._output_path()

        try:
            report_format = ReportFormat(extension)
        except ValueError as exc:
            raise ReportError(f"unsupported format: {extension}") from exc

        renderers = {
            ReportFormat.JSON: self.generate_json,
            ReportFormat.MARKDOWN: self.generate_markdown,
            ReportFormat.HTML: self.generate_html,
        }
        content = renderers[report_format]()

        try:
            Path(output_file).write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ReportError(f"failed to write report to file: {exc}") from exc
        return output_file

    def generate_json(self) -> str:
        """Return the target, every result and a summary as indented JSON."""
        report = {
            "target": _jsonable(self.target),
            "results": _jsonable(self.results.items),
            "summary": {
                "total_results": self.results.count(),
                "scan_date": _now(),
            },
        }
        try:
            return json.dumps(report, indent=2)
        except (TypeError, ValueError) as exc:
            raise ReportError(f"failed to marshal JSON: {exc}") from exc

    def generate_markdown(self) -> str:
        """Return the report as Markdown, one section per kind of result."""
        target = self.target
        out: list[str] = [
            f"# Web Reconnaissance Report for {target.domain}\n\n",
            f"**Scan Date:** {_now()}\n\n",
            "## Target Information\n\n",
            f"- **Domain:** {target.domain}\n",
            f"- **Base Domain:** {target.base_domain}\n",
        ]
        if target.ip_addresses:
            out.append("- **IP Addresses:**\n")
            out.extend(f"  - {ip}\n" for ip in target.ip_addresses)
        if target.subdomains:
            out.append("- **Subdomains:**\n")
            out.extend(f"  - {sub}\n" for sub in target.subdomains)
        out.append("\n")

        by_type: dict[str, list[ScanResult]] = {}
        for result in self.results.items:
            by_type.setdefault(result.type, []).append(result)

        def entries(items: list[ScanResult]) -> None:
            for item in items:
                out.append(f"### {item.title}\n\n{item.description}\n\n")

        for kind, heading in (
            ("whois", "WHOIS Information"),
            ("dns", "DNS Information"),
            ("ssl", "SSL/TLS Certificate Information"),
        ):
            if kind in by_type:
                out.append(f"## {heading}\n\n")
                entries(by_type[kind])

        if "subdomain" in by_type:
            out.append("## Subdomain Enumeration\n\n")
            entries([r for r in by_type["subdomain"] if r.title == "Subdomain Enumeration"])

        if "portscan" in by_type:
            items = by_type["portscan"]
            out.append("## Port Scanning\n\n")
            entries([r for r in items if r.title == "Port Scan Summary"])
            out.append("### Open Ports\n\n| Port | Service |\n|------|--------|\n")
            for r in items:
                if r.title == "Open Port" and isinstance(r.data, Mapping):
                    out.append(f"| {r.data.get('port')} | {r.data.get('service')} |\n")
            out.append("\n")

        if "fingerprint" in by_type:
            items = by_type["fingerprint"]
            out.append("## Technology Fingerprinting\n\n")
            entries([r for r in items if r.title == "Technology Fingerprinting"])
            by_category: dict[str, list[ScanResult]] = {}
            for r in items:
                if r.title != "Technology Fingerprinting":
                    by_category.setdefault(r.title, []).append(r)
            for category, found in by_category.items():
                out.append(f"### {category}\n\n")
                out.extend(f"- {r.description}\n" for r in found)
                out.append("\n")

        if "vulnscan" in by_type:
            out.append("## Vulnerability Scanning\n\n")
            by_severity: dict[str, list[ScanResult]] = {}
            for r in by_type["vulnscan"]:
                if r.title != "Vulnerability Scan Summary":
                    by_severity.setdefault(r.category, []).append(r)
            for severity in _SEVERITIES:
                vulns = by_severity.get(severity)
                if vulns:
                    out.append(f"### {_capitalize(severity)} Severity\n\n")
                    for vuln in vulns:
                        out.append(f"#### {vuln.title}\n\n{vuln.description}\n\n")

        if "dirbrute" in by_type:
            items = by_type["dirbrute"]
            out.append("## Directory Brute Forcing\n\n")
            entries([r for r in items if r.title == "Directory Brute Forcing Summary"])
            out.append("### Discovered Paths\n\n| Path | Status Code |\n|------|------------|\n")
            for r in items:
                if r.title == "Directory/File Found" and isinstance(r.data, Mapping):
                    out.append(f"| {r.data.get('path')} | {r.data.get('status_code')} |\n")
            out.append("\n")

        out.append("## Summary\n\n")
        out.append(f"Total results: {self.results.count()}\n\n")
        return "".join(out)

    def generate_html(self) -> str:
        """Return an HTML page wrapping the Markdown report."""
        return _HTML_TEMPLATE.substitute(
            domain=self.target.domain, markdown=self.generate_markdown()
        )


def new_report_generator(results: Results) -> ReportGenerator:
    """Return a generator for results with a placeholder example.com target."""
    return ReportGenerator(parse_target("example.com"), results)