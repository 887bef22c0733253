"""Command-line entry point that runs every scanner and writes the reports."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from webrecon.dirbrute import DirBruteError, new_directory_scanner
from webrecon.dnsrecon import DNSScanner
from webrecon.fingerprint import FingerprintError, FingerprintScanner
from webrecon.httpclient import HTTPRequestError
from webrecon.ports import PortScanError, PortScanner
from webrecon.report import ReportError, new_report_generator
from webrecon.results import Results
from webrecon.target import TargetError, parse_target
from webrecon.vulnscan import VulnScanner
from webrecon.whois import WhoisError, WhoisScanner

OUTPUT_DIR = "results"
PORT_SCAN_CONCURRENCY = 100
DIRECTORY_SCAN_CONCURRENCY = 10


def _run_step(
    announce: str,
    failure: str,
    success: str,
    step: Callable[[], object],
    errors: tuple[type[BaseException], ...],
) -> None:
    print(f"[*] {announce}...")
    try:
        step()
    except errors as exc:
        print(f"[-] {failure} error: {exc}")
    else:
        print(f"[+] {success} completed")


def _write_report(label: str, path: str, render: Callable[[], str]) -> None:
    try:
        content = render()
    except ReportError as exc:
        print(f"[-] {label} report generation error: {exc}")
        return
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as exc:
        print(f"[-] Failed to write {label} report: {exc}")
        return
    print(f"[+] {label} report saved to {path}")


def main(argv: Sequence[str] | None = None) -> int:
    """Scan the target named on the command line and save the reports."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: webrecon <target>")
        print("Example: webrecon www.example.com")
        return 1

    target_url = args[0]
    print(f"Starting WebRecon scan on target: {target_url}")
    print("This may take some time depending on the target website...")

    output_dir = OUTPUT_DIR
    try:
        os.makedirs(output_dir, mode=0o755, exist_ok=True)
    except OSError as exc:
        print(f"Failed to create output directory: {exc}")
        return 1

    try:
        target = parse_target(target_url)
    except TargetError as exc:
        print(f"Failed to initialize target: {exc}")
        return 1

    results = Results()
    started = time.monotonic()

    print("\n[+] Running reconnaissance modules...")
    _run_step(
        "Performing WHOIS lookup",
        "WHOIS lookup",
        "WHOIS lookup",
        WhoisScanner(target, results).scan,
        (WhoisError,),
    )
    _run_step(
        "Gathering DNS information",
        "DNS information gathering",
        "DNS information gathering",
        DNSScanner(target, results).scan,
        (OSError,),
    )

    print("\n[+] Running scanning modules...")
    _run_step(
        "Scanning ports",
        "Port scanning",
        "Port scanning",
        PortScanner(target, results, PORT_SCAN_CONCURRENCY).scan,
        (PortScanError,),
    )
    _run_step(
        "Fingerprinting technologies",
        "Technology fingerprinting",
        "Technology fingerprinting",
        FingerprintScanner(target, results).scan,
        (FingerprintError,),
    )
    _run_step(
        "Scanning for vulnerabilities",
        "Vulnerability scanning",
        "Vulnerability scanning",
        VulnScanner(target, results).scan,
        (HTTPRequestError,),
    )
    _run_step(
        "Brute forcing directories",
        "Directory brute forcing",
        "Directory brute forcing",
        new_directory_scanner(target, results, DIRECTORY_SCAN_CONCURRENCY).scan,
        (DirBruteError,),
    )

    print("\n[+] Generating reports...")
    duration = time.monotonic() - started
    generator = new_report_generator(results)
    _write_report("Markdown", f"{output_dir}/report.md", generator.generate_markdown)
    _write_report("JSON", f"{output_dir}/report.json", generator.generate_json)

    print(f"\n[+] Scan completed in {duration:.3f}s")
    print(f"[+] Results saved to {output_dir} directory")
    return 0


if __name__ == "__main__":
    sys.exit(main())