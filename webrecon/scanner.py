"""Scan engine that runs the configured stages against a target."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

from webrecon.results import Results
from webrecon.target import Target


class ScanError(RuntimeError):
    """Raised when a scan stage fails."""


@dataclass
class ScanOptions:
    """Which stages to run and how."""

    threads: int = 10
    timeout: float = 30.0
    subdomain_enum: bool = True
    port_scan: bool = True
    fingerprint: bool = True
    vuln_scan: bool = True
    dir_brute: bool = True
    wordlist: str = ""
    verbose: bool = False


class Scanner:
    """Runs reconnaissance and scanning stages and gathers their results."""

    def __init__(self, target: Target, options: ScanOptions | None = None) -> None:
        self.target = target
        self.options = options if options is not None else ScanOptions()
        self.results = Results()
        self._cancelled = threading.Event()

    @property
    def stopped(self) -> bool:
        """Whether stop() has been called."""
        return self._cancelled.is_set()

    def scan(self) -> None:
        """Run every enabled stage in order."""
        print(f"Starting scan on target: {self.target.domain}")
        started = time.monotonic()

        stages: list[tuple[bool, str, Callable[[], None]]] = [
            (True, "reconnaissance", self._reconnaissance),
            (self.options.port_scan, "port scanning", self._port_scan),
            (self.options.fingerprint, "fingerprinting", self._fingerprinting),
            (self.options.vuln_scan, "vulnerability scanning", self._vulnerability_scan),
            (self.options.dir_brute, "directory brute forcing", self._directory_brute_force),
        ]
        for enabled, name, stage in stages:
            if not enabled:
                continue
            try:
                stage()
            except Exception as exc:
                raise ScanError(f"{name} failed: {exc}") from exc

        elapsed = time.monotonic() - started
        print(f"Scan completed in {elapsed:.3f}s")
        print(f"Total results: {self.results.count()}")

    def stop(self) -> None:
        """Signal the scanner to stop."""
        self._cancelled.set()

    def _reconnaissance(self) -> None:
        print("Performing reconnaissance...")
        self.results.add("recon", "info", "Reconnaissance", "Basic reconnaissance performed")
        if self.options.subdomain_enum:
            print("Performing subdomain enumeration...")
            self.results.add(
                "recon", "info", "Subdomain Enumeration", "Subdomain enumeration performed"
            )

    def _port_scan(self) -> None:
        print("Performing port scanning...")
        self.results.add("portscan", "info", "Port Scanning", "Port scanning performed")

    def _fingerprinting(self) -> None:
        print("Performing technology fingerprinting...")
        self.results.add(
            "fingerprint",
            "info",
            "Technology Fingerprinting",
            "Technology fingerprinting performed",
        )

    def _vulnerability_scan(self) -> None:
        print("Performing vulnerability scanning...")
        self.results.add(
            "vulnscan", "info", "Vulnerability Scanning", "Vulnerability scanning performed"
        )

    def _directory_brute_force(self) -> None:
        print("Performing directory brute forcing...")
        self.results.add(
            "dirbrute", "info", "Directory Brute Forcing", "Directory brute forcing performed"
        )