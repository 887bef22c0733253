import socket
from unittest.mock import patch

import pytest

from webrecon.ports import PortScanError, PortScanner, service_name
from webrecon.results import Results
from webrecon.target import parse_target


@pytest.fixture
def listener():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(8)
    yield server.getsockname()[1]
    server.close()


def _closed_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.mark.parametrize(
    "port, name",
    [
        (21, "FTP"),
        (22, "SSH"),
        (443, "HTTPS"),
        (587, "SMTP (Submission)"),
        (5432, "PostgreSQL"),
        (8443, "HTTPS (Alternate)"),
        (12345, "Unknown"),
    ],
)
def test_service_name(port, name):
    assert service_name(port) == name


def test_default_range_and_concurrency():
    scanner = PortScanner(parse_target("127.0.0.1"), Results(), 0)
    assert (scanner.start_port, scanner.end_port) == (1, 1024)
    assert scanner.concurrency == 100


@pytest.mark.parametrize("start, end", [(0, 10), (20, 10), (1, 65536), (-5, 5)])
def test_invalid_port_range_is_ignored(start, end):
    scanner = PortScanner(parse_target("127.0.0.1"), Results())
    scanner.set_port_range(start, end)
    assert (scanner.start_port, scanner.end_port) == (1, 1024)


def test_valid_port_range_is_applied():
    scanner = PortScanner(parse_target("127.0.0.1"), Results())
    scanner.set_port_range(80, 65535)
    assert (scanner.start_port, scanner.end_port) == (80, 65535)


def test_scan_finds_open_port(listener):
    results = Results()
    target = parse_target("127.0.0.1")
    scanner = PortScanner(target, results, 4, timeout=1.0)
    scanner.set_port_range(listener, listener)

    info = scanner.scan()

    assert info.open_ports == {listener: service_name(listener)}
    assert target.ip_addresses == ["127.0.0.1"]
    assert info.end_time >= info.start_time
    open_results = [r for r in results.get_by_type("portscan") if r.title == "Open Port"]
    assert len(open_results) == 1
    assert open_results[0].data["port"] == listener
    assert open_results[0].data["ip"] == "127.0.0.1"
    summary = results.items[-1]
    assert summary.title == "Port Scan Summary"
    assert summary.description == "Found 1 open ports on 127.0.0.1"
    assert summary.data is info


def test_scan_closed_port_reports_nothing_open():
    port = _closed_port()
    results = Results()
    scanner = PortScanner(parse_target("127.0.0.1"), results, 2, timeout=1.0)
    scanner.set_port_range(port, port)

    info = scanner.scan()

    assert info.open_ports == {}
    assert [r.title for r in results.items] == ["Port Scan Summary"]


def test_scan_uses_known_ip_without_resolving(listener):
    target = parse_target("localhost")
    target.add_ip_address("127.0.0.1")
    scanner = PortScanner(target, Results(), 1, timeout=1.0)
    scanner.set_port_range(listener, listener)

    with patch("socket.getaddrinfo", side_effect=AssertionError("resolved")):
        info = scanner.scan()

    assert listener in info.open_ports


def test_scan_fails_when_resolution_fails():
    scanner = PortScanner(parse_target("nowhere.invalid"), Results())
    with patch("socket.getaddrinfo", side_effect=socket.gaierror("no such host")):
        with pytest.raises(PortScanError, match="failed to resolve domain"):
            scanner.scan()


def test_scan_fails_without_ipv4_address():
    results = Results()
    scanner = PortScanner(parse_target("v6only.invalid"), results)
    entries = [(socket.AF_INET6, socket.SOCK_STREAM, 6, "", ("2001:db8::1", 0, 0, 0))]
    with patch("socket.getaddrinfo", return_value=entries):
        with pytest.raises(PortScanError, match="no IP addresses found for target"):
            scanner.scan()
    assert results.count() == 0