import json

import pytest

from webrecon.report import ReportError, ReportFormat, ReportGenerator, new_report_generator
from webrecon.results import Results
from webrecon.target import parse_target


@pytest.fixture
def target():
    t = parse_target("www.example.com")
    t.add_ip_address("192.0.2.1")
    t.add_subdomain("mail.example.com")
    return t


@pytest.fixture
def results():
    r = Results()
    r.add("whois", "info", "WHOIS Information", "WHOIS information for www.example.com")
    r.add("portscan", "info", "Open Port", "Port 80 open", {"port": 80, "service": "HTTP"})
    r.add("portscan", "info", "Port Scan Summary", "Found 1 open ports on www.example.com")
    r.add("fingerprint", "info", "Web Server", "Web server: nginx", "nginx")
    r.add("fingerprint", "info", "Technology Fingerprinting", "Technology stack for www.example.com")
    r.add("vulnscan", "medium", "Missing X-Frame-Options Header", "frame text")
    r.add("vulnscan", "high", "TRACE Method Enabled", "trace text")
    r.add("vulnscan", "info", "Vulnerability Scan Summary", "Found 2 vulnerabilities")
    r.add("dirbrute", "low", "Directory/File Found", "Found /admin", {"path": "/admin", "status_code": 200})
    r.add("dirbrute", "info", "Directory Brute Forcing Summary", "Found 1 paths on www.example.com")
    return r


def test_markdown_target_section(target, results):
    md = ReportGenerator(target, results).generate_markdown()
    assert md.startswith("# Web Reconnaissance Report for www.example.com\n\n")
    assert "- **Domain:** www.example.com\n" in md
    assert "- **Base Domain:** example.com\n" in md
    assert "- **IP Addresses:**\n  - 192.0.2.1\n" in md
    assert "- **Subdomains:**\n  - mail.example.com\n" in md


def test_markdown_tables(target, results):
    md = ReportGenerator(target, results).generate_markdown()
    assert "| 80 | HTTP |\n" in md
    assert "| /admin | 200 |\n" in md
    assert "### Port Scan Summary\n\nFound 1 open ports on www.example.com\n\n" in md
    assert md.index("## Port Scanning") < md.index("## Technology Fingerprinting")
    assert md.index("## Technology Fingerprinting") < md.index("## Vulnerability Scanning")
    assert md.index("## Vulnerability Scanning") < md.index("## Directory Brute Forcing")


def test_markdown_fingerprint_categories(target, results):
    md = ReportGenerator(target, results).generate_markdown()
    assert "### Web Server\n\n- Web server: nginx\n\n" in md


def test_markdown_vulnerabilities_by_severity(target, results):
    md = ReportGenerator(target, results).generate_markdown()
    assert "### High Severity\n\n#### TRACE Method Enabled\n\ntrace text\n\n" in md
    assert md.index("### High Severity") < md.index("### Medium Severity")
    assert "Vulnerability Scan Summary" not in md
    assert "### Info Severity" not in md


def test_markdown_summary_counts_results(target, results):
    md = ReportGenerator(target, results).generate_markdown()
    assert md.endswith(f"## Summary\n\nTotal results: {results.count()}\n\n")


def test_markdown_skips_absent_sections(target):
    md = ReportGenerator(target, Results()).generate_markdown()
    assert "## DNS Information" not in md
    assert "## Port Scanning" not in md
    assert md.endswith("Total results: 0\n\n")


def test_json_round_trip(target, results):
    data = json.loads(ReportGenerator(target, results).generate_json())
    assert data["summary"]["total_results"] == results.count()
    assert data["target"]["domain"] == "www.example.com"
    assert data["target"]["ip_addresses"] == ["192.0.2.1"]
    assert [item["title"] for item in data["results"]] == [r.title for r in results]
    assert data["results"][1]["data"] == {"port": 80, "service": "HTTP"}


def test_html_wraps_markdown(target, results):
    generator = ReportGenerator(target, results)
    html = generator.generate_html()
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Web Reconnaissance Report for www.example.com</title>" in html
    assert "width: 100%;" in html
    assert "| 80 | HTTP |" in html


def test_generate_appends_extension(tmp_path, target, results):
    generator = ReportGenerator(target, results, tmp_path / "report", ReportFormat.JSON)
    path = generator.generate()
    assert path == str(tmp_path / "report.json")
    data = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert data["summary"]["total_results"] == results.count()


def test_generate_keeps_correct_extension(tmp_path, target, results):
    generator = ReportGenerator(target, results, tmp_path / "report.md", ReportFormat.MARKDOWN)
    path = generator.generate()
    assert path == str(tmp_path / "report.md")
    assert (tmp_path / "report.md").read_text(encoding="utf-8").startswith("# Web Reconnaissance")


def test_generate_rejects_unknown_format(tmp_path, target, results):
    generator = ReportGenerator(target, results, tmp_path / "report", "pdf")
    with pytest.raises(ReportError, match="unsupported format: pdf"):
        generator.generate()
    assert list(tmp_path.iterdir()) == []


def test_new_report_generator_uses_example_target(results):
    generator = new_report_generator(results)
    assert generator.target.domain == "example.com"
    assert generator.generate_markdown().startswith("# Web Reconnaissance Report for example.com")