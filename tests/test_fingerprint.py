import pytest
import responses

from webrecon.fingerprint import (
    FingerprintError,
    FingerprintScanner,
    TechInfo,
    guess_operating_system,
)
from webrecon.results import Results
from webrecon.target import parse_target


@pytest.fixture
def scanner():
    return FingerprintScanner(parse_target("example.com"), Results())


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.mark.parametrize(
    "server, expected",
    [
        ("Microsoft-IIS/10.0 (Windows)", "Windows"),
        ("Apache/2.4.41 (Ubuntu)", "Linux"),
        ("nginx (CentOS)", "Linux"),
        ("Apache (Darwin)", "macOS"),
        ("nginx", ""),
    ],
)
def test_guess_operating_system(server, expected):
    assert guess_operating_system(server) == expected


def test_analyze_empty_body_detects_nothing(scanner):
    info = TechInfo(target="example.com")
    scanner.analyze("<html></html>", info)
    assert info.programming_languages == []
    assert info.frameworks == []
    assert info.cms == ""
    assert info.javascript_libraries == []
    assert info.analytics == []
    assert scanner.results.count() == 0


def test_analyze_wordpress_with_versioned_jquery(scanner):
    info = TechInfo(target="example.com")
    body = '<script src="/wp-content/js/jquery-3.6.0.min.js"></script>'
    scanner.analyze(body, info)
    assert info.cms == "WordPress"
    assert info.javascript_libraries == ["jQuery 3.6.0"]
    titles = [r.title for r in scanner.results.items]
    assert titles == ["CMS", "JavaScript Library"]
    assert scanner.results.items[0].description == "WordPress detected"


def test_analyze_unversioned_jquery(scanner):
    info = TechInfo(target="example.com")
    scanner.analyze("<script src=jquery.min.js>", info)
    assert info.javascript_libraries == ["jQuery"]


def test_last_cms_wins(scanner):
    info = TechInfo(target="example.com")
    scanner.analyze("Joomla and Drupal", info)
    assert info.cms == "Drupal"
    assert [r.data for r in scanner.results.get_by_type("fingerprint")] == ["Joomla", "Drupal"]


def test_languages_from_headers(scanner):
    info = TechInfo(target="example.com")
    info.headers["x-powered-by"] = "Servlet 4.0; Express"
    info.headers["X-AspNet-Version"] = "4.0"
    scanner.analyze("", info)
    assert info.programming_languages == ["ASP.NET", "Java"]
    assert info.frameworks == ["Express.js"]


def test_analytics_detection(scanner):
    info = TechInfo(target="example.com")
    scanner.analyze("www.google-analytics.com/analytics.js piwik.js", info)
    assert info.analytics == ["Google Analytics", "Matomo/Piwik"]
    assert all(r.category == "info" for r in scanner.results.items)


def test_scan_over_https(scanner, mocked):
    mocked.add(
        responses.HEAD,
        "https://example.com/",
        headers={"Server": "Apache/2.4 (Debian)", "X-Powered-By": "PHP/8.1"},
    )
    mocked.add(responses.GET, "https://example.com/", body="<p>Django site</p>")

    info = scanner.scan()

    assert info.web_server == "Apache/2.4 (Debian)"
    assert info.operating_system == "Linux"
    assert info.headers["x-powered-by"] == "PHP/8.1"
    assert info.programming_languages == ["PHP"]
    assert info.frameworks == ["Django"]
    items = scanner.results.items
    assert items[0].title == "Web Server"
    assert items[0].description == "Web server: Apache/2.4 (Debian)"
    assert items[-1].title == "Technology Fingerprinting"
    assert items[-1].description == "Technology stack for example.com"
    assert items[-1].data is info


def test_scan_falls_back_to_http(scanner, mocked):
    mocked.add(responses.HEAD, "http://example.com/", headers={"Server": "nginx"})
    mocked.add(responses.GET, "http://example.com/", body="Vue app")

    info = scanner.scan()

    assert info.web_server == "nginx"
    assert info.javascript_libraries == ["Vue.js"]


def test_scan_survives_body_failure(scanner, mocked):
    mocked.add(responses.HEAD, "https://example.com/")
    mocked.add(responses.GET, "https://example.com/", status=500, body="Ruby")

    info = scanner.scan()

    assert info.programming_languages == []
    assert [r.title for r in scanner.results.items] == ["Technology Fingerprinting"]


def test_scan_fails_when_unreachable(scanner, mocked):
    with pytest.raises(FingerprintError, match="failed to get headers"):
        scanner.scan()
    assert scanner.results.count() == 0