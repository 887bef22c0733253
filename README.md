# webrecon

A reconnaissance scanner for websites. Give it a host name or URL. It gathers
information about the target and writes Markdown and JSON reports.

Scan only hosts that you are authorised to test.

## Installation

```
pip install .
```

## Command-line use

```
webrecon www.example.com
```

The only argument is the target: a bare host name or a URL. Without a scheme,
`https://` is assumed. The command runs these steps in order:

1. **WHOIS lookup** (`webrecon.whois`): fetches the lookup page for the domain
   and extracts the registrar, creation date, registry expiry date and name
   servers.
2. **DNS information** (`webrecon.dnsrecon`): A and AAAA addresses, plus MX,
   NS, TXT and CNAME records. IPv4 addresses are stored on the target.
3. **Port scanning** (`webrecon.ports`): a TCP connect scan of ports 1–1024 on
   the target's first IPv4 address, with 100 workers. Common ports are labelled
   with their usual service.
4. **Technology fingerprinting** (`webrecon.fingerprint`): web server, an
   operating-system guess from the `Server` header, and languages, frameworks,
   CMS, JavaScript libraries and analytics found in the page body and headers.
5. **Vulnerability checks** (`webrecon.vulnscan`): missing security headers,
   `Server` version disclosure, `TRACE`/`PUT`/`DELETE` in `Allow` or `Public`,
   HTTPS not available, and a list of common admin paths that do not answer 404.
6. **Directory discovery** (`webrecon.dirbrute`): every line of
   `wordlists/directories.txt`, relative to the working directory, is
   requested as a path with 10 workers. Every response other than 404 is
   recorded.

If a step fails, the command prints the error and goes on to the next step.
When it finishes, it writes:

- `results/report.md`: a readable report grouped by section.
- `results/report.json`: the target, every finding with its type, category,
  title, description, data and timestamp, and a summary.

The command exits with status 1 when no target is given, when the target
cannot be parsed, or when the `results/` directory cannot be created.

## Using it as a library

The scanners share a `Target`, made by `webrecon.target.parse_target`, and a
thread-safe `webrecon.results.Results` collection:

```python
from webrecon.target import parse_target
from webrecon.results import Results
from webrecon.ports import PortScanner
from webrecon.report import ReportGenerator, ReportFormat

target = parse_target("www.example.com")
results = Results()

scanner = PortScanner(target, results, 100)
scanner.set_port_range(1, 100)
scanner.scan()

generator = ReportGenerator(target, results, "scan", ReportFormat.HTML)
print(generator.generate())  # writes scan.html and returns the path
```

Each finding has a category: `info`, `low`, `medium`, `high` or `critical`.
`Results.get_by_category` filters findings by category and
`Results.get_by_type` filters them by the step that produced them.

The library has these scanners that the command does not run:

- `webrecon.sslinfo.SSLScanner` retrieves the certificate on port 443. It
  reports the certificate, and also reports it when it is invalid, self-signed
  or expires within 30 days. `certificate_info` describes a DER-encoded
  certificate directly.
- `webrecon.subdomains.SubdomainScanner` resolves each word of a wordlist
  (default `wordlists/subdomains.txt`) as a subdomain of the base domain.

Some content checks are also available as plain functions:
`webrecon.whois.parse_whois`, `webrecon.fingerprint.guess_operating_system`,
`webrecon.vulnscan.header_findings` and `method_findings`,
`webrecon.ports.service_name` and `webrecon.dirbrute.category_for_status`.

`webrecon.logger.Logger` prints coloured, tagged messages.
`setup_file_logger` returns a logger that appends to a file.

## Limitations

- The command has no options. Threads, timeouts, port range, wordlists,
  output directory and report format can be set only through the library.
- The reports written by the command come from `new_report_generator`. That
  function uses a placeholder `example.com` target, so their title and target
  section name `example.com`, not the host that was scanned. Use
  `ReportGenerator` with your own target to get the right name.
- No wordlists are included. Directory discovery fails with an error unless
  `wordlists/directories.txt` exists.
- `webrecon.scanner.Scanner` only records one summary entry for each enabled
  stage. It does not run the scanners above.
- The HTML report puts the Markdown text inside a `<pre>` block. The Markdown
  is not converted to HTML.

## Running the tests

```
pip install .[test]
pytest
```