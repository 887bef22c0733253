[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "webrecon"
version = "1.0.0"
description = "Web reconnaissance scanner: WHOIS, DNS, ports, fingerprinting, security checks and directory discovery with Markdown and JSON reports"
requires-python = ">=3.10"
keywords = [
    "reconnaissance",
    "security",
    "scanner",
    "dns",
    "whois",
    "port-scan",
    "fingerprinting",
    "tls",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: System :: Networking :: Monitoring",
]
dependencies = [
    "requests>=2.28",
    "dnspython>=2.3",
    "cryptography>=41",
    "termcolor>=2.3",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "responses>=0.23",
]

[project.scripts]
webrecon = "webrecon.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["webrecon"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
