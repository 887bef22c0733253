"""Web reconnaissance scanners with Markdown, JSON and HTML reporting."""

__version__ = "1.0.0"