"""Building blocks for HTTP handlers: paths, run mode, responses, logging, proxies and routing helpers."""

__version__ = "0.1.0"