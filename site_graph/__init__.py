"""
SiteGraph package initializer.
Defines package version and exposes the crawl entry points and CLI.
"""
__version__ = "0.1.0"

from site_graph.scanner import crawl, start_crawl
from site_graph.cli import cli

__all__ = ["__version__", "crawl", "start_crawl", "cli"]
