# sitemap_service/__init__.py
"""
SitemapService package initializer.
Defines package version and exposes the CLI group as ``main_cli``.
"""
__version__ = "0.1.0"

# The submodule keeps its name; the click group is exported under an alias
from sitemap_service.cli import cli as main_cli
