# Path: ikea_api/cli/__init__.py
"""
Catalog CLI Module

Command-line interface for searches and downloads.
"""

from ikea_api.cli.catalog_cli import build_parser, main, run

__all__ = ['build_parser', 'main', 'run']
