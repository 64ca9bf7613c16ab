#!/usr/bin/env python3
"""
IKEA API Client - Main CLI Entry Point

Search the catalog and download product metadata, thumbnails and 3D
models into the local cache.

Usage:
    python main.py search poang
    python main.py model 003.467.35

    # Or with direct execution
    ./main.py --help
"""

import sys

from ikea_api.cli.catalog_cli import main


if __name__ == '__main__':
    sys.exit(main())
