#!/usr/bin/env python3
"""Fetch a page and pretty-print its headers."""

__pyproject__ = """
[project]
name = "fetch-headers"
version = "0.3.0"
requires-python = ">=3.11"
dependencies = [
    "httpx>=0.27",  # http client
    "rich",
]

[tool.uv]
exclude-newer = "2024-06-01T00:00:00Z"

# long text goes in single-quoted strings
[tool.fetch-headers]
banner = '''
Fetching headers...
'''
"""

import sys

import httpx
from rich import print


def main(url: str) -> None:
    response = httpx.head(url)
    print(dict(response.headers))


if __name__ == "__main__":
    main(sys.argv[1])
