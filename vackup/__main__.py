#!/usr/bin/env python3
"""Allow `python -m vackup`."""

from .cli.main import cli_main

if __name__ == "__main__":
    cli_main()
