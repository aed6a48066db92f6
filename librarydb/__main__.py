#!/usr/bin/env python3
"""
Run the catalog CLI as ``python -m librarydb``.
"""
from librarydb.database.cli import cli

if __name__ == "__main__":
    cli(obj={})
