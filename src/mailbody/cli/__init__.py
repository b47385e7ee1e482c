"""
CLI module for message body parsing.

Provides command-line tools for batch processing and testing.
"""

from mailbody.cli.parse import main as parse_main

__all__ = ["parse_main"]
