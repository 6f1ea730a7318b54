"""
CLI Package
===========

Command-line interface layer of the EPG validator.

Modules:
- CommandParser: Argument parsing
- OutputFormatter: Console output formatting
"""

from .command_parser import CommandParser
from .output_formatter import OutputFormatter

__all__ = [
    'CommandParser',
    'OutputFormatter',
]
