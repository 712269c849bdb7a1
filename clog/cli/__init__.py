"""
Demo command line.
"""

from clog.cli.config import parse_arguments

__all__ = ['parse_arguments']
