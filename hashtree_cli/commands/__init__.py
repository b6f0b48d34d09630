"""
CLI command modules.
"""

from hashtree_cli.commands import build, show, verify

__all__ = ["build", "show", "verify"]
