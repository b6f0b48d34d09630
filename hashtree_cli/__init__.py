"""
hashtree CLI

Command-line interface for building and verifying Merkle roots.

Usage:
    python -m hashtree_cli build a.txt b.txt c.txt
    python -m hashtree_cli verify --root 0x... a.txt b.txt c.txt
    python -m hashtree_cli show --lines blocks.txt
    python -m hashtree_cli config --init
"""

__version__ = "0.1.0"
