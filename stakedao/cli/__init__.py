"""
stakedao command line interface.

Replays recorded governance call traces against the engine and inspects
effective configuration.
"""

from .main import cli, main

__all__ = ["main", "cli"]
