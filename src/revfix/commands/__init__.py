"""CLI command implementations for revfix.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .fix import apply, apply_all, dismiss, preview
from .init import init
from .reconcile import reconcile

__all__ = [
    "apply",
    "apply_all",
    "dismiss",
    "init",
    "preview",
    "reconcile",
]
