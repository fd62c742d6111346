"""Validators, membership checks, unit transforms and help-text string tools for command-line values."""

__version__ = "0.1.0"
__all__ = ["formatting", "membership", "strings", "validators"]