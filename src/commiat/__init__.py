"""
Top-level package for commiat.

This package exposes the main CLI entry point via the
``commiat.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "1.4.0"
