# src/hybridscaler/cli/__init__.py
"""
Hybrid scaler CLI package.

Exposes the top-level Typer `app` for the console entry point and tests.
"""

from .main import app

__all__ = ["app"]
