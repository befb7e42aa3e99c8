"""CLI package exports for the top-level command entry point."""

from __future__ import annotations

from .main import main

__all__ = ['main']
