"""Command line entry point: ``python -m docuflow.cli``."""

from .app import main

__all__ = ["main"]
