"""Command-line interface for release-maker."""

from __future__ import annotations

from release_maker.cli.app import app, main

__all__ = ["app", "main"]
