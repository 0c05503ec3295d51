"""Configuration management for release-maker."""

from __future__ import annotations

from release_maker.config.loader import load_config
from release_maker.config.models import ReleaseMakerConfig

__all__ = [
    "ReleaseMakerConfig",
    "load_config",
]
