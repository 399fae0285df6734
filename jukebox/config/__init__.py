"""Configuration module -- exports Settings and load_config."""

from jukebox.config.loader import load_config
from jukebox.config.settings import Settings

__all__ = ["Settings", "load_config"]
