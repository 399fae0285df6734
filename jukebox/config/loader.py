"""YAML configuration loader for per-upstream and per-cache overrides.

# --- CONFIGURATION HIERARCHY -------------------------------------------
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. Settings defaults   -- jukebox/config/settings.py
#   2. .env file / env vars -- read by Settings
#   3. config/config.yaml  -- per-name overrides of the limiter and cache
#                             defaults that Settings supplies
#
# Only the ``rate_limiters`` and ``caches`` sections are read; everything
# else (hosts, timeouts, log level) comes from Settings alone.
# ----------------------------------------------------------------------
"""

from pathlib import Path

import yaml

from jukebox.utils.errors import ConfigurationError

SECTIONS = ("rate_limiters", "caches")


def load_config(path: str = "config/config.yaml") -> dict:
    """Load the ``rate_limiters`` and ``caches`` sections of the YAML config.

    Args:
        path: Path to the YAML configuration file.  A missing file yields
              empty sections, so every upstream and cache uses the
              Settings defaults.

    Returns:
        ``{"rate_limiters": {...}, "caches": {...}}`` with each section
        mapping a name to its overrides.

    Raises:
        ConfigurationError: If the file is not valid YAML, is not a mapping,
            or has a section that is not a mapping of mappings.
    """
    config_path = Path(path)
    yaml_config: dict = {}
    if config_path.exists():
        with open(config_path) as f:
            try:
                yaml_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(message=f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(message=f"{path} must contain a mapping at top level")

    config: dict = {}
    for section in SECTIONS:
        entries = yaml_config.get(section) or {}
        if not isinstance(entries, dict) or not all(
            isinstance(value, dict) for value in entries.values()
        ):
            raise ConfigurationError(
                message=f"'{section}' in {path} must map each name to a mapping of overrides"
            )
        config[section] = entries
    return config
