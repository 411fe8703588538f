#!/usr/bin/env python3

"""Importer settings with environment variable overrides."""

import os
from typing import Any

ENV_PREFIX = "DWARF1_"

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    # Name of the ELF section holding DWARF v1 entries
    "DEBUG_SECTION": ".debug",
    # Added to every raw address read from the debug section
    "IMAGE_BASE": 0,
    # Program model behaviour
    "ALLOW_DUPLICATE_NAMES": False,
    "FORCE_SIGNATURE_UPDATE": True,
    # Import file-static subroutines in addition to global ones
    "IMPORT_STATIC_SUBROUTINES": True,
    # Progress line every N subroutines (0 disables)
    "PROGRESS_INTERVAL": 1000,
}


def get_config() -> dict[str, Any]:
    """Get configuration with environment variable overrides.

    Every key can be overridden with ``DWARF1_<KEY>``. Integer values accept
    any base Python understands (``0x8000`` for instance); unparsable values
    keep the default.

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key, default in DEFAULT_CONFIG.items():
        env_value = os.getenv(f"{ENV_PREFIX}{key}")
        if env_value is None:
            continue

        if isinstance(default, bool):
            config[key] = env_value.lower() in ("true", "1", "yes", "on")
        elif isinstance(default, int):
            try:
                config[key] = int(env_value, 0)
            except ValueError:
                pass
        else:
            config[key] = env_value

    return config
