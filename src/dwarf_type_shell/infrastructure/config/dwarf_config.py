#!/usr/bin/env python3

"""Tunables for the type loader, layout calculator and shell."""

import os
from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    # Loader
    "POINTER_SIZE": 0,  # 0 = use the DWARF address size
    "LOAD_TYPE_UNITS": True,

    # Layout
    "MAX_LAYOUT_DEPTH": 64,

    # Shell
    "HISTORY_LENGTH": 1000,
    "PROMPT": ">> ",
}


def get_config() -> dict[str, Any]:
    """Get configuration with ``DWARF_<KEY>`` environment variable overrides.

    Overrides that do not parse as the default's type are ignored.

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key, default in DEFAULT_CONFIG.items():
        env_value = os.getenv(f"DWARF_{key}")
        if env_value is None:
            continue

        if isinstance(default, bool):
            config[key] = env_value.lower() in ("true", "1", "yes", "on")
        elif isinstance(default, int):
            try:
                config[key] = int(env_value)
            except ValueError:
                pass
        else:
            config[key] = env_value

    return config
