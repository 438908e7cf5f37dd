"""Common literal values used across sitenav.

These constants keep the default configuration location and environment
variable names in one place so the CLI, snapshot holders, and tests agree.

Examples
--------
>>> from sitenav import _constants
>>> str(_constants.DEFAULT_CONFIG_PATH)
'.vuepress/config.yaml'
"""

from pathlib import Path

DEFAULT_CONFIG_PATH = Path(".vuepress/config.yaml")
CONFIG_ENV_VAR = "SITENAV_CONFIG"
CONTENT_DIR_ENV_VAR = "SITENAV_CONTENT_DIR"
