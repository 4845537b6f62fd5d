"""Project-wide settings and defaults."""

import os
from pathlib import Path

# Base paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Store location (empty = platform config directory)
BLAND_CONFIG_DIR = os.environ.get("BLAND_CONFIG_DIR", "")

# File naming: <root>/<namespace>-<suffix>/<base>.<extension>
DEFAULT_SUFFIX = os.environ.get("BLAND_SUFFIX", "rs")
DEFAULT_BASE_NAME = os.environ.get("BLAND_BASE_NAME", "config")
DEFAULT_EXTENSION = os.environ.get("BLAND_EXTENSION", "json")

# Storage transforms
BLAND_PRETTY = os.environ.get("BLAND_PRETTY", "false").lower() == "true"
BLAND_COMPRESS = os.environ.get("BLAND_COMPRESS", "false").lower() == "true"
BLAND_ENCRYPTION_KEY = os.environ.get("BLAND_ENCRYPTION_KEY", "")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
