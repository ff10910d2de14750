"""Constants used through the app."""

import os
from datetime import UTC, datetime
from pathlib import Path

# Directories
_env_instance_dir = os.getenv("INSTANCE_DIR")
INSTANCE_DIR = Path(_env_instance_dir) if _env_instance_dir else Path.cwd() / "instance"

DATABASE_FILE = INSTANCE_DIR / "arrmap.db"
SETTINGS_FILE = INSTANCE_DIR / "config.json"

# Timezone, used for display only. Everything stored is UTC.
OUR_TIMEZONE = datetime.now().astimezone().tzinfo or UTC

# API
API_V1_STR = "/api/v1"

# Config
ENV_PREFIX = "ARRMAP_"
