from __future__ import annotations

import os

# Playback cadence (milliseconds per step)
SPEED_PRESETS = {
    "slow": 1000,    # teaching mode
    "medium": 400,
    "fast": 150,     # demo mode
    "turbo": 50,
}
DEFAULT_SPEED_MS = SPEED_PRESETS["medium"]
MIN_SPEED_MS = 20

# Input guard rails: traces are built eagerly, keep them bounded
MAX_INPUT_SIZE = 500
MAX_KNAPSACK_CAPACITY = 1000

# Snapshot schema
SNAPSHOT_VERSION = 1

# Logging
LOG_LEVEL = os.environ.get("ALGOTRACE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
