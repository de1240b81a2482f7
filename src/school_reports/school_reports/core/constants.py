"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_ARRIVAL_CUTOFF = time(8, 0)
DEFAULT_REPORTING_TIMEZONE = "America/Lima"

ARRIVAL_CUTOFF_CONFIG_KEY = "arrival_cutoff_time"

TOP_FAULTS_LIMIT = 5
MAX_REINCIDENCE_LEVEL = 4
MIN_RESOLUTION_REASON_LENGTH = 10

GROUP_LABEL_SEPARATOR = " • "
