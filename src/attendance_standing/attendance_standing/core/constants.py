"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Standing thresholds are NOT constants: they travel as a StandingThresholds value.
"""

PERIODS_PER_DAY = 6
RATE_DECIMALS = 1
MAX_REPORT_RANGE_DAYS = 365
DEFAULT_HISTORY_DAYS = 60
