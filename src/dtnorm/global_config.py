"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only patterns,
numeric anchors and environment variable names that many modules import.
"""

# Core Names
PROJECT_NAME = "dtnorm"
PACKAGE_NAME = "dtnorm"

# Patterns (moment-style tokens, rendered by pendulum)
# Wall-clock pattern compared by the zero-offset probe
CANONICAL_PATTERN = "YYYY-MM-DD HH:mm:ss"
# Restamps a value as UTC regardless of what offset it carried
UTC_STAMP_PATTERN = "YYYY-MM-DDTHH:mm:ss.SSS[Z]"

# OLE Automation dates
# Day 0 is 1899-12-30; 25569 days later is the Unix epoch
OADATE_EPOCH_DAYS = 25569
MS_PER_DAY = 24 * 3600 * 1000
MS_PER_MINUTE = 60 * 1000

# Environment
# Pins the host offset (e.g. "+08:00", "-0530", "Z" or "480") for every call
LOCAL_OFFSET_ENV = "DTNORM_LOCAL_OFFSET"
