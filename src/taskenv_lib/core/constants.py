# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

# ----------------------------
# CONTEXT PREFIXES
# ----------------------------

# Prefix of project configuration entries
GLOBAL_PREFIX = "GLOBAL__"

# Prefix under which resolved task configuration is visible to hooks
TASK_PREFIX = "TASK__"


# ----------------------------
# INSTANCE DATA
# ----------------------------

# Time at which the instance was triggered
EXECUTION_TIME = "EXECUTION_TIME"

# Start of the data window of the instance
DSTART = "DSTART"

# End of the data window of the instance
DEND = "DEND"


# ----------------------------
# TIMESTAMPS
# ----------------------------

# Layout of timestamps passed to instances (RFC 3339, second precision)
TIMESTAMP_LAYOUT = "%Y-%m-%dT%H:%M:%S"

# Suffix used for UTC timestamps
UTC_SUFFIX = "Z"
