"""Exit codes for muxplan CLI commands.

Ranges: 1-9 general, 10-19 invalid policy/config/probe input, 20-29
missing files.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1  # uncaught exception (click's default)

    POLICY_VALIDATION_ERROR = 10
    CONFIG_ERROR = 11  # unreadable or invalid config.toml
    INVALID_INPUT = 12  # malformed probe report, no plan produced

    TARGET_NOT_FOUND = 20  # policy file missing
