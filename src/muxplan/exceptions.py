"""Exceptions raised by the mux plan compiler.

Compilation has exactly one checked failure, InvalidInputError. Every
other edge case degrades to a reduced plan with warnings.
"""


class MuxPlanError(Exception):
    """Base exception for muxplan errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(MuxPlanError):
    """Raised when probe data is missing or malformed.

    This is fatal: no partial plan is produced. Callers are expected to
    fall back to a safe default (e.g. stream copy) for the affected file.
    """

    def __init__(self, message: str, source_path: str | None = None) -> None:
        """Initialize invalid input error.

        Args:
            message: Human-readable error description.
            source_path: File identifier the probe data belongs to, if known.
        """
        self.source_path = source_path
        if source_path:
            message = f"{message} ({source_path})"
        super().__init__(message)


class ConfigError(MuxPlanError):
    """Raised when the configuration file cannot be parsed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)
