__all__ = [
    "CliError",
    "ConfigError",
    "FetchError",
]


class CliError(Exception):
    """Base exception for errors reported by the CLI."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ConfigError(CliError):
    """Raised when the settings cannot be loaded."""


class FetchError(CliError):
    """Raised when a reference lookup cannot be satisfied."""
