"""Typed application context and factory for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from pydantic import ValidationError
from pydantic_settings import SettingsError
from rich.console import Console

from dndref.cli.console import console as _console
from dndref.cli.console import err_console as _err_console
from dndref.cli.console import print_note
from dndref.cli.exceptions import ConfigError
from dndref.cli.utils import handle_validation_error
from dndref.client.fetcher import ReferenceFetcher
from dndref.models.config import Config
from dndref.services.tester import UpstreamTester

__all__ = ["AppContext", "get_app_context", "load_config"]

_CONFIG_HINT = "Hint: Check the DNDREF_* variables in your environment or .env file."


@dataclass(frozen=True)
class AppContext:
    """Typed container for shared CLI dependencies."""

    config: Config
    fetcher: ReferenceFetcher
    tester: UpstreamTester
    console: Console = field(default_factory=lambda: _console)
    err_console: Console = field(default_factory=lambda: _err_console)


def load_config() -> Config:
    """Load settings, rendering validation errors per field before failing."""
    try:
        return Config()  # type: ignore[call-arg]
    except ValidationError as e:
        handle_validation_error(e)
        print_note(_CONFIG_HINT)
        raise ConfigError("Configuration validation failed.") from e
    except SettingsError as e:
        # Raised before validation, e.g. DNDREF_UPSTREAMS that is not a JSON list.
        print_note(_CONFIG_HINT)
        raise ConfigError(f"Configuration could not be parsed: {e}") from e


@contextmanager
def get_app_context() -> Iterator[AppContext]:
    """Build the fetcher and tester from the current settings."""
    config = load_config()
    yield AppContext(
        config=config,
        fetcher=ReferenceFetcher(
            upstreams=config.upstreams,
            timeout=config.timeout,
            user_agent=config.user_agent,
        ),
        tester=UpstreamTester(timeout=config.timeout, user_agent=config.user_agent),
        console=_console,
        err_console=_err_console,
    )
