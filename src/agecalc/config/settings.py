"""Settings for one CLI invocation: flags, env vars and ``agecalc.toml``.

Sources in priority order:

1. CLI flags passed by Click
2. ``AGECALC_*`` env vars, ``__`` between section and key
3. the TOML file named by ``--config`` or found by :func:`find_config`
4. defaults on the section models
"""

from __future__ import annotations

import threading
import tomllib
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, TomlConfigSettingsSource

from agecalc.config.discovery import find_config
from agecalc.config.models import CalendarConfig, DisplayConfig

# The TOML path chosen by from_cli, read back while the sources are built.
_tls = threading.local()


class AgeSettings(BaseSettings):
    """Frozen settings held by the :class:`~agecalc.commands._context.AppContext`."""

    model_config = {
        "frozen": True,
        "env_prefix": "AGECALC_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_path = getattr(_tls, "toml_path", None)
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        search_root: Path | None = None,
        **cli_flags: Any,
    ) -> AgeSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* that is not a file means no TOML at all;
        without one, ``agecalc.toml`` is searched for from *search_root*.
        """
        if config_path:
            toml_path = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_path = find_config(search_root)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _tls.toml_path = None

    def resolve_timezone(self) -> tzinfo | None:
        """The configured zone, or None for the host's local zone."""
        name = self.calendar.timezone.strip()
        if not name:
            return None
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"Unknown timezone in [calendar] timezone: {name!r}"
            raise click.ClickException(msg) from exc
