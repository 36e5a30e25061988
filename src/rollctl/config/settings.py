"""Unified settings: env vars and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: passed by the CLI or by tests
  2. Env vars: ``ROLLCTL_*`` prefix, ``__`` for nested sections
  3. TOML file: ``rollctl.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

The command line deliberately carries no seeding, output-format or
verbosity flags; those knobs live here.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from rollctl.config.discovery import find_config
from rollctl.config.models import RollConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``rollctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RollSettings(BaseSettings):
    """Unified settings for the rollctl CLI.

    Frozen after construction and stored on the :class:`AppContext`.

    Attributes:
        config_path: The TOML file that was loaded, or None.
        json_output: Emit the full result as JSON instead of text.
        verbose: Debug logging, telemetry, and per-die listings.
        log_json: Structured JSON log lines on stderr.
        roll: ``[roll]`` section (seed, dice limit).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ROLLCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    roll: RollConfig = Field(default_factory=RollConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> RollSettings:
        """Construct settings for one invocation.

        Uses an explicit *config_path* when given, otherwise discovers
        ``rollctl.toml`` by walking up from *start* (default: cwd).
        *overrides* win over every other source.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
