"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs:   CLI flags passed by Click, or keyword overrides in tests
  2. Env vars:      ``GAVEL_*`` prefix, ``__`` for nested sections
  3. TOML file:     ``gavel.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Built once at process start and passed explicitly to the Store, the
FastAPI app factory, and the CLI context. Nothing reads it from a global.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from gavel.config.discovery import find_config
from gavel.config.models import (
    AuthConfig,
    BiddingConfig,
    DatabaseConfig,
    ServerConfig,
    SweepConfig,
)


class ConfigError(ValueError):
    """The config file exists but cannot be parsed."""


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``gavel.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class GavelSettings(BaseSettings):
    """Unified settings for the gavel server and CLI.

    Attributes:
        data_root: Directory holding ``.gavel/`` (parent of ``gavel.toml``,
            or CWD if no config found).
        config_path: The TOML file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GAVEL_",
        "env_nested_delimiter": "__",
    }

    data_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    bidding: BiddingConfig = Field(default_factory=BiddingConfig)
    sweep: SweepConfig = Field(default_factory=SweepConfig)

    _toml_path: ClassVar[Path | None] = None

    @property
    def db_path(self) -> Path:
        """Resolved SQLite file location."""
        if self.database.path is not None:
            path = self.database.path
            return path if path.is_absolute() else self.data_root / path
        return self.data_root / ".gavel" / "gavel.db"

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
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        data_root: Path | None = None,
        **overrides: Any,
    ) -> GavelSettings:
        """Construct settings for a CLI or server invocation.

        Discovers ``gavel.toml`` via walk-up (or explicit *config_path*),
        resolves *data_root* from the config file's parent directory,
        and merges *overrides* as highest-priority values.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(data_root)

        resolved_root = data_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                data_root=resolved_root,
                config_path=toml_path,
                **overrides,
            )
        finally:
            _tls.toml_path = None
