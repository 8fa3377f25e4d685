"""BlogSettings: one frozen object built from CLI flags, env vars and TOML.

Highest priority first:

1. keyword arguments (the global CLI flags);
2. ``BLOGCTL_*`` environment variables, ``__`` between section and key
   (``BLOGCTL_METADATA__UTC_OFFSET=+00:00``);
3. the ``[content]``, ``[ids]`` and ``[metadata]`` tables of ``blogctl.toml``;
4. the defaults in :mod:`blogctl.config.models`.
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from blogctl.config.discovery import find_config, find_site_root
from blogctl.config.models import ContentConfig, IdsConfig, MetadataConfig

logger = logging.getLogger(__name__)


TOML_SECTIONS = ("content", "ids", "metadata")


class TomlSettingsSource(PydanticBaseSettingsSource):
    """The ``[content]``, ``[ids]`` and ``[metadata]`` tables of ``blogctl.toml``.

    Other top-level keys are dropped with a warning so a stray table (or a
    CLI flag written into the file) cannot fail settings validation.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._sections: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            import click

            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc

        for key, value in data.items():
            if key in TOML_SECTIONS and isinstance(value, dict):
                self._sections[key] = value
            else:
                logger.warning("Ignoring unknown key %r in %s", key, toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._sections.get(field_name), field_name, field_name in self._sections

    def __call__(self) -> dict[str, Any]:
        return dict(self._sections)


# The TOML path has to reach settings_customise_sources, which is a classmethod.
_tls = threading.local()


class BlogSettings(BaseSettings):
    """Settings for every blogctl command.

    Attributes:
        site_root: Directory all configured paths are relative to (parent
            of ``blogctl.toml``, else the nearest ancestor holding
            ``content/``, else CWD).
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BLOGCTL_",
        "env_nested_delimiter": "__",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    content: ContentConfig = Field(default_factory=ContentConfig)
    ids: IdsConfig = Field(default_factory=IdsConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> BlogSettings:
        """Construct settings from a CLI invocation.

        An explicit *config_path* that does not exist is ignored rather
        than treated as an error, matching the walk-up behaviour.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(site_root)

        resolved_root = site_root
        if resolved_root is None:
            if toml_path is not None:
                resolved_root = toml_path.parent
            else:
                resolved_root = find_site_root() or Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                site_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
