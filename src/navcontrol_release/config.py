"""Configuration models and loading logic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from navcontrol_release.naming import (
    DEFAULT_EXTENSION,
    DEFAULT_PREFIX,
    DEFAULT_SEPARATOR,
    DEFAULT_TIMESTAMP_FORMAT,
    RELEASE_BUILD_TYPE,
    NamingPolicy,
)

DEFAULT_SETTINGS_FILE = Path("configs/settings.yaml")
SETTINGS_FILE_ENV = "NAVCONTROL_RELEASE_SETTINGS_FILE"


class ProjectConfig(BaseModel):
    """Project metadata settings."""

    name: str = "navcontrol_release"
    env: str = "dev"


class PathsConfig(BaseModel):
    """Filesystem locations inside the Flutter project."""

    android_app_dir: Path = Path("./android/app")
    key_properties: Path = Path("./android/key.properties")
    pubspec: Path = Path("./pubspec.yaml")
    apk_output_dir: Path = Path("./build/app/outputs/flutter-apk")
    release_dir: Path = Path("./build/releases")
    logs_root: Path = Path("./logs")

    def resolved(self, project_root: Path) -> "PathsConfig":
        """Return a copy with project-relative paths resolved to absolute paths."""

        updates: dict[str, Path] = {}
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            updates[field_name] = value if value.is_absolute() else (project_root / value).resolve()
        return self.model_copy(update=updates)


class NamingConfig(BaseModel):
    """Release artifact naming settings."""

    prefix: str = Field(default=DEFAULT_PREFIX, min_length=1)
    separator: str = DEFAULT_SEPARATOR
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    extension: str = DEFAULT_EXTENSION
    release_build_type: str = Field(default=RELEASE_BUILD_TYPE, min_length=1)

    @field_validator("extension")
    @classmethod
    def _extension_has_dot(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError("extension must start with '.'")
        return value

    @field_validator("timestamp_format")
    @classmethod
    def _format_has_directive(cls, value: str) -> str:
        if "%" not in value:
            raise ValueError("timestamp_format must contain at least one strftime directive")
        return value

    def to_policy(self) -> NamingPolicy:
        return NamingPolicy(
            prefix=self.prefix,
            separator=self.separator,
            timestamp_format=self.timestamp_format,
            extension=self.extension,
            release_build_type=self.release_build_type,
        )


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)

    model_config = SettingsConfigDict(
        env_prefix="NAVCONTROL_RELEASE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by traversing upward for config markers."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / DEFAULT_SETTINGS_FILE).exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides."""

    settings_file = resolve_settings_file(config_file)
    project_root = settings_file.parent.parent.resolve()
    AppSettings._yaml_file_override = settings_file
    try:
        settings = AppSettings()
    finally:
        AppSettings._yaml_file_override = None
    resolved_paths = settings.paths.resolved(project_root=project_root)
    return settings.model_copy(update={"paths": resolved_paths})
