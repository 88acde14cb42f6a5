"""Resolve the app version from a Flutter ``pubspec.yaml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from navcontrol_release.errors import VersionError

LOGGER = logging.getLogger(__name__)

DEFAULT_VERSION_NAME = "1.0"
DEFAULT_VERSION_CODE = 1


@dataclass(frozen=True, slots=True)
class AppVersion:
    """Android ``versionName`` / ``versionCode`` pair."""

    version_name: str
    version_code: int


def parse_flutter_version(value: object) -> AppVersion:
    """Split a pubspec ``version`` such as ``1.2.0+5`` into name and code."""

    if value is None:
        return AppVersion(DEFAULT_VERSION_NAME, DEFAULT_VERSION_CODE)
    if not isinstance(value, str):
        raise VersionError(
            f"pubspec version must be a string, got {type(value).__name__} {value!r}; quote it in pubspec.yaml"
        )
    text = value.strip()
    if not text:
        return AppVersion(DEFAULT_VERSION_NAME, DEFAULT_VERSION_CODE)

    name, plus, code = text.partition("+")
    if not plus:
        return AppVersion(name, DEFAULT_VERSION_CODE)
    try:
        version_code = int(code)
    except ValueError as exc:
        raise VersionError(f"Build number must be an integer: {text!r}") from exc
    return AppVersion(name or DEFAULT_VERSION_NAME, version_code)


def load_pubspec_version(pubspec_path: Path, logger: logging.Logger | None = None) -> AppVersion:
    """Read ``version`` from a pubspec file."""

    effective_logger = logger or LOGGER
    if not pubspec_path.exists():
        raise VersionError(f"pubspec not found: {pubspec_path}")
    try:
        document = yaml.safe_load(pubspec_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise VersionError(f"Invalid pubspec YAML: {pubspec_path}") from exc
    if not isinstance(document, dict):
        raise VersionError(f"pubspec must be a mapping: {pubspec_path}")

    version = parse_flutter_version(document.get("version"))
    effective_logger.debug(
        "versioning.resolved pubspec=%s version_name=%s version_code=%s",
        pubspec_path,
        version.version_name,
        version.version_code,
    )
    return version
