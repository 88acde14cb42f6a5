"""Release signing credentials loaded from ``key.properties``."""

from __future__ import annotations

import logging
import string
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, ConfigDict, SecretStr

from navcontrol_release.errors import SigningConfigError

LOGGER = logging.getLogger(__name__)

REQUIRED_KEYS: tuple[str, ...] = ("keyAlias", "keyPassword", "storeFile", "storePassword")

_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_KEY_TERMINATORS = "=: \t\f"


def _logical_lines(text: str) -> list[str]:
    """Join backslash-continued physical lines, dropping blanks and comments."""

    logical: list[str] = []
    pending: str | None = None
    for raw_line in text.splitlines():
        line = raw_line.lstrip(" \t\f")
        if pending is None:
            if not line or line[0] in "#!":
                continue
            current = line
        else:
            current = pending + line

        trailing = len(current) - len(current.rstrip("\\"))
        if trailing % 2 == 1:
            pending = current[:-1]
            continue
        pending = None
        logical.append(current)

    if pending is not None:
        logical.append(pending)
    return logical


def _unescape(value: str) -> str:
    chars: list[str] = []
    index = 0
    while index < len(value):
        char = value[index]
        if char != "\\" or index + 1 >= len(value):
            chars.append(char)
            index += 1
            continue
        escaped = value[index + 1]
        if escaped == "u":
            digits = value[index + 2 : index + 6]
            if len(digits) != 4 or any(digit not in string.hexdigits for digit in digits):
                raise SigningConfigError(f"Malformed \\uXXXX escape in properties: {value!r}")
            chars.append(chr(int(digits, 16)))
            index += 6
            continue
        chars.append(_SIMPLE_ESCAPES.get(escaped, escaped))
        index += 2
    return "".join(chars)


def _split_key_value(line: str) -> tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _KEY_TERMINATORS:
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t\f")
    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java ``.properties`` text into a dict; later keys win."""

    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        properties[key] = value
    return properties


def load_key_properties(path: Path) -> dict[str, str]:
    """Read a ``key.properties`` file."""

    if not path.exists():
        raise SigningConfigError(f"Signing properties file not found: {path}")
    return parse_properties(path.read_text(encoding="utf-8"))


class SigningConfig(BaseModel):
    """Release signing credentials with every field required."""

    model_config = ConfigDict(frozen=True)

    key_alias: str
    key_password: SecretStr
    store_file: Path
    store_password: SecretStr

    @classmethod
    def from_properties(cls, properties: Mapping[str, str], app_dir: Path) -> "SigningConfig":
        """Build a config, failing on every absent or blank required key at once."""

        missing = [key for key in REQUIRED_KEYS if not (properties.get(key) or "").strip()]
        if missing:
            raise SigningConfigError(f"Missing signing properties: {', '.join(missing)}")

        store_file = Path(properties["storeFile"].strip())
        if not store_file.is_absolute():
            store_file = (app_dir / store_file).resolve()
        return cls(
            key_alias=properties["keyAlias"].strip(),
            key_password=SecretStr(properties["keyPassword"]),
            store_file=store_file,
            store_password=SecretStr(properties["storePassword"]),
        )

    def redacted(self) -> dict[str, object]:
        """Return a display-safe view of the config."""

        return {
            "key_alias": self.key_alias,
            "key_password": "********",
            "store_file": str(self.store_file),
            "store_file_exists": self.store_file.exists(),
            "store_password": "********",
        }


def load_signing_config(
    key_properties_path: Path,
    app_dir: Path,
    logger: logging.Logger | None = None,
) -> SigningConfig:
    """Load and validate signing credentials; ``storeFile`` resolves against ``app_dir``."""

    effective_logger = logger or LOGGER
    config = SigningConfig.from_properties(load_key_properties(key_properties_path), app_dir=app_dir)
    effective_logger.info(
        "signing.loaded path=%s key_alias=%s store_file=%s",
        key_properties_path,
        config.key_alias,
        config.store_file,
    )
    if not config.store_file.exists():
        effective_logger.warning("signing.store_file_missing store_file=%s", config.store_file)
    return config
