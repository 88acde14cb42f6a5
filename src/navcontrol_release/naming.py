"""Release artifact naming policy.

Release outputs are named ``<prefix><versionName><separator><timestamp><extension>``,
which with the default policy gives e.g. ``NavControl_v1.2.0_20240305_1407.apk``.
The timestamp is taken from the moment passed in by the caller; nothing here
reads the system clock.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from navcontrol_release.models import BuildVariant, VariantOutput

LOGGER = logging.getLogger(__name__)

DEFAULT_PREFIX = "NavControl_v"
DEFAULT_SEPARATOR = "_"
DEFAULT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M"
DEFAULT_EXTENSION = ".apk"
RELEASE_BUILD_TYPE = "release"

_YEAR_DIRECTIVE = re.compile(r"%[%Y]")


@dataclass(frozen=True, slots=True)
class NamingPolicy:
    """Components of a release artifact file name."""

    prefix: str = DEFAULT_PREFIX
    separator: str = DEFAULT_SEPARATOR
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    extension: str = DEFAULT_EXTENSION
    release_build_type: str = RELEASE_BUILD_TYPE


DEFAULT_POLICY = NamingPolicy()


def format_build_timestamp(moment: datetime, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Format ``moment`` as ``yyyyMMdd_HHmm`` using its own wall-clock fields.

    ``%Y`` is always rendered with four digits; platform ``strftime`` does not
    pad years below 1000.
    """

    year = f"{moment.year:04d}"
    padded_fmt = _YEAR_DIRECTIVE.sub(lambda match: year if match.group() == "%Y" else match.group(), fmt)
    return moment.strftime(padded_fmt)


def build_release_file_name(
    version_name: str,
    moment: datetime,
    policy: NamingPolicy = DEFAULT_POLICY,
) -> str:
    """Return the release file name for ``version_name`` built at ``moment``.

    The version name is embedded verbatim; no format validation is applied.
    """

    timestamp = format_build_timestamp(moment, policy.timestamp_format)
    return f"{policy.prefix}{version_name}{policy.separator}{timestamp}{policy.extension}"


def is_release_build(build_type_name: str, policy: NamingPolicy = DEFAULT_POLICY) -> bool:
    """Exact, case-sensitive match against the release build type."""

    return build_type_name == policy.release_build_type


def apply_release_name(
    variant: BuildVariant,
    output: VariantOutput,
    moment: datetime,
    policy: NamingPolicy = DEFAULT_POLICY,
    logger: logging.Logger | None = None,
) -> str | None:
    """Rename ``output`` when ``variant`` is a release build.

    Returns the assigned name, or ``None`` when the output was left untouched.
    """

    effective_logger = logger or LOGGER
    if not is_release_build(variant.build_type_name, policy):
        effective_logger.debug(
            "naming.skip build_type=%s file=%s",
            variant.build_type_name,
            output.output_file_name,
        )
        return None

    new_name = build_release_file_name(variant.version_name, moment, policy)
    effective_logger.info("naming.rename old=%s new=%s", output.output_file_name, new_name)
    output.output_file_name = new_name
    return new_name
