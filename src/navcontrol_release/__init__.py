"""Release artifact naming and signing-config tooling for the NavControl app."""

from navcontrol_release.models import BuildVariant, RenameRecord, VariantOutput
from navcontrol_release.naming import (
    DEFAULT_POLICY,
    NamingPolicy,
    apply_release_name,
    build_release_file_name,
    format_build_timestamp,
    is_release_build,
)

__all__ = [
    "BuildVariant",
    "RenameRecord",
    "VariantOutput",
    "DEFAULT_POLICY",
    "NamingPolicy",
    "apply_release_name",
    "build_release_file_name",
    "format_build_timestamp",
    "is_release_build",
]

__version__ = "0.1.0"
