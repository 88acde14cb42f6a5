"""Data models for build variants and their produced outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class VariantOutput:
    """One artifact produced by a build variant.

    ``output_file_name`` starts as the name assigned by the build and is
    rewritten by the naming pass for release variants only.
    """

    output_file_name: str
    path: Path | None = None
    original_file_name: str = field(init=False)

    def __post_init__(self) -> None:
        self.original_file_name = self.output_file_name

    @property
    def renamed(self) -> bool:
        return self.output_file_name != self.original_file_name


@dataclass(slots=True)
class BuildVariant:
    """A named build configuration and the outputs it produced."""

    build_type_name: str
    version_name: str
    outputs: list[VariantOutput] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RenameRecord:
    """Audit entry for a single renamed output."""

    build_type_name: str
    version_name: str
    old_file_name: str
    new_file_name: str
