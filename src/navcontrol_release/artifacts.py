"""Stage renamed release artifacts into the release directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from navcontrol_release.errors import ArtifactCollisionError
from navcontrol_release.models import BuildVariant
from navcontrol_release.utils.paths import copy_file_atomically, write_json_atomically
from navcontrol_release.utils.time_utils import now_local

LOGGER = logging.getLogger(__name__)

RELEASE_SUMMARY_FILE = "release_summary.json"


@dataclass(frozen=True, slots=True)
class StagedArtifact:
    """A source APK and the release path it was (or would be) copied to."""

    build_type_name: str
    version_name: str
    source_path: Path
    target_path: Path


@dataclass(slots=True)
class StageResult:
    """Outcome of a staging run."""

    release_dir: Path
    dry_run: bool
    staged: list[StagedArtifact] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "release_dir": str(self.release_dir),
            "dry_run": self.dry_run,
            "staged": [
                {
                    "build_type": item.build_type_name,
                    "version_name": item.version_name,
                    "source_path": str(item.source_path),
                    "target_path": str(item.target_path),
                }
                for item in self.staged
            ],
            "skipped": [str(path) for path in self.skipped],
        }


def stage_release_outputs(
    variants: Iterable[BuildVariant],
    release_dir: Path,
    dry_run: bool = False,
    overwrite: bool = False,
    logger: logging.Logger | None = None,
) -> StageResult:
    """Copy every renamed output with a file on disk into ``release_dir``.

    All target paths are checked before anything is copied: two outputs
    mapping to the same name (ABI splits built in the same minute) always
    raise, and an existing target raises unless ``overwrite`` is set.
    Outputs the naming pass left untouched are recorded as skipped.
    """

    effective_logger = logger or LOGGER
    result = StageResult(release_dir=release_dir, dry_run=dry_run)
    planned: dict[Path, StagedArtifact] = {}
    for variant in variants:
        for output in variant.outputs:
            if output.path is None:
                continue
            if not output.renamed:
                result.skipped.append(output.path)
                continue

            target_path = release_dir / output.output_file_name
            if target_path in planned:
                raise ArtifactCollisionError(
                    f"Outputs {planned[target_path].source_path.name} and {output.path.name} "
                    f"both map to {target_path.name}"
                )
            if target_path.exists() and not overwrite:
                raise ArtifactCollisionError(
                    f"Release artifact already exists: {target_path} (use --overwrite to replace it)"
                )
            planned[target_path] = StagedArtifact(
                build_type_name=variant.build_type_name,
                version_name=variant.version_name,
                source_path=output.path,
                target_path=target_path,
            )

    for item in planned.values():
        if dry_run:
            effective_logger.info("artifacts.dry_run source=%s target=%s", item.source_path, item.target_path)
        else:
            copy_file_atomically(item.source_path, item.target_path)
            effective_logger.info("artifacts.staged source=%s target=%s", item.source_path, item.target_path)
        result.staged.append(item)
    return result


def write_release_summary(result: StageResult, release_dir: Path | None = None) -> Path:
    """Persist the staging outcome as ``release_summary.json``."""

    payload = result.as_dict()
    payload["written_at"] = now_local().isoformat(timespec="seconds")
    return write_json_atomically(payload, (release_dir or result.release_dir) / RELEASE_SUMMARY_FILE)
