"""Discover build variant outputs and run the release naming pass over them."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from navcontrol_release.models import BuildVariant, RenameRecord, VariantOutput
from navcontrol_release.naming import DEFAULT_POLICY, NamingPolicy, apply_release_name
from navcontrol_release.utils.time_utils import Clock, now_local

LOGGER = logging.getLogger(__name__)

APK_SUFFIX = ".apk"


def infer_build_type(apk_path: Path) -> str:
    """Extract the build type from a Flutter APK file name.

    Flutter writes ``app-<buildType>.apk`` or, with ABI splits,
    ``app-<abi>-<buildType>.apk``; the build type is the last dash token.
    """

    return apk_path.stem.rsplit("-", 1)[-1]


def discover_variants(
    output_dir: Path,
    version_name: str,
    logger: logging.Logger | None = None,
) -> list[BuildVariant]:
    """Group APK files in ``output_dir`` into variants keyed by build type."""

    effective_logger = logger or LOGGER
    if not output_dir.exists():
        effective_logger.warning("variants.output_dir_missing output_dir=%s", output_dir)
        return []

    by_build_type: dict[str, BuildVariant] = {}
    for apk_path in sorted(output_dir.iterdir()):
        if not apk_path.is_file() or apk_path.suffix.lower() != APK_SUFFIX:
            continue
        build_type = infer_build_type(apk_path)
        variant = by_build_type.setdefault(
            build_type,
            BuildVariant(build_type_name=build_type, version_name=version_name),
        )
        variant.outputs.append(VariantOutput(output_file_name=apk_path.name, path=apk_path.resolve()))

    variants = list(by_build_type.values())
    effective_logger.info(
        "variants.discovered output_dir=%s variants=%s outputs=%s",
        output_dir,
        len(variants),
        sum(len(variant.outputs) for variant in variants),
    )
    return variants


def rename_variant_outputs(
    variants: Iterable[BuildVariant],
    clock: Clock = now_local,
    policy: NamingPolicy = DEFAULT_POLICY,
    logger: logging.Logger | None = None,
) -> list[RenameRecord]:
    """Apply the naming policy to every output of every variant.

    The clock is read once per output, at the moment that output is named.
    """

    effective_logger = logger or LOGGER
    records: list[RenameRecord] = []
    for variant in variants:
        for output in variant.outputs:
            old_name = output.output_file_name
            new_name = apply_release_name(variant, output, clock(), policy=policy, logger=effective_logger)
            if new_name is None:
                continue
            records.append(
                RenameRecord(
                    build_type_name=variant.build_type_name,
                    version_name=variant.version_name,
                    old_file_name=old_name,
                    new_file_name=new_name,
                )
            )
    return records
