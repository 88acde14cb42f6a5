"""Typer CLI entrypoint for navcontrol_release."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import typer
import yaml

from navcontrol_release.artifacts import stage_release_outputs, write_release_summary
from navcontrol_release.config import AppSettings, load_settings
from navcontrol_release.errors import ReleaseToolError
from navcontrol_release.logging_utils import LOGGER_NAME, configure_logging
from navcontrol_release.models import BuildVariant, VariantOutput
from navcontrol_release.naming import apply_release_name
from navcontrol_release.signing import load_signing_config
from navcontrol_release.utils.time_utils import now_local, parse_iso_timestamp
from navcontrol_release.variants import discover_variants, rename_variant_outputs
from navcontrol_release.versioning import load_pubspec_version

app = typer.Typer(
    add_completion=False,
    help="navcontrol_release command line interface.",
    no_args_is_help=True,
)

CONFIG_FILE_OPTION = typer.Option(
    None,
    "--config-file",
    help="Optional settings YAML path.",
    exists=False,
    file_okay=True,
    dir_okay=False,
    readable=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if configure:
        logger = configure_logging(settings.paths.logs_root / "release.log")
    else:
        logger = logging.getLogger(LOGGER_NAME)
    return settings, logger


def _parse_at(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return parse_iso_timestamp(value)
    except ValueError as exc:
        raise typer.BadParameter("at must be an ISO timestamp such as 2024-03-05T14:07.") from exc


def _fail(error: ReleaseToolError) -> typer.Exit:
    typer.echo(f"error: {error}", err=True)
    return typer.Exit(code=1)


def _resolve_version_name(settings: AppSettings, version_name: str | None, logger: logging.Logger) -> str:
    if version_name is not None:
        return version_name
    return load_pubspec_version(settings.paths.pubspec, logger=logger).version_name


@app.command("show-config")
def show_config(config_file: Path | None = CONFIG_FILE_OPTION) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("version")
def show_version(config_file: Path | None = CONFIG_FILE_OPTION) -> None:
    """Print versionName and versionCode resolved from the pubspec."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=False)
    try:
        version = load_pubspec_version(settings.paths.pubspec, logger=logger)
    except ReleaseToolError as exc:
        raise _fail(exc) from exc
    typer.echo(f"version_name: {version.version_name}")
    typer.echo(f"version_code: {version.version_code}")


@app.command("release-name")
def release_name(
    version_name: str | None = typer.Option(
        None,
        "--version-name",
        help="Version name to embed; defaults to the pubspec version.",
    ),
    build_type: str = typer.Option(
        "release",
        "--build-type",
        help="Build type of the variant being named.",
    ),
    at: str | None = typer.Option(
        None,
        "--at",
        help="Build timestamp (ISO format); defaults to now.",
    ),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Print the file name a release output would receive."""

    moment = _parse_at(at) or now_local()
    settings, logger = _load_and_optionally_configure_logger(config_file, configure=False)
    try:
        resolved_version = _resolve_version_name(settings, version_name, logger)
    except ReleaseToolError as exc:
        raise _fail(exc) from exc

    variant = BuildVariant(build_type_name=build_type, version_name=resolved_version)
    output = VariantOutput(output_file_name=f"app-{build_type}.apk")
    new_name = apply_release_name(variant, output, moment, policy=settings.naming.to_policy(), logger=logger)
    if new_name is None:
        typer.echo(f"{output.output_file_name} (unchanged: build type '{build_type}' is not a release build)")
    else:
        typer.echo(new_name)


@app.command("check-signing")
def check_signing(config_file: Path | None = CONFIG_FILE_OPTION) -> None:
    """Validate key.properties and print the signing config without secrets."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=False)
    try:
        signing = load_signing_config(
            settings.paths.key_properties,
            app_dir=settings.paths.android_app_dir,
            logger=logger,
        )
    except ReleaseToolError as exc:
        raise _fail(exc) from exc
    for key, value in signing.redacted().items():
        typer.echo(f"{key}: {value}")


@app.command("stage-release")
def stage_release(
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        help="Directory holding built APKs; defaults to paths.apk_output_dir.",
        file_okay=False,
        dir_okay=True,
    ),
    version_name: str | None = typer.Option(
        None,
        "--version-name",
        help="Version name to embed; defaults to the pubspec version.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Compute release names without copying files.",
    ),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Replace a release artifact that already has the same name.",
    ),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Rename release APKs and copy them into the release directory."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    release_dir = settings.paths.release_dir
    try:
        resolved_version = _resolve_version_name(settings, version_name, logger)
        variants = discover_variants(output_dir or settings.paths.apk_output_dir, resolved_version, logger=logger)
        records = rename_variant_outputs(variants, clock=now_local, policy=settings.naming.to_policy(), logger=logger)
        result = stage_release_outputs(variants, release_dir, dry_run=dry_run, overwrite=overwrite, logger=logger)
    except ReleaseToolError as exc:
        raise _fail(exc) from exc

    typer.echo(f"version_name: {resolved_version}")
    typer.echo(f"outputs_renamed: {len(records)}")
    for item in result.staged:
        typer.echo(f"{'would stage' if dry_run else 'staged'}: {item.source_path.name} -> {item.target_path}")
    typer.echo(f"outputs_skipped: {len(result.skipped)}")
    if not dry_run and result.staged:
        summary_path = write_release_summary(result)
        typer.echo(f"summary_path: {summary_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
