from __future__ import annotations

import pytest

from navcontrol_release.errors import VersionError
from navcontrol_release.versioning import AppVersion, load_pubspec_version, parse_flutter_version


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1.2.0+5", AppVersion("1.2.0", 5)),
        ("1.2.0", AppVersion("1.2.0", 1)),
        ("", AppVersion("1.0", 1)),
        (None, AppVersion("1.0", 1)),
        ("2.0.0-rc.1+42", AppVersion("2.0.0-rc.1", 42)),
    ],
)
def test_parse_flutter_version(value, expected):
    assert parse_flutter_version(value) == expected


def test_non_integer_build_number_rejected():
    with pytest.raises(VersionError):
        parse_flutter_version("1.2.0+abc")


def test_load_pubspec_version(tmp_path):
    pubspec = tmp_path / "pubspec.yaml"
    pubspec.write_text("name: navcontrol_app\nversion: 3.1.4+15\n", encoding="utf-8")
    assert load_pubspec_version(pubspec) == AppVersion("3.1.4", 15)


def test_pubspec_without_version_uses_defaults(tmp_path):
    pubspec = tmp_path / "pubspec.yaml"
    pubspec.write_text("name: navcontrol_app\n", encoding="utf-8")
    assert load_pubspec_version(pubspec) == AppVersion("1.0", 1)


def test_pubspec_errors(tmp_path):
    with pytest.raises(VersionError, match="not found"):
        load_pubspec_version(tmp_path / "pubspec.yaml")

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(VersionError, match="mapping"):
        load_pubspec_version(listing)


@pytest.mark.parametrize("value", [1.1, 2, True])
def test_non_string_version_rejected(value):
    with pytest.raises(VersionError, match="must be a string"):
        parse_flutter_version(value)


def test_unquoted_float_version_in_pubspec_rejected(tmp_path):
    pubspec = tmp_path / "pubspec.yaml"
    pubspec.write_text("name: navcontrol_app\nversion: 1.10\n", encoding="utf-8")
    with pytest.raises(VersionError, match="quote it"):
        load_pubspec_version(pubspec)
