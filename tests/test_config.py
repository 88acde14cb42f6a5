from __future__ import annotations

import pytest
from pydantic import ValidationError

from navcontrol_release.config import NamingConfig, find_project_root, load_settings
from navcontrol_release.naming import DEFAULT_POLICY


def test_load_settings_resolves_paths(flutter_project):
    settings = load_settings(flutter_project / "configs" / "settings.yaml")

    assert settings.paths.pubspec == (flutter_project / "pubspec.yaml").resolve()
    assert settings.paths.key_properties == (flutter_project / "android" / "key.properties").resolve()
    assert settings.paths.release_dir.is_absolute()
    assert settings.naming.to_policy() == DEFAULT_POLICY


def test_env_overrides_yaml(flutter_project, monkeypatch):
    monkeypatch.setenv("NAVCONTROL_RELEASE_NAMING__PREFIX", "NavControlBeta_v")
    monkeypatch.setenv("NAVCONTROL_RELEASE_PATHS__RELEASE_DIR", "./dist")

    settings = load_settings(flutter_project / "configs" / "settings.yaml")

    assert settings.naming.prefix == "NavControlBeta_v"
    assert settings.paths.release_dir == (flutter_project / "dist").resolve()


def test_settings_file_env_var(flutter_project, monkeypatch):
    monkeypatch.setenv("NAVCONTROL_RELEASE_SETTINGS_FILE", str(flutter_project / "configs" / "settings.yaml"))
    settings = load_settings()
    assert settings.paths.pubspec == (flutter_project / "pubspec.yaml").resolve()


def test_find_project_root_walks_up(flutter_project):
    nested = flutter_project / "android" / "app"
    assert find_project_root(nested) == flutter_project.resolve()


@pytest.mark.parametrize(
    "overrides",
    [{"extension": "apk"}, {"timestamp_format": "yyyyMMdd"}, {"prefix": ""}],
)
def test_naming_config_validation(overrides):
    with pytest.raises(ValidationError):
        NamingConfig(**overrides)
