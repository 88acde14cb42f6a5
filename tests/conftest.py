from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def build_moment() -> datetime:
    return datetime(2024, 3, 5, 14, 7, 42)


@pytest.fixture
def flutter_project(tmp_path: Path) -> Path:
    """Minimal Flutter project layout with settings pointing inside it."""

    (tmp_path / "configs").mkdir()
    settings = {
        "paths": {
            "android_app_dir": "./android/app",
            "key_properties": "./android/key.properties",
            "pubspec": "./pubspec.yaml",
            "apk_output_dir": "./build/app/outputs/flutter-apk",
            "release_dir": "./build/releases",
            "logs_root": "./logs",
        }
    }
    (tmp_path / "configs" / "settings.yaml").write_text(yaml.safe_dump(settings), encoding="utf-8")
    (tmp_path / "android" / "app").mkdir(parents=True)
    (tmp_path / "pubspec.yaml").write_text("name: navcontrol_app\nversion: 1.2.0+7\n", encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NAVCONTROL_RELEASE_SETTINGS_FILE", raising=False)


@pytest.fixture(autouse=True)
def _restore_root_handlers():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)
