from __future__ import annotations

import logging

import pytest

from navcontrol_release.errors import SigningConfigError
from navcontrol_release.signing import (
    SigningConfig,
    load_key_properties,
    load_signing_config,
    parse_properties,
)

KEY_PROPERTIES = """\
# Release signing
storePassword=store-secret
keyPassword = key-secret
keyAlias: upload
storeFile=../upload-keystore.jks
"""


def test_parse_properties_separators_and_comments():
    props = parse_properties(KEY_PROPERTIES + "! bang comment\n\n   \n")
    assert props == {
        "storePassword": "store-secret",
        "keyPassword": "key-secret",
        "keyAlias": "upload",
        "storeFile": "../upload-keystore.jks",
    }


def test_parse_properties_continuation_and_escapes():
    text = "path=C:\\\\keys\\\\\\\n    upload.jks\nname=caf\\u00e9\nspaced\\ key value\ntab=a\\tb\n"
    props = parse_properties(text)
    assert props["path"] == "C:\\keys\\upload.jks"
    assert props["name"] == "café"
    assert props["spaced key"] == "value"
    assert props["tab"] == "a\tb"


def test_parse_properties_last_key_wins_and_bare_key():
    props = parse_properties("a=1\na=2\nflag\n")
    assert props == {"a": "2", "flag": ""}


def test_missing_file_raises(tmp_path):
    with pytest.raises(SigningConfigError, match="not found"):
        load_key_properties(tmp_path / "key.properties")


def test_all_missing_keys_reported_at_once(tmp_path):
    with pytest.raises(SigningConfigError) as excinfo:
        SigningConfig.from_properties({"keyAlias": "upload", "storeFile": "   "}, app_dir=tmp_path)
    message = str(excinfo.value)
    assert "keyPassword" in message
    assert "storeFile" in message
    assert "storePassword" in message
    assert "keyAlias" not in message


def test_store_file_resolves_against_app_dir(tmp_path, caplog):
    android_dir = tmp_path / "android"
    app_dir = android_dir / "app"
    app_dir.mkdir(parents=True)
    (android_dir / "upload-keystore.jks").write_bytes(b"jks")
    key_properties = android_dir / "key.properties"
    key_properties.write_text(KEY_PROPERTIES, encoding="utf-8")

    with caplog.at_level(logging.INFO):
        config = load_signing_config(key_properties, app_dir=app_dir)

    assert config.key_alias == "upload"
    assert config.store_file == (android_dir / "upload-keystore.jks").resolve()
    assert config.key_password.get_secret_value() == "key-secret"
    assert config.store_password.get_secret_value() == "store-secret"
    assert "key-secret" not in caplog.text
    assert "store-secret" not in caplog.text


def test_redacted_hides_secrets(tmp_path):
    config = SigningConfig.from_properties(parse_properties(KEY_PROPERTIES), app_dir=tmp_path)
    redacted = config.redacted()
    assert redacted["key_password"] == "********"
    assert redacted["store_password"] == "********"
    assert redacted["store_file_exists"] is False
    assert "key-secret" not in repr(config)
    assert "store-secret" not in repr(config)


@pytest.mark.parametrize("value", ["keyAlias=up\\u12", "keyAlias=up\\u", "keyAlias=\\u12zz", "keyAlias=\\u+123"])
def test_malformed_unicode_escapes_rejected(value):
    with pytest.raises(SigningConfigError, match="Malformed"):
        parse_properties(value)
