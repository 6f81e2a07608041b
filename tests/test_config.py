from __future__ import annotations

import importlib

import pytest

from klas_api.config import get_settings_module
from klas_api.core import constants


@pytest.mark.parametrize(
    "env,module",
    [
        ("production", "klas_api.config.production"),
        ("prod", "klas_api.config.production"),
        ("TESTING", "klas_api.config.testing"),
        ("whatever", "klas_api.config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == module


def test_defaults_come_from_constants(monkeypatch):
    for name in (
        "QR_TOKEN_TTL",
        "SCHOOL_TIMEZONE",
        "STUDENT_AVATAR_MAX_SIZE",
        "STUDENT_AVATAR_SIGNED_URL_TTL",
        "ATTENDANCE_ATTACHMENT_SIGNED_URL_TTL",
        "ATTENDANCE_ATTACHMENT_MAX_SIZE",
        "HISTORY_DEFAULT_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = importlib.reload(importlib.import_module("klas_api.config.config"))

    assert settings.QR_TOKEN_TTL == constants.DEFAULT_QR_TOKEN_TTL_SECONDS
    assert settings.SCHOOL_TIMEZONE == constants.DEFAULT_TIMEZONE
    assert settings.STUDENT_AVATAR_MAX_SIZE == constants.DEFAULT_AVATAR_MAX_SIZE
    assert settings.STUDENT_AVATAR_SIGNED_URL_TTL == constants.DEFAULT_SIGNED_URL_TTL
    assert settings.ATTENDANCE_ATTACHMENT_SIGNED_URL_TTL == constants.DEFAULT_ATTACHMENT_SIGNED_URL_TTL
    assert settings.ATTENDANCE_ATTACHMENT_MAX_SIZE == constants.DEFAULT_ATTACHMENT_MAX_SIZE
    assert settings.HISTORY_DEFAULT_LIMIT == constants.DEFAULT_HISTORY_LIMIT


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("QR_TOKEN_TTL", "30")
    settings = importlib.reload(importlib.import_module("klas_api.config.config"))
    assert settings.QR_TOKEN_TTL == 30
    monkeypatch.delenv("QR_TOKEN_TTL")
    importlib.reload(settings)
