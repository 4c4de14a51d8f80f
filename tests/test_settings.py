"""Tests for environment-driven settings."""

import importlib

import pytest

from cargoci import settings


@pytest.fixture
def reload_settings(monkeypatch):
    """Reload settings under a patched environment, restoring it afterwards."""
    for var in ("CARGOCI_CARGO", "CARGOCI_PROJECT_ROOT", "CARGOCI_DEBUG"):
        monkeypatch.delenv(var, raising=False)

    yield lambda: importlib.reload(settings)

    monkeypatch.undo()
    importlib.reload(settings)


def test_defaults(reload_settings):
    reload_settings()

    assert settings.CARGO == "cargo"
    assert settings.PROJECT_ROOT == "."
    assert settings.DEBUG is False


def test_values_from_environment(reload_settings, monkeypatch):
    monkeypatch.setenv("CARGOCI_CARGO", "/opt/rust/bin/cargo")
    monkeypatch.setenv("CARGOCI_PROJECT_ROOT", "crates/app")
    monkeypatch.setenv("CARGOCI_DEBUG", "1")

    reload_settings()

    assert settings.CARGO == "/opt/rust/bin/cargo"
    assert settings.PROJECT_ROOT == "crates/app"
    assert settings.DEBUG is True


@pytest.mark.parametrize("value", ["true", "YES", " on "])
def test_debug_truthy_strings(reload_settings, monkeypatch, value):
    monkeypatch.setenv("CARGOCI_DEBUG", value)

    reload_settings()

    assert settings.DEBUG is True


@pytest.mark.parametrize("value", ["0", "false", "off", ""])
def test_debug_falsy_strings(reload_settings, monkeypatch, value):
    monkeypatch.setenv("CARGOCI_DEBUG", value)

    reload_settings()

    assert settings.DEBUG is False
