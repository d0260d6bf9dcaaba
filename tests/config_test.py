from __future__ import annotations

import pytest

from yolp.config import ClientConfig, env
from yolp.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("YOLP_APPID", "YOLP_TIMEOUT", "YOLP_DEBUG_RESPONSES"):
        monkeypatch.delenv(name, raising=False)


def test_env_default_and_missing(monkeypatch):
    assert env("YOLP_TIMEOUT", "10") == "10"
    with pytest.raises(ConfigurationError, match="YOLP_APPID"):
        env("YOLP_APPID")


def test_from_env_requires_app_id(monkeypatch):
    with pytest.raises(ConfigurationError):
        ClientConfig.from_env()

    monkeypatch.setenv("YOLP_APPID", "")
    with pytest.raises(ConfigurationError):
        ClientConfig.from_env()


def test_from_env_reads_request_settings(monkeypatch):
    monkeypatch.setenv("YOLP_APPID", "abc")
    monkeypatch.setenv("YOLP_TIMEOUT", "7.5")
    monkeypatch.setenv("YOLP_DEBUG_RESPONSES", "1")

    config = ClientConfig.from_env()

    assert config.app_id == "abc"
    assert config.request.timeout == 7.5
    assert config.request.debug_responses is True


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_from_env_rejects_bad_timeout(monkeypatch, value):
    monkeypatch.setenv("YOLP_APPID", "abc")
    monkeypatch.setenv("YOLP_TIMEOUT", value)

    with pytest.raises(ConfigurationError, match="YOLP_TIMEOUT"):
        ClientConfig.from_env()
