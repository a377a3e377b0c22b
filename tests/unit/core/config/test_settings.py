"""Tests for settings loading, command-line overrides and the server bind guard."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from healthbridge.core.config.settings import Settings, get_settings
from healthbridge.core.server import main
from healthbridge.domains.health.taxonomy.data_types import Platform


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("HB_PLATFORM", "HB_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.hb_host == "127.0.0.1"
        assert settings.hb_port == 8001
        assert settings.hb_platform == "ios"
        assert settings.hb_allow_insecure_bind is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("HB_PLATFORM", "android")
        monkeypatch.setenv("HB_PORT", "9100")
        settings = get_settings()
        assert settings.hb_platform == "android"
        assert settings.hb_port == 9100

    def test_unknown_platform_rejected(self, monkeypatch):
        monkeypatch.setenv("HB_PLATFORM", "tizen")
        with pytest.raises(ValidationError):
            get_settings()


class TestBindGuard:
    @pytest.mark.parametrize("host", ["127.0.0.1", "localhost", "::1"])
    def test_loopback_hosts(self, host):
        assert main._is_loopback_host(host)

    @pytest.mark.parametrize("host", ["0.0.0.0", "192.168.1.10", "example.com"])
    def test_non_loopback_hosts(self, host):
        assert not main._is_loopback_host(host)

    def test_refuses_public_bind(self, monkeypatch):
        monkeypatch.setenv("HB_HOST", "0.0.0.0")
        with pytest.raises(RuntimeError, match="HB_ALLOW_INSECURE_BIND"):
            main.run()

    def test_refuses_public_bind_from_flag(self):
        with pytest.raises(RuntimeError, match="HB_ALLOW_INSECURE_BIND"):
            main.run(["--host", "0.0.0.0"])


class TestCommandLine:
    def test_no_flags_keeps_environment(self, monkeypatch):
        monkeypatch.setenv("HB_PORT", "9100")
        settings = main.resolve_settings()
        assert settings.hb_platform == "ios"
        assert settings.hb_port == 9100

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("HB_PORT", "9100")
        settings = main.resolve_settings(["--platform", "android", "--port", "9200"])
        assert settings.hb_platform == "android"
        assert settings.hb_port == 9200
        assert settings.hb_host == "127.0.0.1"

    def test_unknown_platform_flag_rejected(self):
        with pytest.raises(SystemExit):
            main.resolve_settings(["--platform", "tizen"])

    def test_capability_summary(self):
        ios = main.capability_summary(Platform.IOS)
        android = main.capability_summary(Platform.ANDROID)
        assert ios.startswith("iOS HealthKit: ")
        assert ios.endswith(", live workout metrics")
        assert android.startswith("Android Health Connect: ")
        assert android.endswith("no live workout metrics")
