"""
test_config.py - 설정 로드 테스트

우선순위: 환경 변수 > .env > 기본값
"""

from pathlib import Path

import pytest

from src.app.config import Settings, load_settings, parse_bool, settings_from_mapping
from src.domain.errors import ConfigError


class TestParseBool:
    """parse_bool 함수 테스트."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", " on "])
    def test_true(self, value: str):
        assert parse_bool("DEBUG", value) is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", ""])
    def test_false(self, value: str):
        assert parse_bool("DEBUG", value) is False

    def test_invalid(self):
        with pytest.raises(ConfigError) as exc_info:
            parse_bool("DEBUG", "maybe")

        assert exc_info.value.key == "DEBUG"
        assert "CONFIG_INVALID" in str(exc_info.value)


class TestSettingsFromMapping:
    """KEY=VALUE 매핑 → Settings."""

    def test_defaults(self):
        assert settings_from_mapping({}) == Settings()

    def test_values(self):
        settings = settings_from_mapping(
            {
                "APP_NAME": "shop",
                "DEBUG": "true",
                "PORT": " 8080 ",
                "RENDERER": "mako",
                "SERVER_NAME": "shop.test",
                "SECURE": "1",
                "SESSION_LIFETIME": "30",
                "COOKIE_SAMESITE": "Strict",
            }
        )

        assert settings.app_name == "shop"
        assert settings.debug is True
        assert settings.port == "8080"
        assert settings.renderer == "mako"
        assert settings.server_name == "shop.test"
        assert settings.secure is True
        assert settings.session_lifetime == 30
        assert settings.cookie_samesite == "strict"

    def test_none_value_uses_default(self):
        """.env의 값 없는 키 (예: "DEBUG")."""
        assert settings_from_mapping({"DEBUG": None, "PORT": None}) == Settings()

    def test_unknown_renderer_kept(self):
        """엔진 이름 검증은 렌더 시점."""
        assert settings_from_mapping({"RENDERER": "foo"}).renderer == "foo"

    def test_invalid_lifetime(self):
        with pytest.raises(ConfigError):
            settings_from_mapping({"SESSION_LIFETIME": "forever"})

    def test_invalid_samesite(self):
        with pytest.raises(ConfigError):
            settings_from_mapping({"COOKIE_SAMESITE": "sometimes"})


class TestLoadSettings:
    """load_settings 함수 테스트."""

    def test_reads_env_file(self, tmp_path: Path):
        (tmp_path / ".env").write_text(
            "APP_NAME=fromfile\nRENDERER=mako\n# comment\nDEBUG=false\n",
            encoding="utf-8",
        )

        settings = load_settings(tmp_path, environ={})

        assert settings.app_name == "fromfile"
        assert settings.renderer == "mako"

    def test_environ_overrides_file(self, tmp_path: Path):
        (tmp_path / ".env").write_text("APP_NAME=fromfile\nPORT=5000\n", encoding="utf-8")

        settings = load_settings(tmp_path, environ={"APP_NAME": "fromenv", "UNRELATED": "x"})

        assert settings.app_name == "fromenv"
        assert settings.port == "5000"

    def test_missing_env_file(self, tmp_path: Path):
        assert load_settings(tmp_path, environ={}) == Settings()
