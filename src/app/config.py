"""
애플리케이션 설정: .env + 환경 변수.

우선순위 (높음 → 낮음):
1. 프로세스 환경 변수
2. <root>/.env (python-dotenv)
3. 기본값 (src.domain.constants)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from src.domain.constants import (
    DEFAULT_APP_NAME,
    DEFAULT_COOKIE_NAME,
    DEFAULT_COOKIE_SAMESITE,
    DEFAULT_PORT,
    DEFAULT_RENDERER,
    DEFAULT_SESSION_LIFETIME_MINUTES,
    ENV_FILENAME,
)
from src.domain.errors import ConfigError

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off", ""}
SAMESITE_VALUES = {"lax", "strict", "none"}

ENV_KEYS = (
    "APP_NAME",
    "DEBUG",
    "PORT",
    "RENDERER",
    "SERVER_NAME",
    "SECURE",
    "SESSION_SECRET",
    "SESSION_LIFETIME",
    "COOKIE_NAME",
    "COOKIE_SECURE",
    "COOKIE_SAMESITE",
)


@dataclass(frozen=True)
class Settings:
    """애플리케이션 설정."""
    app_name: str = DEFAULT_APP_NAME
    debug: bool = False
    port: str = DEFAULT_PORT
    renderer: str = DEFAULT_RENDERER  # "jinja" | "mako" (그 외는 렌더 시 에러)
    server_name: str = ""
    secure: bool = False

    # 세션
    session_secret: str = ""
    session_lifetime: int = DEFAULT_SESSION_LIFETIME_MINUTES  # 분
    cookie_name: str = DEFAULT_COOKIE_NAME
    cookie_secure: bool = False
    cookie_samesite: str = DEFAULT_COOKIE_SAMESITE


def parse_bool(key: str, value: str) -> bool:
    """
    문자열 → bool.

    Raises:
        ConfigError: 인식할 수 없는 값
    """
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ConfigError(key, value, "expected a boolean (true/false/1/0/yes/no/on/off)")


def parse_int(key: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigError(key, value, "expected an integer") from None


def settings_from_mapping(values: Mapping[str, str | None]) -> Settings:
    """
    KEY=VALUE 매핑 → Settings.

    없는 키는 기본값. 값이 None인 키(.env의 "KEY" 단독)도 기본값.
    """
    defaults = Settings()
    get = values.get

    samesite = (get("COOKIE_SAMESITE") or defaults.cookie_samesite).strip().lower()
    if samesite not in SAMESITE_VALUES:
        raise ConfigError("COOKIE_SAMESITE", samesite, f"expected one of {sorted(SAMESITE_VALUES)}")

    lifetime = get("SESSION_LIFETIME")
    return Settings(
        app_name=get("APP_NAME") or defaults.app_name,
        debug=parse_bool("DEBUG", get("DEBUG") or "false"),
        port=(get("PORT") or defaults.port).strip(),
        renderer=(get("RENDERER") or defaults.renderer).strip(),
        server_name=get("SERVER_NAME") or defaults.server_name,
        secure=parse_bool("SECURE", get("SECURE") or "false"),
        session_secret=get("SESSION_SECRET") or defaults.session_secret,
        session_lifetime=(
            parse_int("SESSION_LIFETIME", lifetime) if lifetime else defaults.session_lifetime
        ),
        cookie_name=get("COOKIE_NAME") or defaults.cookie_name,
        cookie_secure=parse_bool("COOKIE_SECURE", get("COOKIE_SECURE") or "false"),
        cookie_samesite=samesite,
    )


def load_settings(
    root_path: Path,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    설정 로드.

    Args:
        root_path: 프로젝트 루트 (.env 위치)
        environ: 환경 변수 (테스트용 주입, 기본 os.environ)

    Returns:
        Settings
    """
    values: dict[str, str | None] = {}

    env_path = Path(root_path) / ENV_FILENAME
    if env_path.exists():
        values.update(dotenv_values(env_path))

    source = os.environ if environ is None else environ
    for key in ENV_KEYS:
        if key in source:
            values[key] = source[key]

    return settings_from_mapping(values)
