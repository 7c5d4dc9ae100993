"""
템플릿 엔진 종류 (닫힌 variant).

설정 문자열 → EngineKind 변환은 설정 시점에 한 번만 수행.
렌더 hot path에서는 문자열 비교 없음.
"""

from enum import Enum


class EngineKind(str, Enum):
    """렌더 엔진 종류."""
    JINJA = "jinja"  # native: Jinja2
    MAKO = "mako"    # expression-based: Mako
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, value: "str | EngineKind | None") -> "EngineKind":
        """
        설정 문자열 → EngineKind.

        대소문자/공백 무시. 알 수 없는 값은 예외 대신 UNSUPPORTED
        (에러는 렌더 호출 시점에 UnsupportedEngineError로 보고).
        """
        if isinstance(value, EngineKind):
            return value
        normalized = (value or "").strip().lower()
        for kind in cls:
            if kind is not cls.UNSUPPORTED and kind.value == normalized:
                return kind
        return cls.UNSUPPORTED


# 엔진별 템플릿 확장자
TEMPLATE_EXTENSIONS: dict[EngineKind, str] = {
    EngineKind.JINJA: "html",
    EngineKind.MAKO: "mako",
}
