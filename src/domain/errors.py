"""
Error definitions for the rendering core.

규칙:
- 조용한 실패 금지 → 모든 실패는 RenderError 계열로 명시적으로 raise
- 엔진 종류와 무관하게 같은 에러 분류 (호출자가 엔진별 분기 불필요)
- 코어는 로그를 남기지 않음 → 로깅/HTTP 상태 결정은 웹 레이어 책임
"""

from typing import Any


class RenderError(Exception):
    """
    렌더링 코어의 기본 에러.

    Usage:
        raise TemplateNotFoundError(path=str(page_path))
    """

    code = "RENDER_FAILED"

    def __init__(self, code: str | None = None, **context: Any) -> None:
        if code is not None:
            self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Configuration ===
    UNSUPPORTED_ENGINE = "UNSUPPORTED_ENGINE"
    CONFIG_INVALID = "CONFIG_INVALID"

    # === Preconditions ===
    INVALID_RENDER_ARGUMENT = "INVALID_RENDER_ARGUMENT"

    # === Render ===
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_COMPILE_ERROR = "TEMPLATE_COMPILE_ERROR"
    TEMPLATE_EXECUTION_ERROR = "TEMPLATE_EXECUTION_ERROR"

    # === Transport ===
    WRITER_FAILED = "WRITER_FAILED"  # writer 자체 실패 (템플릿 에러 아님)


# =============================================================================
# Taxonomy
# =============================================================================

class UnsupportedEngineError(RenderError):
    """설정된 엔진 이름이 어떤 어댑터와도 매칭되지 않음."""

    code = ErrorCodes.UNSUPPORTED_ENGINE


class InvalidRenderArgumentError(RenderError):
    """호출 전제조건 위반 (writer 없음, 빈 템플릿 이름 등)."""

    code = ErrorCodes.INVALID_RENDER_ARGUMENT


class TemplateNotFoundError(RenderError):
    """해석된 템플릿 파일이 존재하지 않음."""

    code = ErrorCodes.TEMPLATE_NOT_FOUND


class TemplateCompileError(RenderError):
    """템플릿 소스의 문법/파싱 실패. path와 원인(error) 포함."""

    code = ErrorCodes.TEMPLATE_COMPILE_ERROR


class TemplateExecutionError(RenderError):
    """
    실행 중 실패 (정의되지 않은 필드 참조 등).

    주의: writer에 일부 출력이 이미 기록된 뒤에 발생할 수 있음.
    """

    code = ErrorCodes.TEMPLATE_EXECUTION_ERROR


class WriterError(RenderError):
    """writer.write() 실패. 템플릿 문제가 아닌 전송 계층 실패."""

    code = ErrorCodes.WRITER_FAILED


class ConfigError(Exception):
    """설정 값 파싱 실패."""

    def __init__(self, key: str, value: str, message: str) -> None:
        self.code = ErrorCodes.CONFIG_INVALID
        self.key = key
        self.value = value
        super().__init__(f"[{self.code}] {key}={value!r}: {message}")
