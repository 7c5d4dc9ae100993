"""
RenderContext: 렌더 호출 1회분의 입력 묶음 + RenderData 구성.

병합 우선순위 (낮음 → 높음):
1. page_data      : 페이지가 넘긴 데이터
2. 프레임워크 기본값: Renderer 설정 + 요청 세션 (TemplateData)
3. template_data  : 프레임워크 쪽 호출자가 넘긴 필드

→ 페이지는 예약 필드(app_name, csrf_token 등)를 절대 덮어쓸 수 없음.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from src.domain.constants import (
    ENGINE_RESERVED_NAMES,
    ENVIRONMENT_DEVELOPMENT,
    ENVIRONMENT_PRODUCTION,
    SESSION_CSRF_KEY,
    SESSION_USER_KEY,
)
from src.domain.errors import InvalidRenderArgumentError
from src.domain.schemas import TemplateData

if TYPE_CHECKING:
    from starlette.requests import Request

    from src.render.renderer import RendererConfig


class Writer(Protocol):
    """write(str)를 지원하는 출력 대상 (io.StringIO, 파일 등)."""

    def write(self, s: str, /) -> Any: ...


def _request_session(request: "Request | None") -> Mapping[str, Any]:
    """
    요청에 붙은 세션 반환.

    요청이 없거나 세션 미들웨어가 없으면 빈 dict (예외 없음).
    request.session은 미들웨어가 없으면 assert로 실패하므로 scope를 직접 조회.
    """
    if request is None:
        return {}
    scope = getattr(request, "scope", None)
    if not isinstance(scope, Mapping):
        return {}
    session = scope.get("session")
    return session if isinstance(session, Mapping) else {}


def build_template_data(
    config: "RendererConfig",
    request: "Request | None" = None,
) -> TemplateData:
    """프레임워크 예약 필드 구성."""
    session = _request_session(request)

    return TemplateData(
        app_name=config.app_name,
        debug=config.debug,
        environment=ENVIRONMENT_DEVELOPMENT if config.debug else ENVIRONMENT_PRODUCTION,
        port=config.port,
        server_name=config.server_name,
        secure=config.secure,
        csrf_token=str(session.get(SESSION_CSRF_KEY, "") or ""),
        is_authenticated=SESSION_USER_KEY in session,
    )


def build_render_data(
    config: "RendererConfig",
    request: "Request | None" = None,
    page_data: Mapping[str, Any] | None = None,
    template_data: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    템플릿에 보이는 최종 데이터 구성.

    Args:
        config: Renderer 설정 스냅샷
        request: 들어온 요청 (None 허용 → 세션 필드는 기본값)
        page_data: 페이지 데이터
        template_data: 프레임워크 필드 (예약 키 값 지정 가능)

    Returns:
        병합된 dict (새 객체, 입력은 변경하지 않음)

    Raises:
        InvalidRenderArgumentError: mapping이 아닌 데이터, 엔진 예약 이름 사용 (ENGINE_RESERVED_NAMES)
    """
    for label, value in (("page_data", page_data), ("template_data", template_data)):
        if value is not None and not isinstance(value, Mapping):
            raise InvalidRenderArgumentError(
                reason=f"{label} must be a mapping",
                type=type(value).__name__,
            )
        if value:
            conflicts = ENGINE_RESERVED_NAMES.intersection(value)
            if conflicts:
                raise InvalidRenderArgumentError(
                    reason=f"{label} uses names reserved by the template engines",
                    keys=sorted(conflicts),
                )

    data: dict[str, Any] = dict(page_data or {})
    data.update(build_template_data(config, request).to_dict())
    if template_data:
        data.update(template_data)
    return data


@dataclass
class RenderContext:
    """
    렌더 호출 1회분 입력.

    writer/request/template_name + 두 종류의 데이터.
    """
    writer: Writer
    request: "Request | None"
    template_name: str
    page_data: Mapping[str, Any] | None = None
    template_data: Mapping[str, Any] | None = None

    def validate(self) -> None:
        """
        전제조건 검증 (출력 전).

        Raises:
            InvalidRenderArgumentError
        """
        if self.writer is None or not callable(getattr(self.writer, "write", None)):
            raise InvalidRenderArgumentError(
                reason="writer must provide a write() method",
                template=self.template_name,
            )
        if not self.template_name:
            raise InvalidRenderArgumentError(
                reason="template name cannot be empty",
            )

    def build_data(self, config: "RendererConfig") -> dict[str, Any]:
        return build_render_data(
            config,
            self.request,
            self.page_data,
            self.template_data,
        )
