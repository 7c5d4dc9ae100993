"""
Renderer: 렌더 엔진 파사드.

역할:
- 설정 보관 (엔진 종류, 루트 경로, 템플릿에 노출할 메타데이터)
- 엔진 선택은 설정 시점에 한 번 → 활성 어댑터 1개
- page(): 전제조건 검증 → RenderData 구성 → 어댑터 위임

설정 교체 (reconfigure):
- (config, adapter) 스냅샷을 통째로 새로 만들어 한 번의 대입으로 publish
- 렌더 호출은 시작 시 스냅샷을 한 번만 읽음 → 반쯤 바뀐 설정을 보지 않음
"""

import io
import threading
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, NamedTuple

from src.domain.errors import UnsupportedEngineError
from src.render.base import EngineAdapter
from src.render.context import RenderContext, Writer
from src.render.engines import EngineKind
from src.render.jinja_engine import JinjaEngine
from src.render.mako_engine import MakoEngine

if TYPE_CHECKING:
    from starlette.requests import Request

    from src.app.config import Settings


# =============================================================================
# Engine Registry
# =============================================================================

_ENGINES: dict[EngineKind, type[EngineAdapter[Any]]] = {
    EngineKind.JINJA: JinjaEngine,
    EngineKind.MAKO: MakoEngine,
}


def register_engine(kind: EngineKind, adapter_cls: type[EngineAdapter[Any]]) -> None:
    """
    엔진 어댑터 등록 (기존 등록 교체 가능).

    Args:
        kind: 엔진 종류 (UNSUPPORTED는 등록 불가)
        adapter_cls: EngineAdapter 구현 클래스
    """
    if kind is EngineKind.UNSUPPORTED:
        raise ValueError("cannot register an adapter for EngineKind.UNSUPPORTED")
    _ENGINES[kind] = adapter_cls


def registered_engines() -> list[str]:
    return sorted(kind.value for kind in _ENGINES)


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class RendererConfig:
    """Renderer 설정 스냅샷 (불변)."""
    engine: EngineKind
    engine_name: str  # 설정에 적힌 원래 문자열 (에러 메시지용)
    root_path: Path
    port: str = ""
    app_name: str = ""
    debug: bool = False
    server_name: str = ""
    secure: bool = False
    reload: bool = False  # True: 매 호출 재컴파일 (개발 모드)

    @classmethod
    def create(
        cls,
        engine: str | EngineKind,
        root_path: Path | str,
        *,
        port: str = "",
        app_name: str = "",
        debug: bool = False,
        server_name: str = "",
        secure: bool = False,
        reload: bool | None = None,
    ) -> "RendererConfig":
        """문자열 설정 → 스냅샷. reload 미지정 시 debug를 따름."""
        return cls(
            engine=EngineKind.parse(engine),
            engine_name=engine.value if isinstance(engine, EngineKind) else str(engine),
            root_path=Path(root_path),
            port=str(port),
            app_name=app_name,
            debug=debug,
            server_name=server_name,
            secure=secure,
            reload=debug if reload is None else reload,
        )


class _State(NamedTuple):
    config: RendererConfig
    adapter: EngineAdapter[Any] | None  # None → 지원하지 않는 엔진


def _build_state(config: RendererConfig) -> _State:
    adapter_cls = _ENGINES.get(config.engine)
    if adapter_cls is None:
        return _State(config, None)
    return _State(config, adapter_cls(config.root_path, reload=config.reload))


# =============================================================================
# Renderer
# =============================================================================

class Renderer:
    """
    페이지 렌더러.

    Usage:
        renderer = Renderer("jinja", root_path, app_name="myapp", port="4000")
        renderer.page(writer, request, "home", {"title": "Hi"})
    """

    def __init__(
        self,
        engine: str | EngineKind,
        root_path: Path | str,
        *,
        port: str = "",
        app_name: str = "",
        debug: bool = False,
        server_name: str = "",
        secure: bool = False,
        reload: bool | None = None,
    ):
        config = RendererConfig.create(
            engine,
            root_path,
            port=port,
            app_name=app_name,
            debug=debug,
            server_name=server_name,
            secure=secure,
            reload=reload,
        )
        self._write_lock = threading.Lock()
        self._state = _build_state(config)

    @classmethod
    def from_settings(cls, settings: "Settings", root_path: Path | str) -> "Renderer":
        return cls(
            settings.renderer,
            root_path,
            port=settings.port,
            app_name=settings.app_name,
            debug=settings.debug,
            server_name=settings.server_name,
            secure=settings.secure,
        )

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def config(self) -> RendererConfig:
        return self._state.config

    @property
    def engine(self) -> EngineKind:
        return self._state.config.engine

    @property
    def adapter(self) -> EngineAdapter[Any] | None:
        return self._state.adapter

    def reconfigure(self, **changes: Any) -> RendererConfig:
        """
        설정 교체 (새 어댑터 + 빈 캐시).

        Args:
            **changes: RendererConfig 필드 (engine은 문자열 허용)
                debug만 바꾸고 reload를 지정하지 않으면 reload도 debug를 따름

        Returns:
            새 설정 스냅샷
        """
        if "engine" in changes:
            raw = changes["engine"]
            changes["engine"] = EngineKind.parse(raw)
            changes["engine_name"] = raw.value if isinstance(raw, EngineKind) else str(raw)
        if "root_path" in changes:
            changes["root_path"] = Path(changes["root_path"])
        if "debug" in changes and "reload" not in changes:
            changes["reload"] = bool(changes["debug"])

        with self._write_lock:
            config = replace(self._state.config, **changes)
            self._state = _build_state(config)
        return config

    # =========================================================================
    # Render
    # =========================================================================

    def page(
        self,
        writer: Writer,
        request: "Request | None",
        template_name: str,
        page_data: Mapping[str, Any] | None = None,
        template_data: Mapping[str, Any] | None = None,
    ) -> None:
        """
        페이지 렌더 → writer.

        Args:
            writer: write(str) 지원 객체
            request: 현재 요청 (None이면 세션 필드 기본값)
            template_name: 확장자 없는 템플릿 이름
            page_data: 페이지 데이터
            template_data: 프레임워크 필드

        Raises:
            UnsupportedEngineError: writer를 건드리지 않음
            InvalidRenderArgumentError: 전제조건 위반
            TemplateNotFoundError / TemplateCompileError: 출력 없음
            TemplateExecutionError: 일부 출력 가능
            WriterError: writer 실패
        """
        state = self._state
        if state.adapter is None:
            raise UnsupportedEngineError(
                engine=state.config.engine_name,
                available=registered_engines(),
            )

        context = RenderContext(
            writer=writer,
            request=request,
            template_name=template_name,
            page_data=page_data,
            template_data=template_data,
        )
        context.validate()
        data = context.build_data(state.config)

        state.adapter.render_page(writer, template_name, data)

    def render_to_string(
        self,
        request: "Request | None",
        template_name: str,
        page_data: Mapping[str, Any] | None = None,
        template_data: Mapping[str, Any] | None = None,
    ) -> str:
        """page()를 StringIO로 실행해 문자열 반환."""
        buffer = io.StringIO()
        self.page(buffer, request, template_name, page_data, template_data)
        return buffer.getvalue()
