"""
Ravel: 애플리케이션에 노출되는 단일 조합 객체.

Ravel.new(root_path) 수행 순서:
1. 프로젝트 폴더 생성 (handlers, migrations, views, ...)
2. .env 생성 (없을 때만)
3. 설정 로드 (.env + 환경 변수)
4. 로깅 설정
5. Renderer 생성 (RENDERER 설정으로 엔진 선택)
6. FastAPI 앱 + 미들웨어 스택 구성
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from src.app.config import Settings, load_settings
from src.app.routes import build_app
from src.core.filesystem import InitPaths, create_file_if_not_exists, init_paths
from src.core.logging import configure_logging, get_logger
from src.domain.constants import (
    DEFAULT_ENV_CONTENT,
    ENV_FILENAME,
    LOGS_DIR,
    PROJECT_FOLDERS,
    VERSION,
)
from src.domain.errors import RenderError
from src.render.renderer import Renderer


class Ravel:
    """
    부트스트랩된 애플리케이션.

    Usage:
        ravel = Ravel.new(Path.cwd())

        @ravel.app.get("/")
        async def home(request: Request) -> HTMLResponse:
            return ravel.render(request, "home", {"title": "Home"})
    """

    version = VERSION

    def __init__(
        self,
        root_path: Path,
        settings: Settings,
        renderer: Renderer,
        app: FastAPI,
    ):
        self.root_path = root_path
        self.settings = settings
        self.renderer = renderer
        self.app = app
        self.info_log = get_logger("info")
        self.error_log = get_logger("error")

    @property
    def app_name(self) -> str:
        return self.settings.app_name

    @property
    def debug(self) -> bool:
        return self.settings.debug

    @classmethod
    def new(
        cls,
        root_path: Path | str,
        environ: Mapping[str, str] | None = None,
        log_to_file: bool = True,
    ) -> "Ravel":
        """
        프로젝트 초기화 + 조합 객체 생성.

        Args:
            root_path: 프로젝트 루트
            environ: 환경 변수 (기본 os.environ, 테스트용 주입)
            log_to_file: logs/app.log 파일 핸들러 사용 여부

        Returns:
            Ravel
        """
        root = Path(root_path)
        init_paths(InitPaths(root_path=root, folder_names=list(PROJECT_FOLDERS)))
        create_file_if_not_exists(root / ENV_FILENAME, DEFAULT_ENV_CONTENT)

        settings = load_settings(root, environ)
        configure_logging(
            debug=settings.debug,
            logs_dir=root / LOGS_DIR if log_to_file else None,
        )

        renderer = Renderer.from_settings(settings, root)
        app = build_app(settings)

        ravel = cls(root, settings, renderer, app)
        app.state.ravel = ravel
        ravel.info_log.info(
            f"{settings.app_name} v{VERSION} ready "
            f"(renderer={settings.renderer}, debug={settings.debug})"
        )
        return ravel

    def render(
        self,
        request: Request | None,
        template_name: str,
        page_data: Mapping[str, Any] | None = None,
        template_data: Mapping[str, Any] | None = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        """
        페이지 렌더 → HTMLResponse.

        렌더 실패 시 에러 로그 + 500 응답 (버퍼링하므로 부분 출력 없음).
        """
        try:
            html = self.renderer.render_to_string(
                request, template_name, page_data, template_data
            )
        except RenderError as e:
            self.error_log.error(f"Render failed for '{template_name}': {e.to_dict()}")
            return HTMLResponse("Internal Server Error", status_code=500)

        return HTMLResponse(html, status_code=status_code)
