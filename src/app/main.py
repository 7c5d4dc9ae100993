"""
ASGI 애플리케이션 진입점.

실행:
- 개발: uvicorn src.app.main:create_app --factory --reload
- RAVEL_ROOT 환경 변수로 프로젝트 루트 지정 (기본: 현재 디렉터리)
"""

import os
from pathlib import Path

from fastapi import FastAPI

from src.app.bootstrap import Ravel

ROOT_ENV_VAR = "RAVEL_ROOT"


def create_app(root_path: Path | None = None) -> FastAPI:
    """Ravel 부트스트랩 후 FastAPI 앱 반환."""
    if root_path is None:
        root_path = Path(os.environ.get(ROOT_ENV_VAR, Path.cwd()))
    return Ravel.new(root_path).app


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    app = create_app()
    settings = app.state.ravel.settings

    uvicorn.run(
        app,
        host="127.0.0.1",
        port=int(settings.port),
    )
