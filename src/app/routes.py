"""
라우터 + 미들웨어 스택 구성.

Starlette의 add_middleware는 나중에 추가한 것이 바깥쪽이므로
안쪽(세션)부터 역순으로 추가.
"""

import logging
import secrets
from typing import TYPE_CHECKING

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from src.app.middleware import (
    RealIPMiddleware,
    RecovererMiddleware,
    RequestIDMiddleware,
    RequestLogMiddleware,
)
from src.domain.constants import VERSION

if TYPE_CHECKING:
    from src.app.config import Settings

logger = logging.getLogger("ravel.info")

SECONDS_PER_MINUTE = 60


def add_session(app: FastAPI, settings: "Settings") -> None:
    """
    세션 로드/저장 미들웨어 추가.

    SESSION_SECRET 미설정 시 프로세스별 임시 키 사용 (재시작 시 세션 무효화).
    """
    secret = settings.session_secret
    if not secret:
        logger.warning("SESSION_SECRET is not set; using a temporary key for this process")
        secret = secrets.token_urlsafe(32)

    app.add_middleware(
        SessionMiddleware,
        secret_key=secret,
        session_cookie=settings.cookie_name,
        max_age=settings.session_lifetime * SECONDS_PER_MINUTE,
        same_site=settings.cookie_samesite,
        https_only=settings.cookie_secure,
    )


def build_app(settings: "Settings") -> FastAPI:
    """
    FastAPI 앱 생성.

    미들웨어 (바깥 → 안쪽):
    RequestID → RealIP → RequestLog(debug) → Recoverer → Session
    """
    app = FastAPI(
        title=settings.app_name,
        version=VERSION,
        debug=settings.debug,
    )

    add_session(app, settings)
    app.add_middleware(RecovererMiddleware)
    if settings.debug:
        app.add_middleware(RequestLogMiddleware)
    app.add_middleware(RealIPMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """헬스 체크."""
        return {"status": "ok"}

    return app
