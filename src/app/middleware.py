"""
HTTP 미들웨어.

순서 (바깥 → 안쪽):
1. RequestIDMiddleware: X-Request-ID 재사용 또는 발급
2. RealIPMiddleware: X-Real-IP / X-Forwarded-For → scope["client"]
3. RequestLogMiddleware: 요청 로그 (debug 모드만)
4. RecovererMiddleware: 처리되지 않은 예외 → 500
5. SessionMiddleware: 세션 로드/저장 (starlette)
"""

import logging
import re
import time
import uuid

from starlette.datastructures import Headers, MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("ravel.http")

REQUEST_ID_HEADER = "X-Request-ID"
REAL_IP_HEADER = "X-Real-IP"
FORWARDED_FOR_HEADER = "X-Forwarded-For"

# 외부에서 받은 request id 허용 형식 (헤더 인젝션 방지)
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._/-]{1,128}$")


def get_request_id(request: Request) -> str | None:
    """RequestIDMiddleware가 기록한 request id (없으면 None)."""
    return request.scope.get("state", {}).get("request_id")


# =============================================================================
# Request ID
# =============================================================================

class RequestIDMiddleware:
    """
    요청마다 ID 부여.

    - 들어온 X-Request-ID가 유효하면 재사용, 아니면 uuid4 hex 발급
    - request.state.request_id + 응답 헤더에 기록
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming = Headers(scope=scope).get(REQUEST_ID_HEADER, "")
        request_id = incoming if REQUEST_ID_PATTERN.match(incoming) else uuid.uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        await self.app(scope, receive, send_with_id)


# =============================================================================
# Real IP
# =============================================================================

def resolve_real_ip(headers: Headers) -> str | None:
    """X-Real-IP 우선, 없으면 X-Forwarded-For의 첫 번째 주소."""
    real_ip = headers.get(REAL_IP_HEADER, "").strip()
    if real_ip:
        return real_ip

    forwarded = headers.get(FORWARDED_FOR_HEADER, "")
    first = forwarded.split(",")[0].strip()
    return first or None


class RealIPMiddleware:
    """프록시 헤더의 클라이언트 주소로 scope["client"] 교체."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            ip = resolve_real_ip(Headers(scope=scope))
            if ip:
                client = scope.get("client")
                port = client[1] if client else 0
                scope = {**scope, "client": (ip, port)}

        await self.app(scope, receive, send)


# =============================================================================
# Request Log (debug only)
# =============================================================================

class RequestLogMiddleware(BaseHTTPMiddleware):
    """요청 1건당 한 줄 로그: 메서드, 경로, 상태, 소요 시간."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        client = request.client.host if request.client else "-"
        logger.info(
            f'"{request.method} {request.url.path}" from {client} - '
            f"{response.status_code} in {elapsed_ms:.1f}ms "
            f"[{get_request_id(request) or '-'}]"
        )
        return response


# =============================================================================
# Recoverer
# =============================================================================

class RecovererMiddleware(BaseHTTPMiddleware):
    """처리되지 않은 예외 → 로그 + 500 (프로세스는 계속)."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                f"Unhandled error on {request.method} {request.url.path} "
                f"[{get_request_id(request) or '-'}]"
            )
            return PlainTextResponse("Internal Server Error", status_code=500)
