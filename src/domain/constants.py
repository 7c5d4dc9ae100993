"""
Domain Constants: 프레임워크 전역 상수.

디렉터리 레이아웃, 템플릿 파일명 규칙, 기본값 등.
"""

# =============================================================================
# Version
# =============================================================================

VERSION = "1.0.0"

# =============================================================================
# Project Directory Structure (프로젝트 디렉터리 구조)
# =============================================================================
# <root>/
# ├── handlers/
# ├── migrations/
# ├── views/        # 템플릿 (두 엔진 공용)
# ├── data/
# ├── public/
# ├── tmp/
# ├── logs/
# ├── middleware/
# └── .env

PROJECT_FOLDERS = (
    "handlers",
    "migrations",
    "views",
    "data",
    "public",
    "tmp",
    "logs",
    "middleware",
)
VIEWS_DIR = "views"
LOGS_DIR = "logs"
ENV_FILENAME = ".env"

# =============================================================================
# Template File Naming (템플릿 파일명 규칙)
# =============================================================================
# views/<name>.page.<ext>     # 페이지 (필수)
# views/<name>.layout.<ext>   # 레이아웃 (선택)

PAGE_SUFFIX = "page"
LAYOUT_SUFFIX = "layout"

# Jinja2 레이아웃에서 페이지가 주입되는 자리: {% include page_template %}
PAGE_PLACEHOLDER_KEY = "page_template"

# 엔진이 소유한 이름: 렌더 데이터 키로 사용 불가 (엔진과 무관하게 같은 규칙)
# Mako Context 인자 / 예약어 / 런타임 네임스페이스 + Jinja2 페이지 자리
ENGINE_RESERVED_NAMES = frozenset(
    {
        PAGE_PLACEHOLDER_KEY,
        "buffer",
        "context",
        "loop",
        "UNDEFINED",
        "STOP_RENDERING",
        "capture",
        "caller",
        "self",
        "local",
        "parent",
        "next",
    }
)

# =============================================================================
# Environment
# =============================================================================

ENVIRONMENT_DEVELOPMENT = "development"
ENVIRONMENT_PRODUCTION = "production"

# =============================================================================
# Session Keys
# =============================================================================

SESSION_CSRF_KEY = "csrf_token"
SESSION_USER_KEY = "user_id"

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_APP_NAME = "ravel"
DEFAULT_PORT = "4000"
DEFAULT_RENDERER = "jinja"
DEFAULT_SESSION_LIFETIME_MINUTES = 1440
DEFAULT_COOKIE_NAME = "ravel_session"
DEFAULT_COOKIE_SAMESITE = "lax"

# 새 프로젝트의 .env 초기 내용
DEFAULT_ENV_CONTENT = """\
APP_NAME=ravel
DEBUG=true
PORT=4000
RENDERER=jinja
SERVER_NAME=localhost
SECURE=false
SESSION_SECRET=change-me
SESSION_LIFETIME=1440
COOKIE_NAME=ravel_session
COOKIE_SECURE=false
COOKIE_SAMESITE=lax
"""
