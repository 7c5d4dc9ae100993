"""
Data schemas for the rendering core.

규칙:
- 프레임워크 예약 필드(TemplateData)는 페이지 데이터로 덮어쓸 수 없음
- 기본값 표는 여기 한 곳에서만 정의
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from src.domain.constants import ENVIRONMENT_PRODUCTION

# =============================================================================
# Template-visible Data
# =============================================================================

@dataclass
class TemplateData:
    """
    모든 템플릿에 주입되는 프레임워크 예약 필드.

    출처:
    - app_name, debug, environment, port, server_name, secure → Renderer 설정
    - csrf_token, is_authenticated → 요청의 세션 (요청 없으면 기본값)
    """
    # === Renderer 설정 ===
    app_name: str = ""
    debug: bool = False
    environment: str = ENVIRONMENT_PRODUCTION
    port: str = ""
    server_name: str = ""
    secure: bool = False

    # === 요청/세션 ===
    csrf_token: str = ""
    is_authenticated: bool = False

    def to_dict(self) -> dict[str, Any]:
        """렌더 컨텍스트 병합용."""
        return asdict(self)

    @classmethod
    def reserved_keys(cls) -> frozenset[str]:
        """페이지 데이터가 덮어쓸 수 없는 키 목록."""
        return frozenset(f.name for f in fields(cls))


# =============================================================================
# Template Paths
# =============================================================================

@dataclass(frozen=True)
class TemplatePaths:
    """TemplateLocator가 계산한 후보 경로 (존재 여부는 확인하지 않음)."""
    views_dir: Path
    page: Path
    layout: Path

    def relative(self, path: Path) -> str:
        """views/ 기준 상대 경로 (엔진 로더용 템플릿 이름)."""
        return path.relative_to(self.views_dir).as_posix()
