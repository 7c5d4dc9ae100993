"""
App layer: 부트스트랩, 설정, 미들웨어, 라우팅.

주의: 폴더 구분
- src/render/ → 렌더 코어 (엔진 어댑터)
- <root>/views/ → 애플리케이션 템플릿 (두 엔진 공용)
"""

from .bootstrap import Ravel
from .config import Settings, load_settings

__all__ = [
    "Ravel",
    "Settings",
    "load_settings",
]
