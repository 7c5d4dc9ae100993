"""
Render layer: 페이지 렌더링 코어.

역할:
- 템플릿 이름 + 데이터 → writer 출력
- Jinja2 (native), Mako (expression) 두 엔진을 같은 계약 뒤에 감춤
- 엔진 선택은 설정 (RENDERER=jinja|mako)
"""

from .base import CompiledCache, EngineAdapter, GuardedWriter
from .context import RenderContext, build_render_data, build_template_data
from .engines import TEMPLATE_EXTENSIONS, EngineKind
from .jinja_engine import JinjaEngine, JinjaTemplateSet
from .locator import TemplateLocator, locate, validate_template_name
from .mako_engine import MakoEngine
from .renderer import Renderer, RendererConfig, register_engine, registered_engines

__all__ = [
    # renderer
    "Renderer",
    "RendererConfig",
    "register_engine",
    "registered_engines",
    # engines
    "EngineKind",
    "TEMPLATE_EXTENSIONS",
    "EngineAdapter",
    "JinjaEngine",
    "JinjaTemplateSet",
    "MakoEngine",
    # locator
    "TemplateLocator",
    "locate",
    "validate_template_name",
    # context
    "RenderContext",
    "build_render_data",
    "build_template_data",
    # internals
    "CompiledCache",
    "GuardedWriter",
]
