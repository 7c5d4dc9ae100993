"""
TemplateLocator: 템플릿 이름 → 파일 경로.

규칙 (두 엔진 공용):
- <root>/views/<name>.page.<ext>    (필수)
- <root>/views/<name>.layout.<ext>  (선택)

순수 함수: 파일을 열지 않음. 존재 확인은 어댑터 책임.
"""

import re
from pathlib import Path, PurePosixPath

from src.domain.constants import LAYOUT_SUFFIX, PAGE_SUFFIX, VIEWS_DIR
from src.domain.errors import InvalidRenderArgumentError, UnsupportedEngineError
from src.domain.schemas import TemplatePaths
from src.render.engines import TEMPLATE_EXTENSIONS, EngineKind

# 금지: 역슬래시, 제어문자, 드라이브 문자
FORBIDDEN_NAME_PATTERN = re.compile(r"[\\\x00-\x1f]|^[A-Za-z]:")


def validate_template_name(template_name: str) -> PurePosixPath:
    """
    템플릿 이름 검증.

    규칙:
    - 비어있지 않음
    - 상대 경로 ("admin/users" 허용)
    - ".." 세그먼트, 역슬래시 금지 (views/ 밖으로 나갈 수 없음)

    Raises:
        InvalidRenderArgumentError
    """
    if not template_name or not template_name.strip():
        raise InvalidRenderArgumentError(
            reason="template name cannot be empty",
        )

    if FORBIDDEN_NAME_PATTERN.search(template_name):
        raise InvalidRenderArgumentError(
            reason="template name contains forbidden characters",
            template=template_name,
        )

    name = PurePosixPath(template_name)
    if name.is_absolute() or ".." in name.parts:
        raise InvalidRenderArgumentError(
            reason="template name must stay inside the views directory",
            template=template_name,
        )
    return name


def locate(
    root_path: Path,
    template_name: str,
    engine: EngineKind,
) -> TemplatePaths:
    """
    템플릿 후보 경로 계산.

    Args:
        root_path: 프로젝트 루트
        template_name: 확장자 없는 논리 이름 (예: "home")
        engine: 엔진 종류

    Returns:
        TemplatePaths (page, layout)

    Raises:
        UnsupportedEngineError: 확장자 규칙이 없는 엔진
        InvalidRenderArgumentError: 잘못된 템플릿 이름
    """
    ext = TEMPLATE_EXTENSIONS.get(engine)
    if ext is None:
        raise UnsupportedEngineError(engine=engine.value)

    name = validate_template_name(template_name)
    views_dir = Path(root_path) / VIEWS_DIR
    base = views_dir.joinpath(*name.parent.parts)

    return TemplatePaths(
        views_dir=views_dir,
        page=base / f"{name.name}.{PAGE_SUFFIX}.{ext}",
        layout=base / f"{name.name}.{LAYOUT_SUFFIX}.{ext}",
    )


class TemplateLocator:
    """
    root_path/engine이 고정된 locate() 래퍼.

    Usage:
        locator = TemplateLocator(root_path, EngineKind.JINJA)
        paths = locator.locate("home")
    """

    def __init__(self, root_path: Path, engine: EngineKind):
        self.root_path = Path(root_path)
        self.engine = engine

    @property
    def views_dir(self) -> Path:
        return self.root_path / VIEWS_DIR

    def locate(self, template_name: str) -> TemplatePaths:
        return locate(self.root_path, template_name, self.engine)
