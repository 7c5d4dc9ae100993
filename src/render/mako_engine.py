"""
Expression 엔진 어댑터: Mako 기반.

구성:
- 진입점은 항상 views/<name>.page.mako
- 레이아웃은 Mako 고유 상속으로 구성: <%inherit file="...layout.mako"/>
- 레이아웃 파일 이름은 자유 (예: base.layout.mako를 여러 페이지가 공유).
  <name>.layout.mako 규칙은 선택 사항이며 어댑터는 paths.layout을 보지 않음
- 상속 경로는 views/ 기준 (TemplateLookup 루트)

모드:
- reload=False: 어댑터 전용 캐시 (Jinja2 어댑터와 공유하지 않음)
- reload=True: 호출마다 새 TemplateLookup → 호출 간 캐시 없음
"""

from pathlib import Path
from typing import Any

from mako import exceptions as mako_exceptions
from mako.lookup import TemplateLookup
from mako.runtime import Context
from mako.template import Template

from src.domain.errors import (
    RenderError,
    TemplateCompileError,
    TemplateExecutionError,
    TemplateNotFoundError,
)
from src.domain.schemas import TemplatePaths
from src.render.base import EngineAdapter, GuardedWriter
from src.render.engines import EngineKind

# 컴파일 단계 에러 (상속 부모는 실행 시점에 로드되므로 execute에서도 사용)
COMPILE_EXCEPTIONS = (mako_exceptions.SyntaxException, mako_exceptions.CompileException)


class MakoEngine(EngineAdapter[Template]):
    """
    Mako 렌더 어댑터.

    Usage:
        engine = MakoEngine(root_path, reload=True)
        engine.render_page(writer, "home", data)
    """

    kind = EngineKind.MAKO

    def __init__(self, root_path: Path, reload: bool = False):
        super().__init__(root_path, reload)
        self._lookup = None if reload else self._create_lookup()

    def _create_lookup(self) -> TemplateLookup:
        return TemplateLookup(
            directories=[str(self.views_dir)],
            filesystem_checks=False,
            strict_undefined=True,
            default_filters=["h"],
            input_encoding="utf-8",
        )

    def compile(self, template_name: str, paths: TemplatePaths) -> Template:
        """
        페이지 컴파일 (상속 부모는 실행 시 같은 lookup으로 로드).

        Raises:
            TemplateCompileError: 문법 에러, 인코딩 오류, 읽기 실패
            TemplateNotFoundError: lookup 실패
        """
        lookup = self._lookup if self._lookup is not None else self._create_lookup()
        uri = "/" + paths.relative(paths.page)

        try:
            return lookup.get_template(uri)
        except mako_exceptions.TemplateLookupException as e:
            raise TemplateNotFoundError(
                template=template_name,
                path=str(paths.page),
                error=str(e),
            ) from e
        except COMPILE_EXCEPTIONS as e:
            raise TemplateCompileError(
                template=template_name,
                path=str(paths.page),
                lineno=getattr(e, "lineno", None),
                error=str(e),
            ) from e
        except (UnicodeDecodeError, OSError) as e:
            raise TemplateCompileError(
                template=template_name,
                path=str(paths.page),
                error=str(e),
            ) from e

    def execute(
        self,
        compiled: Template,
        writer: GuardedWriter,
        data: dict[str, Any],
    ) -> None:
        """Context 버퍼로 writer를 직접 사용 → 출력이 바로 기록됨."""
        try:
            compiled.render_context(Context(writer, **data))

        except RenderError:
            raise
        except mako_exceptions.TemplateLookupException as e:
            raise TemplateNotFoundError(
                template=compiled.uri,
                path=compiled.filename,
                error=str(e),
            ) from e
        except COMPILE_EXCEPTIONS as e:
            raise TemplateCompileError(
                template=compiled.uri,
                path=compiled.filename,
                lineno=getattr(e, "lineno", None),
                error=str(e),
            ) from e
        except Exception as e:
            raise TemplateExecutionError(
                template=compiled.uri,
                path=compiled.filename,
                error=str(e),
            ) from e
