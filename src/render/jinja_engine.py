"""
Native 엔진 어댑터: Jinja2 기반.

구성 (layout-includes-page):
- views/<name>.layout.html 이 있으면 레이아웃이 진입점
- 페이지는 레이아웃의 {% include page_template %} 자리에 주입
- 레이아웃이 없으면 views/<name>.page.html 단독 렌더

모드:
- reload=False: 이름별 1회 컴파일 후 캐시
- reload=True: cache_size=0 Environment → 매 호출 소스 재로드
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)

from src.domain.constants import PAGE_PLACEHOLDER_KEY
from src.domain.errors import (
    RenderError,
    TemplateCompileError,
    TemplateExecutionError,
    TemplateNotFoundError,
)
from src.domain.schemas import TemplatePaths
from src.render.base import EngineAdapter, GuardedWriter
from src.render.engines import EngineKind


@dataclass(frozen=True)
class JinjaTemplateSet:
    """컴파일된 Jinja2 템플릿 세트."""
    entry: Template           # 실행 진입점 (레이아웃 또는 페이지)
    page: Template | None     # 레이아웃에 주입될 페이지 (레이아웃 없으면 None)

    @property
    def has_layout(self) -> bool:
        return self.page is not None


class JinjaEngine(EngineAdapter[JinjaTemplateSet]):
    """
    Jinja2 렌더 어댑터.

    Usage:
        engine = JinjaEngine(root_path)
        engine.render_page(writer, "home", data)
    """

    kind = EngineKind.JINJA

    def __init__(self, root_path: Path, reload: bool = False):
        super().__init__(root_path, reload)
        self._env = self._create_environment()

    def _create_environment(self) -> Environment:
        options: dict[str, Any] = {}
        if self.reload:
            # 캐시 없음: get_template마다 디스크에서 다시 읽고 컴파일
            options.update(cache_size=0, auto_reload=True)
        else:
            options.update(auto_reload=False)

        return Environment(
            loader=FileSystemLoader(str(self.views_dir)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            **options,
        )

    def compile(self, template_name: str, paths: TemplatePaths) -> JinjaTemplateSet:
        """
        페이지 (+ 레이아웃) 컴파일.

        Raises:
            TemplateCompileError: 문법 에러, 인코딩 오류, 읽기 실패
            TemplateNotFoundError: 로더가 파일을 찾지 못함
        """
        loading = paths.page
        try:
            page = self._env.get_template(paths.relative(paths.page))
            if paths.layout.is_file():
                loading = paths.layout
                layout = self._env.get_template(paths.relative(paths.layout))
                return JinjaTemplateSet(entry=layout, page=page)
            return JinjaTemplateSet(entry=page, page=None)

        except TemplateSyntaxError as e:
            raise self._compile_error(template_name, e) from e
        except TemplateNotFound as e:
            raise TemplateNotFoundError(
                template=template_name,
                path=str(self.views_dir / e.name),
            ) from e
        except (UnicodeDecodeError, OSError) as e:
            # 인코딩 오류 / 읽기 실패: 소스를 로드할 수 없음
            raise TemplateCompileError(
                template=template_name,
                path=str(loading),
                error=str(e),
            ) from e

    def execute(
        self,
        compiled: JinjaTemplateSet,
        writer: GuardedWriter,
        data: dict[str, Any],
    ) -> None:
        """
        템플릿 실행 → writer로 스트리밍.

        청크 단위로 기록하므로 실행 중 실패 시 일부 출력이 남을 수 있음.
        """
        context = dict(data)
        if compiled.page is not None:
            context[PAGE_PLACEHOLDER_KEY] = compiled.page

        try:
            for chunk in compiled.entry.generate(context):
                writer.write(chunk)

        except RenderError:
            raise
        except TemplateSyntaxError as e:
            # include된 템플릿은 실행 시점에 컴파일됨
            raise self._compile_error(compiled.entry.name, e) from e
        except TemplateNotFound as e:
            raise TemplateNotFoundError(
                template=compiled.entry.name,
                path=str(self.views_dir / e.name),
            ) from e
        except Exception as e:
            raise TemplateExecutionError(
                template=compiled.entry.name,
                path=compiled.entry.filename,
                error=str(e),
            ) from e

    def _compile_error(self, template_name: str | None, e: TemplateSyntaxError) -> TemplateCompileError:
        return TemplateCompileError(
            template=template_name,
            path=e.filename or e.name,
            lineno=e.lineno,
            error=e.message,
        )
