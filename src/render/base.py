"""
EngineAdapter 추상 인터페이스.

두 템플릿 엔진을 같은 좁은 계약 뒤에 감춤:
- compile: 템플릿 세트 컴파일
- execute: writer로 실행

공통 처리 (여기서 한 번만):
- TemplateLocator로 경로 계산
- 페이지 파일 존재 확인 → 없으면 출력 전에 TemplateNotFoundError
- 컴파일 캐시 (reload 모드면 매번 재컴파일)
- writer 실패를 WriterError로 분리
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generic, TypeVar

from src.domain.errors import TemplateNotFoundError, WriterError
from src.domain.schemas import TemplatePaths
from src.render.context import Writer
from src.render.engines import EngineKind
from src.render.locator import TemplateLocator

T = TypeVar("T")


# =============================================================================
# Compiled Template Cache
# =============================================================================

class CompiledCache(Generic[T]):
    """
    템플릿 이름 → 컴파일 결과 캐시.

    동시성:
    - 읽기는 락 아래 dict 조회
    - 컴파일은 락 밖에서 로컬 값으로 완료한 뒤 한 번의 대입으로 publish
    - 같은 이름을 동시에 컴파일하면 last-writer-wins (반쯤 만든 값은 절대 노출 안 됨)
    """

    def __init__(self) -> None:
        self._entries: dict[str, T] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> T | None:
        with self._lock:
            return self._entries.get(key)

    def publish(self, key: str, value: T) -> T:
        with self._lock:
            self._entries[key] = value
        return value

    def get_or_compile(self, key: str, compile_fn: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached
        return self.publish(key, compile_fn())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# =============================================================================
# Writer Guard
# =============================================================================

class GuardedWriter:
    """
    writer 래퍼: write() 실패를 WriterError로 변환.

    템플릿 실행 에러와 전송 실패를 구분하기 위함.
    """

    def __init__(self, writer: Writer):
        self._writer = writer
        self.written = 0

    def write(self, s: str) -> None:
        if not s:
            return
        try:
            self._writer.write(s)
        except Exception as e:
            raise WriterError(error=str(e), written=self.written) from e
        self.written += len(s)


# =============================================================================
# Engine Adapter
# =============================================================================

class EngineAdapter(ABC, Generic[T]):
    """
    템플릿 엔진 어댑터 베이스.

    하위 클래스 구현:
    - kind: EngineKind
    - compile(template_name, paths) → 컴파일 결과 (에러는 RenderError 계열로 변환)
    - execute(compiled, writer, data) → writer로 출력
    """

    kind: EngineKind = EngineKind.UNSUPPORTED

    def __init__(self, root_path: Path, reload: bool = False):
        """
        Args:
            root_path: 프로젝트 루트 (views/ 상위)
            reload: True면 캐시 없이 매 호출마다 재컴파일 (개발 모드)
        """
        self.root_path = Path(root_path)
        self.reload = reload
        self.locator = TemplateLocator(self.root_path, self.kind)
        self._cache: CompiledCache[T] = CompiledCache()

    @property
    def views_dir(self) -> Path:
        return self.locator.views_dir

    def render_page(
        self,
        writer: Writer,
        template_name: str,
        data: dict[str, Any],
    ) -> None:
        """
        템플릿을 찾아 컴파일 후 writer로 실행.

        Raises:
            TemplateNotFoundError: 페이지 파일 없음 (출력 없음)
            TemplateCompileError: 문법 에러 (출력 없음)
            TemplateExecutionError: 실행 중 에러 (일부 출력 가능)
            WriterError: writer 실패
        """
        compiled = self.get_compiled(template_name)
        self.execute(compiled, GuardedWriter(writer), data)

    def get_compiled(self, template_name: str) -> T:
        """캐시 조회 또는 컴파일 (reload 모드는 항상 컴파일)."""
        if self.reload:
            return self._locate_and_compile(template_name)
        return self._cache.get_or_compile(
            template_name,
            lambda: self._locate_and_compile(template_name),
        )

    def is_cached(self, template_name: str) -> bool:
        return template_name in self._cache

    def clear_cache(self) -> None:
        self._cache.clear()

    def _locate_and_compile(self, template_name: str) -> T:
        paths = self.locator.locate(template_name)
        if not paths.page.is_file():
            raise TemplateNotFoundError(
                template=template_name,
                path=str(paths.page),
            )
        return self.compile(template_name, paths)

    @abstractmethod
    def compile(self, template_name: str, paths: TemplatePaths) -> T:
        """템플릿 세트 컴파일."""
        ...

    @abstractmethod
    def execute(self, compiled: T, writer: GuardedWriter, data: dict[str, Any]) -> None:
        """컴파일된 템플릿을 writer로 실행."""
        ...
