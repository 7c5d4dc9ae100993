"""
Pytest fixtures for the renderer tests.

구성:
- testdata/views/ : 두 엔진용 정적 템플릿 (home, plain, broken, strict)
- project_root   : testdata를 tmp_path로 복사 (템플릿 수정 테스트용)
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from src.render.renderer import Renderer

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def testdata_root() -> Path:
    """읽기 전용 testdata 루트 (views/ 포함)."""
    return Path(__file__).parent / "testdata"


@pytest.fixture
def project_root(tmp_path: Path, testdata_root: Path) -> Path:
    """수정 가능한 프로젝트 루트 (testdata 복사본)."""
    root = tmp_path / "project"
    shutil.copytree(testdata_root, root)
    return root


@pytest.fixture
def views_dir(project_root: Path) -> Path:
    return project_root / "views"


# =============================================================================
# Renderer Fixtures
# =============================================================================

@pytest.fixture
def make_renderer(project_root: Path) -> Callable[..., Renderer]:
    """
    Renderer 팩토리.

    Usage:
        renderer = make_renderer("mako", reload=True)
    """

    def factory(engine: str = "jinja", **options) -> Renderer:
        options.setdefault("app_name", "testapp")
        options.setdefault("port", "4000")
        return Renderer(engine, options.pop("root_path", project_root), **options)

    return factory


@pytest.fixture
def test_renderer(testdata_root: Path) -> Renderer:
    """testdata를 그대로 쓰는 Renderer (기본 jinja, 캐시 모드)."""
    return Renderer("jinja", testdata_root, app_name="testapp", port="4000")


# =============================================================================
# Logging Fixtures
# =============================================================================

class RecordCollector(logging.Handler):
    """로그 레코드 수집 핸들러."""

    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def ravel_log():
    """
    "ravel" 로거 캡처.

    configure_logging이 propagate=False로 두므로 수집 핸들러를 직접 연결.
    fixture setup 중의 로그도 포함.
    """
    logger = logging.getLogger("ravel")
    previous_level = logger.level
    collector = RecordCollector()
    logger.addHandler(collector)
    logger.setLevel(logging.DEBUG)
    yield collector
    logger.removeHandler(collector)
    logger.setLevel(previous_level)


@pytest.fixture(autouse=True)
def reset_ravel_logger():
    """테스트 간 "ravel" 로거 핸들러/설정 정리."""
    yield
    logger = logging.getLogger("ravel")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
