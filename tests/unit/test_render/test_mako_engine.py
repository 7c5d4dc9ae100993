"""
test_mako_engine.py - Mako 어댑터 테스트

테스트 대상:
- <%inherit> 기반 레이아웃 구성
- 어댑터 전용 캐시 / reload (호출마다 새 lookup)
- 에러 정규화 (Jinja2 어댑터와 같은 분류)
"""

import io
from pathlib import Path

import pytest
from mako.template import Template

from src.domain.errors import (
    TemplateCompileError,
    TemplateExecutionError,
    TemplateNotFoundError,
)
from src.render.jinja_engine import JinjaEngine
from src.render.mako_engine import MakoEngine

BASE_DATA = {"app_name": "makoapp", "environment": "production", "port": "4000"}


def render(engine: MakoEngine, name: str, **extra) -> str:
    writer = io.StringIO()
    engine.render_page(writer, name, {**BASE_DATA, **extra})
    return writer.getvalue()


# =============================================================================
# 구성
# =============================================================================


class TestMakoComposition:
    """상속 구성."""

    def test_page_is_entry_point(self, project_root: Path):
        compiled = MakoEngine(project_root).get_compiled("home")

        assert isinstance(compiled, Template)
        assert compiled.uri == "/home.page.mako"

    def test_inherit_wraps_page(self, project_root: Path):
        html = render(MakoEngine(project_root), "home", title="Hi")

        assert "<title>makoapp</title>" in html
        assert html.index("<body") < html.index("<h1>makoapp home</h1>") < html.index("</body>")
        assert '<p class="title">Hi</p>' in html

    def test_page_without_layout(self, project_root: Path):
        assert render(MakoEngine(project_root), "plain") == "<p>plain page on port 4000</p>\n"

    def test_nested_template_name(self, project_root: Path):
        admin = project_root / "views" / "admin"
        admin.mkdir()
        (admin / "users.page.mako").write_text(
            '<%inherit file="/base.layout.mako"/>users of ${app_name}', encoding="utf-8"
        )

        html = render(MakoEngine(project_root), "admin/users")

        assert "users of makoapp" in html
        assert "<title>makoapp</title>" in html

    def test_named_layout_used_only_through_inherit(self, project_root: Path):
        """<name>.layout.mako는 <%inherit> 없이는 적용되지 않음."""
        (project_root / "views" / "plain.layout.mako").write_text(
            "<wrap>${self.body()}</wrap>", encoding="utf-8"
        )

        assert render(MakoEngine(project_root), "plain") == "<p>plain page on port 4000</p>\n"

    def test_cache_not_shared_with_jinja(self, project_root: Path):
        mako_engine = MakoEngine(project_root)
        jinja_engine = JinjaEngine(project_root)

        render(mako_engine, "home")

        assert mako_engine.is_cached("home")
        assert not jinja_engine.is_cached("home")


# =============================================================================
# 캐시 / reload
# =============================================================================


class TestMakoCache:
    """캐시와 reload."""

    def test_compiled_once(self, project_root: Path):
        engine = MakoEngine(project_root)

        assert engine.get_compiled("home") is engine.get_compiled("home")

    def test_reload_compiles_every_call(self, project_root: Path):
        engine = MakoEngine(project_root, reload=True)

        assert engine.get_compiled("home") is not engine.get_compiled("home")
        assert not engine.is_cached("home")

    def test_reload_sees_layout_change(self, project_root: Path):
        """reload 모드: 상속 부모 수정도 반영."""
        engine = MakoEngine(project_root, reload=True)
        assert "<title>makoapp</title>" in render(engine, "home")

        (project_root / "views" / "base.layout.mako").write_text(
            "<section>${self.body()}</section>", encoding="utf-8"
        )

        html = render(engine, "home")
        assert html.startswith("<section>")
        assert "<title>" not in html


# =============================================================================
# 에러
# =============================================================================


class TestMakoErrors:
    """에러 정규화."""

    def test_not_found(self, project_root: Path):
        writer = io.StringIO()

        with pytest.raises(TemplateNotFoundError) as exc_info:
            MakoEngine(project_root).render_page(writer, "no-file", BASE_DATA)

        assert exc_info.value.context["path"] == str(project_root / "views" / "no-file.page.mako")
        assert writer.getvalue() == ""

    def test_compile_error(self, project_root: Path):
        writer = io.StringIO()

        with pytest.raises(TemplateCompileError) as exc_info:
            MakoEngine(project_root).render_page(writer, "broken", BASE_DATA)

        assert exc_info.value.context["path"].endswith("broken.page.mako")
        assert writer.getvalue() == ""

    def test_missing_parent_is_not_found(self, project_root: Path):
        (project_root / "views" / "orphan.page.mako").write_text(
            '<%inherit file="nowhere.layout.mako"/>body', encoding="utf-8"
        )
        writer = io.StringIO()

        with pytest.raises(TemplateNotFoundError):
            MakoEngine(project_root).render_page(writer, "orphan", BASE_DATA)

        assert writer.getvalue() == ""

    def test_broken_parent_is_compile_error(self, project_root: Path):
        (project_root / "views" / "base.layout.mako").write_text(
            "% for x in y:\nunterminated", encoding="utf-8"
        )

        with pytest.raises(TemplateCompileError):
            MakoEngine(project_root).render_page(io.StringIO(), "home", BASE_DATA)

    def test_undefined_is_execution_error(self, project_root: Path):
        with pytest.raises(TemplateExecutionError) as exc_info:
            MakoEngine(project_root).render_page(io.StringIO(), "strict", BASE_DATA)

        assert exc_info.value.context["template"] == "/strict.page.mako"
        assert isinstance(exc_info.value.__cause__, NameError)

    def test_runtime_exception_is_execution_error(self, project_root: Path):
        (project_root / "views" / "divide.page.mako").write_text("${1 // zero}", encoding="utf-8")

        with pytest.raises(TemplateExecutionError):
            MakoEngine(project_root).render_page(io.StringIO(), "divide", {**BASE_DATA, "zero": 0})

    def test_invalid_utf8_is_compile_error(self, project_root: Path):
        (project_root / "views" / "latin.page.mako").write_bytes(b"<p>\xff\xfe bad</p>")
        writer = io.StringIO()

        with pytest.raises(TemplateCompileError) as exc_info:
            MakoEngine(project_root).render_page(writer, "latin", BASE_DATA)

        assert exc_info.value.context["path"].endswith("latin.page.mako")
        assert writer.getvalue() == ""

    def test_unreadable_source_is_compile_error(self, project_root: Path, monkeypatch):
        engine = MakoEngine(project_root)

        def deny(uri):
            raise PermissionError(13, "Permission denied", uri)

        monkeypatch.setattr(engine._lookup, "get_template", deny)

        with pytest.raises(TemplateCompileError) as exc_info:
            engine.render_page(io.StringIO(), "plain", BASE_DATA)

        assert isinstance(exc_info.value.__cause__, PermissionError)
