"""Tests for the Jinja2 TemplateRenderer and the shipped project templates."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from netherforge.config import Settings
from netherforge.scaffolder.generator import PROJECT_FILES
from netherforge.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def context() -> dict:
    return Settings().template_context("Foo")


class TestTemplateRenderer:
    def test_default_template_dir_exists(self, renderer):
        assert renderer.template_dir.is_dir()

    def test_manifest_covers_every_template(self, renderer):
        manifest = sorted(template for template, _ in PROJECT_FILES)
        assert renderer.list_templates() == manifest

    def test_list_templates_with_prefix(self, renderer):
        assert renderer.list_templates("Contracts") == [
            "Contracts/ItemRegistry.abi.j2",
            "Contracts/ItemRegistry.sol.j2",
        ]

    def test_list_templates_missing_prefix(self, renderer):
        assert renderer.list_templates("nope") == []

    def test_render_substitutes_namespace(self, renderer, context):
        content = renderer.render("Models/Item.cs.j2", context)
        assert "namespace Foo.Models;" in content
        assert "{{" not in content

    def test_undefined_variable_raises(self, renderer):
        with pytest.raises(UndefinedError):
            renderer.render("Models/Item.cs.j2", {})

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.txt.j2").write_text("Hello {{ app_name }}!\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("hello.txt.j2", {"app_name": "Foo"}) == "Hello Foo!\n"

    async def test_render_to_file_creates_parents(self, renderer, context, tmp_path):
        out = tmp_path / "a" / "b" / "Item.cs"
        path = await renderer.render_to_file("Models/Item.cs.j2", out, context)
        assert path == out
        assert "Foo.Models" in out.read_text(encoding="utf-8")

    async def test_render_to_file_overwrites_by_default(self, renderer, context, tmp_path):
        out = tmp_path / "Item.cs"
        out.write_text("old", encoding="utf-8")
        await renderer.render_to_file("Models/Item.cs.j2", out, context)
        assert "Foo.Models" in out.read_text(encoding="utf-8")

    async def test_render_to_file_without_overwrite(self, renderer, context, tmp_path):
        out = tmp_path / "Item.cs"
        out.write_text("old", encoding="utf-8")
        with pytest.raises(FileExistsError):
            await renderer.render_to_file("Models/Item.cs.j2", out, context, overwrite=False)
        assert out.read_text(encoding="utf-8") == "old"


class TestProjectTemplates:
    def test_csproj_uses_target_framework(self, renderer):
        ctx = Settings(target_framework="net8.0").template_context("Foo")
        content = renderer.render("project.csproj.j2", ctx)
        assert "<TargetFramework>net8.0</TargetFramework>" in content

    def test_program_uses_kestrel_port(self, renderer):
        ctx = Settings(kestrel_port=6060).template_context("Foo")
        content = renderer.render("Program.cs.j2", ctx)
        assert "options.ListenLocalhost(6060);" in content
        assert "using Foo.Services;" in content

    def test_imports_reference_every_namespace(self, renderer, context):
        content = renderer.render("Pages/_Imports.razor.j2", context)
        for ns in ("Foo", "Foo.Models", "Foo.Services", "Foo.Shared"):
            assert f"@using {ns}\n" in content

    def test_contract_is_static(self, renderer, context):
        content = renderer.render("Contracts/ItemRegistry.sol.j2", context)
        assert "contract ItemRegistry" in content
        assert "Foo" not in content
