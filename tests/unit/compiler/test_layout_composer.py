"""Tests for LayoutComposer."""
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.templates import make_locator
from modx.core.compiler.report import CompilationReport
from modx.core.compiler.transformers import LayoutComposer, RenderScope
from modx.core.exceptions import TemplateNotFoundError


def _scope(layout=None) -> RenderScope:
    return RenderScope(template_name="page", report=CompilationReport("page"), layout=layout)


@pytest.fixture
def composer(tmp_path: Path) -> LayoutComposer:
    locator = make_locator(
        tmp_path,
        {
            "layouts/main": "<html><: content :></html>",
            "layouts/twice": "[<: content :>|<:content:>]",
            "flat": "<flat><: content :></flat>",
        },
    )
    return LayoutComposer(locator)


class TestLayoutComposer:
    def test_body_is_spliced_into_layout(self, composer: LayoutComposer) -> None:
        scope = _scope()
        out = composer.transform('<: layout "main" :>BODY', scope)

        assert out == "<html>BODY</html>"
        assert scope.report.layout == "main"

    def test_single_quoted_layout_name(self, composer: LayoutComposer) -> None:
        assert composer.transform("<:layout 'main':>B", _scope()) == "<html>B</html>"

    def test_text_before_directive_is_kept(self, composer: LayoutComposer) -> None:
        assert composer.transform('pre<: layout "main" :>B', _scope()) == "pre<html>B</html>"

    def test_every_content_placeholder_is_replaced(self, composer: LayoutComposer) -> None:
        assert composer.transform('<: layout "twice" :>x', _scope()) == "[x|x]"

    def test_layout_found_in_flat_directory(self, composer: LayoutComposer) -> None:
        assert composer.transform('<: layout "flat" :>x', _scope()) == "<flat>x</flat>"

    def test_default_layout_used_when_template_declares_none(self, composer: LayoutComposer) -> None:
        assert composer.transform("BODY", _scope(layout="main")) == "<html>BODY</html>"

    def test_declared_layout_wins_over_default(self, composer: LayoutComposer) -> None:
        assert composer.transform('<: layout "flat" :>B', _scope(layout="main")) == "<flat>B</flat>"

    def test_no_layout_leaves_content_unchanged(self, composer: LayoutComposer) -> None:
        assert composer.transform("plain", _scope()) == "plain"

    def test_backslashes_in_body_are_literal(self, composer: LayoutComposer) -> None:
        assert composer.transform('<: layout "main" :>a\\1b', _scope()) == "<html>a\\1b</html>"

    def test_missing_layout_raises(self, composer: LayoutComposer) -> None:
        with pytest.raises(TemplateNotFoundError) as exc:
            composer.transform('<: layout "nope" :>B', _scope())
        assert exc.value.kind == "layout"

    def test_compose_with_explicit_default_layout(self, composer: LayoutComposer) -> None:
        scope = _scope()
        assert composer.compose("BODY", scope, default_layout="main") == "<html>BODY</html>"
        assert scope.report.layout == "main"
