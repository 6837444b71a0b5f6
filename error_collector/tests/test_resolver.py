"""
Tests for the Location Resolver
"""

from pathlib import Path

import pytest

from error_collector.rules.resolver import GLOBAL_SCOPE, PROJECT_SCOPE, resolve_document


@pytest.fixture
def home(tmp_path):
    home = tmp_path / "home" / "user"
    home.mkdir(parents=True)
    return home


class TestResolveDocument:
    """Project document lookup with global fallback"""

    def test_no_project_dir_uses_global(self, home):
        resolved = resolve_document(None, home=home)
        assert resolved.path == home.resolve() / ".claude" / "CLAUDE.md"
        assert resolved.scope == GLOBAL_SCOPE

    def test_document_in_project_dir(self, home, tmp_path):
        project = tmp_path / "work" / "app"
        project.mkdir(parents=True)
        (project / "CLAUDE.md").write_text("# App\n")

        resolved = resolve_document(str(project), home=home)

        assert resolved.path == project.resolve() / "CLAUDE.md"
        assert resolved.scope == PROJECT_SCOPE

    def test_walks_up_to_ancestor(self, home, tmp_path):
        project = tmp_path / "work" / "app"
        nested = project / "src" / "pkg"
        nested.mkdir(parents=True)
        (project / "CLAUDE.md").write_text("# App\n")

        resolved = resolve_document(str(nested), home=home)

        assert resolved.path == project.resolve() / "CLAUDE.md"

    def test_nearest_document_wins(self, home, tmp_path):
        outer = tmp_path / "work"
        inner = outer / "app"
        inner.mkdir(parents=True)
        (outer / "CLAUDE.md").write_text("outer\n")
        (inner / "CLAUDE.md").write_text("inner\n")

        assert resolve_document(str(inner), home=home).path == inner.resolve() / "CLAUDE.md"

    def test_no_document_falls_back_to_global(self, home, tmp_path):
        project = tmp_path / "work" / "app"
        project.mkdir(parents=True)

        resolved = resolve_document(str(project), home=home)

        assert resolved.scope == GLOBAL_SCOPE
        assert resolved.path == home.resolve() / ".claude" / "CLAUDE.md"

    def test_home_document_is_not_a_project_hit(self, home):
        (home / "CLAUDE.md").write_text("# Home\n")
        project = home / "code" / "app"
        project.mkdir(parents=True)

        resolved = resolve_document(str(project), home=home)

        assert resolved.scope == GLOBAL_SCOPE

    def test_walk_continues_past_home(self, tmp_path):
        # A document above the home directory is still found
        home = tmp_path / "users" / "me"
        project = home / "app"
        project.mkdir(parents=True)
        (home / "CLAUDE.md").write_text("# Home\n")
        (tmp_path / "users" / "CLAUDE.md").write_text("# Shared\n")

        resolved = resolve_document(str(project), home=home)

        assert resolved.scope == PROJECT_SCOPE
        assert resolved.path == (tmp_path / "users").resolve() / "CLAUDE.md"

    def test_custom_document_name_and_global_dir(self, home, tmp_path):
        resolved = resolve_document(None, home=home, document_name="AGENTS.md", global_dir="notes")
        assert resolved.path == home.resolve() / "notes" / "AGENTS.md"

        absolute = tmp_path / "elsewhere"
        resolved = resolve_document(None, home=home, global_dir=str(absolute))
        assert resolved.path == Path(absolute) / "CLAUDE.md"
