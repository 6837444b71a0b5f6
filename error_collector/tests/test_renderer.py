"""
Tests for the Section Renderer

Grouping, ordering and parse/render round-trips.
"""

from error_collector.common.schemas import CategoryTable, Rule, RuleMetadata
from error_collector.rules.parser import parse_section
from error_collector.rules.renderer import SectionRenderer, render_rule
from error_collector.rules.writer import splice_section


def _rule(text, category=None, date=None):
    return Rule(text=text, metadata=RuleMetadata(category=category, date=date))


class TestRenderRule:
    def test_without_metadata(self):
        assert render_rule(_rule("Plain")) == "- Plain"

    def test_with_metadata(self):
        rendered = render_rule(_rule("Use rebase", category="git", date="2025-01-01"))
        assert rendered == "- Use rebase <!-- @date:2025-01-01 @category:git -->"


class TestSectionRenderer:
    """Tests for SectionRenderer.render"""

    def test_empty(self):
        assert SectionRenderer().render([]) == ""

    def test_uncategorized_first_then_groups(self):
        body = SectionRenderer().render([
            _rule("B", category="bash"),
            _rule("Legacy"),
            _rule("G", category="git"),
        ])
        assert body == (
            "\n"
            "- Legacy\n"
            "\n### Git\n\n"
            "- G <!-- @category:git -->\n"
            "\n### Bash\n\n"
            "- B <!-- @category:bash -->\n"
        )

    def test_relative_order_within_group(self):
        body = SectionRenderer().render([
            _rule("first", category="testing"),
            _rule("other", category="git"),
            _rule("second", category="testing"),
        ])
        assert body.index("first") < body.index("second")

    def test_unlisted_categories_sorted_after_listed(self):
        body = SectionRenderer().render([
            _rule("z", category="zeta"),
            _rule("a", category="alpha"),
            _rule("g", category="general"),
        ])
        assert body.index("### General") < body.index("### Alpha") < body.index("### Zeta")

    def test_empty_headings_are_rendered(self):
        body = SectionRenderer().render([_rule("G", category="git")], headings=["bash"])
        assert "### Bash\n\n" in body
        assert parse_section("## Learned Rules\n" + body).categories["bash"] == []

    def test_substitute_priority(self):
        table = CategoryTable.build([], priority=["bash", "git"])
        body = SectionRenderer(table).render([_rule("G", category="git"), _rule("B", category="bash")])
        assert body.index("### Bash") < body.index("### Git")


class TestRoundTrip:
    """render(parse(render(parse(doc)))) is stable"""

    HAND_WRITTEN = (
        "## Learned Rules\n"
        "- Legacy one\n"
        "### Git\n"
        "- Sign commits   <!--@date:2025-01-01-->\n"
        "### Code Style\n"
        "\n\n"
        "- Use snake_case\n"
        "### Empty\n"
        "- Explicit <!-- @category:bash -->\n"
    )

    def _render(self, content):
        model = parse_section(content)
        renderer = SectionRenderer()
        return renderer.render(model.flatten(renderer.table), headings=model.categories)

    def test_render_parse_is_idempotent(self):
        first = self._render(self.HAND_WRITTEN)
        document = splice_section("", first)
        second = self._render(document)
        assert first == second
        assert splice_section(document, second) == document

    def test_grouping_survives_round_trip(self):
        document = splice_section("", self._render(self.HAND_WRITTEN))
        model = parse_section(document)

        assert [r.text for r in model.uncategorized] == ["Legacy one"]
        assert [r.text for r in model.categories["git"]] == ["Sign commits"]
        assert model.categories["git"][0].date == "2025-01-01"
        assert [r.text for r in model.categories["code-style"]] == ["Use snake_case"]
        assert [r.text for r in model.categories["bash"]] == ["Explicit"]
        assert model.categories["empty"] == []
