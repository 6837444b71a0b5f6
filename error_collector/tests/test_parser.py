"""
Tests for the Section Parser

Recovering rules, categories and section bounds from CLAUDE.md text.
"""

from error_collector.rules.parser import locate_section, parse_section


SAMPLE_DOCUMENT = """# Project Notes

Some intro text.

## Learned Rules

- Legacy rule without metadata
- Dated legacy rule <!-- @date:2024-12-01 -->

### Bash

- Quote paths with spaces <!-- @date:2025-01-31 -->
- Use set -euo pipefail <!-- @date:2025-01-02 @category:bash -->

### Git

- Never force-push main <!-- @date:2025-01-05 @category:git -->

## Other Section

- Not a rule
"""


class TestLocateSection:
    """Tests for locate_section"""

    def test_missing_header(self):
        assert locate_section("# Title\n\nNo rules here\n") is None

    def test_bounds_stop_at_next_top_heading(self):
        bounds = locate_section(SAMPLE_DOCUMENT)
        assert SAMPLE_DOCUMENT[bounds.start:].startswith("## Learned Rules")
        assert SAMPLE_DOCUMENT[bounds.end:].startswith("## Other Section")
        assert "### Git" in bounds.body

    def test_level_one_heading_terminates(self):
        content = "## Learned Rules\n\n- A\n\n# Appendix\n"
        bounds = locate_section(content)
        assert content[bounds.end:] == "# Appendix\n"

    def test_section_until_end_of_file(self):
        content = "intro\n## Learned Rules\n\n- A\n"
        bounds = locate_section(content)
        assert bounds.end == len(content)

    def test_custom_header(self):
        content = "## Lessons\n\n- A\n"
        assert locate_section(content, header="## Lessons") is not None
        assert locate_section(content) is None


class TestParseSection:
    """Tests for parse_section"""

    def test_missing_section_is_empty_model(self):
        model = parse_section("# Just a document\n")
        assert model.uncategorized == []
        assert model.categories == {}

    def test_uncategorized_rules(self):
        model = parse_section(SAMPLE_DOCUMENT)
        texts = [r.text for r in model.uncategorized]
        assert texts == ["Legacy rule without metadata", "Dated legacy rule"]
        assert model.uncategorized[1].date == "2024-12-01"

    def test_rules_inherit_heading_category(self):
        model = parse_section(SAMPLE_DOCUMENT)
        bash = model.categories["bash"]
        assert [r.text for r in bash] == ["Quote paths with spaces", "Use set -euo pipefail"]
        assert all(r.category == "bash" for r in bash)

    def test_stops_at_other_section(self):
        model = parse_section(SAMPLE_DOCUMENT)
        all_texts = [r.text for r in model.flatten()]
        assert "Not a rule" not in all_texts
        assert model.rule_count() == 5

    def test_explicit_category_wins_over_heading(self):
        content = "## Learned Rules\n\n### Bash\n\n- Use rebase <!-- @category:git -->\n"
        model = parse_section(content)
        assert model.categories["bash"] == []
        assert [r.text for r in model.categories["git"]] == ["Use rebase"]

    def test_explicit_category_without_heading(self):
        content = "## Learned Rules\n\n- Use rebase <!-- @category:git -->\n"
        model = parse_section(content)
        assert model.uncategorized == []
        assert model.categories["git"][0].text == "Use rebase"

    def test_empty_heading_is_kept(self):
        content = "## Learned Rules\n\n### Testing\n\n### Git\n\n- Sign commits\n"
        model = parse_section(content)
        assert model.categories["testing"] == []
        assert len(model.categories["git"]) == 1

    def test_heading_display_name_is_normalized(self):
        content = "## Learned Rules\n\n### Code Style\n\n- Use snake_case\n"
        model = parse_section(content)
        assert model.categories["code-style"][0].category == "code-style"

    def test_non_bullet_lines_are_ignored(self):
        content = "## Learned Rules\n\nSome prose.\n* star bullet\n-not a bullet\n- Real rule\n"
        model = parse_section(content)
        assert [r.text for r in model.uncategorized] == ["Real rule"]

    def test_crlf_document(self):
        content = "## Learned Rules\r\n\r\n- A\r\n\r\n### Git\r\n\r\n- B\r\n"
        model = parse_section(content)
        assert [r.text for r in model.uncategorized] == ["A"]
        assert [r.text for r in model.categories["git"]] == ["B"]
