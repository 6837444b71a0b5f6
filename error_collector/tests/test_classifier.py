"""
Tests for the Category Classifier and category normalization
"""

import pytest

from error_collector.common.schemas import (
    CategoryTable,
    DEFAULT_CATEGORY_TABLE,
    display_category,
    normalize_category,
)
from error_collector.rules.classifier import CategoryClassifier, classify_rule


class TestClassifier:
    """Keyword lookup, first match wins"""

    @pytest.mark.parametrize("text,expected", [
        ("Always use pytest, not unittest", "testing"),
        ("Never force-push to a shared branch", "git"),
        ("Quote variables in bash scripts", "bash"),
        ("Answer in German", "communication"),
        ("Prefer small functions", "general"),
    ])
    def test_default_table(self, text, expected):
        assert classify_rule(text) == expected

    def test_case_insensitive(self):
        assert classify_rule("RUN PYTEST WITH -x") == "testing"

    def test_first_match_wins(self):
        # "commit" (git) and "test" (testing) both hit; git is listed first
        assert classify_rule("Commit the test fixtures separately") == "git"

    def test_substitute_table(self):
        table = CategoryTable.build(
            [("Frontend", ["react", "css"]), ("backend", ["django"])],
            priority=["backend", "frontend"],
            fallback="misc",
        )
        classifier = CategoryClassifier(table)

        assert classifier.classify("Use CSS modules") == "frontend"
        assert classifier.classify("Pin django versions") == "backend"
        assert classifier.classify("Anything else") == "misc"

    def test_order_of_table_changes_result(self):
        text = "commit the test fixtures"
        git_first = CategoryTable.build([("git", ["commit"]), ("testing", ["test"])], priority=[])
        test_first = CategoryTable.build([("testing", ["test"]), ("git", ["commit"])], priority=[])

        assert CategoryClassifier(git_first).classify(text) == "git"
        assert CategoryClassifier(test_first).classify(text) == "testing"


class TestCategoryNames:
    """Key and display forms"""

    @pytest.mark.parametrize("raw,key", [
        ("Bash", "bash"),
        ("Code Style", "code-style"),
        ("code_style", "code-style"),
        ("  CI  Pipeline ", "ci-pipeline"),
    ])
    def test_normalize(self, raw, key):
        assert normalize_category(raw) == key

    def test_display(self):
        assert display_category("code-style") == "Code Style"
        assert display_category("git") == "Git"

    def test_display_normalizes_back(self):
        for key in DEFAULT_CATEGORY_TABLE.priority:
            assert normalize_category(display_category(key)) == key

    def test_order_listed_then_alphabetical(self):
        ordered = DEFAULT_CATEGORY_TABLE.order(["zebra", "general", "alpha", "git", "bash"])
        assert ordered == ["git", "bash", "general", "alpha", "zebra"]
