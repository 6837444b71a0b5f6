"""
Learned Rule Schemas

Rule model, parsed section model and the category table shared by the
classifier and the renderer.
"""

from .categories import (
    CategoryTable,
    DEFAULT_CATEGORY_TABLE,
    FALLBACK_CATEGORY,
    display_category,
    normalize_category,
)
from .rule import DATE_FORMAT, Rule, RuleMetadata, SectionModel
from .templates import (
    format_add_result,
    format_delete_result,
    format_review,
    format_rule_line,
    format_rule_list,
    format_update_result,
)

__all__ = [
    "CategoryTable",
    "DEFAULT_CATEGORY_TABLE",
    "FALLBACK_CATEGORY",
    "display_category",
    "normalize_category",
    "DATE_FORMAT",
    "Rule",
    "RuleMetadata",
    "SectionModel",
    "format_add_result",
    "format_delete_result",
    "format_review",
    "format_rule_line",
    "format_rule_list",
    "format_update_result",
]
