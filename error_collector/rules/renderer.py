"""
Section Renderer

Serializes a flat list of rules back into section body text. Uncategorized
rules come first without a heading; category groups follow in the table's
display order, each as a blank line, a ``### Display Name`` heading, a blank
line and its bullets. Relative order within a group is preserved.
"""

from typing import Dict, Iterable, List, Tuple

from ..common.schemas import (
    CategoryTable,
    DEFAULT_CATEGORY_TABLE,
    Rule,
    display_category,
)
from .metadata import encode_metadata


def render_rule(rule: Rule) -> str:
    """Bullet line for one rule (no trailing newline)"""
    return f"- {rule.text}{encode_metadata(rule.metadata)}"


class SectionRenderer:
    """Renders rules in the section format understood by parse_section"""

    def __init__(self, table: CategoryTable = DEFAULT_CATEGORY_TABLE):
        self.table = table

    def group(self, rules: Iterable[Rule]) -> Tuple[List[Rule], Dict[str, List[Rule]]]:
        """Partition rules into (uncategorized, {category: rules})."""
        uncategorized: List[Rule] = []
        groups: Dict[str, List[Rule]] = {}
        for rule in rules:
            if rule.category is None:
                uncategorized.append(rule)
            else:
                groups.setdefault(rule.category, []).append(rule)
        return uncategorized, groups

    def render(self, rules: Iterable[Rule], headings: Iterable[str] = ()) -> str:
        """
        Render the section body (everything after the header line).

        Args:
            rules: Rules in mutation order
            headings: Category keys whose heading is written even with no rules

        Returns:
            Body text; "" when there is nothing to write.
        """
        uncategorized, groups = self.group(rules)
        for key in headings:
            groups.setdefault(key, [])

        parts = []
        if uncategorized:
            parts.append("\n")
            parts.extend(f"{render_rule(rule)}\n" for rule in uncategorized)

        for key in self.table.order(groups):
            parts.append(f"\n### {display_category(key)}\n\n")
            parts.extend(f"{render_rule(rule)}\n" for rule in groups[key])

        return "".join(parts)
