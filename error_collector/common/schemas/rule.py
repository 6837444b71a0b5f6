"""
Learned Rule Schema

A rule is a single guideline line inside the "## Learned Rules" section of a
CLAUDE.md document. Metadata (date, category) travels with the line as an
inline HTML comment so the document stays human-editable.
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from .categories import CategoryTable, normalize_category


DATE_FORMAT = "%Y-%m-%d"


class RuleMetadata(BaseModel):
    """Inline annotation of a rule"""
    date: Optional[str] = Field(default=None, description="Creation/last-update stamp (YYYY-MM-DD)")
    category: Optional[str] = Field(default=None, description="Category key; None for legacy rules")

    @field_validator("category")
    @classmethod
    def _normalize(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return normalize_category(value) or None

    def is_empty(self) -> bool:
        return self.date is None and self.category is None


class Rule(BaseModel):
    """One learned guideline"""
    text: str = Field(..., description="The guideline itself, a single line")
    metadata: RuleMetadata = Field(default_factory=RuleMetadata)

    @field_validator("text")
    @classmethod
    def _single_line(cls, value: str) -> str:
        value = " ".join(value.split())
        if not value:
            raise ValueError("rule text must not be empty")
        return value

    @property
    def category(self) -> Optional[str]:
        return self.metadata.category

    @property
    def date(self) -> Optional[str]:
        return self.metadata.date

    def parsed_date(self) -> Optional[datetime]:
        """Midnight of the stored date, or None if undated or malformed."""
        if not self.metadata.date:
            return None
        try:
            return datetime.strptime(self.metadata.date, DATE_FORMAT)
        except ValueError:
            return None


class SectionModel(BaseModel):
    """Parsed contents of the managed section"""
    uncategorized: List[Rule] = Field(default_factory=list)
    categories: Dict[str, List[Rule]] = Field(default_factory=dict)

    def flatten(self, table: Optional[CategoryTable] = None) -> List[Rule]:
        """
        Single ordered list of all rules.

        Uncategorized rules come first, then each category group. With a
        table the groups follow its display order, which is the order the
        renderer writes them in.
        """
        keys = table.order(self.categories) if table else list(self.categories)
        rules = list(self.uncategorized)
        for key in keys:
            rules.extend(self.categories[key])
        return rules

    def rule_count(self) -> int:
        return len(self.uncategorized) + sum(len(rules) for rules in self.categories.values())
