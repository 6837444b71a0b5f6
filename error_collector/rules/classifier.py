"""
Category Classifier

Keyword lookup, first match wins. Table order is part of the behavior:
"commit the test fixtures" is ``git`` with the default table because git is
checked before testing.
"""

from ..common.schemas import CategoryTable, DEFAULT_CATEGORY_TABLE


class CategoryClassifier:
    """Maps rule text to a category key using a CategoryTable"""

    def __init__(self, table: CategoryTable = DEFAULT_CATEGORY_TABLE):
        self.table = table

    def classify(self, text: str) -> str:
        text_lower = text.lower()
        for category, keywords in self.table.keywords:
            if any(keyword in text_lower for keyword in keywords):
                return category
        return self.table.fallback


def classify_rule(text: str, table: CategoryTable = DEFAULT_CATEGORY_TABLE) -> str:
    """Classify with a one-off classifier"""
    return CategoryClassifier(table).classify(text)
