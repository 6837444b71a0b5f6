"""
Rule Categories

Category keys are lowercase and hyphenated ("code-style"); the display form
title-cases each hyphen-separated word ("Code Style"). The classifier and the
renderer both go through a CategoryTable so the keyword table and the display
order can be swapped in tests or from config.json.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple


FALLBACK_CATEGORY = "general"

# Ordered: the first category with a keyword hit wins.
DEFAULT_KEYWORDS: List[Tuple[str, List[str]]] = [
    ("git", ["git ", "git-", "commit", "branch", "merge", "rebase", "pull request", "stash", "cherry-pick"]),
    ("bash", ["bash", "shell", "terminal", "zsh", "sudo", "chmod", "grep", "curl", "command line"]),
    ("testing", ["test", "pytest", "jest", "mock", "assert", "coverage", "fixture"]),
    ("code-style", ["naming", "indent", "lint", "format", "style", "docstring", "type hint", "convention"]),
    ("architecture", ["architecture", "design", "pattern", "module", "dependency", "refactor", "interface"]),
    ("tooling", ["npm", "pip", "docker", "build", "package", "install", "config", "editor"]),
    ("documentation", ["readme", "documentation", "changelog", "comment"]),
    ("communication", ["respond", "answer", "explain", "german", "english", "tone", "language"]),
]

DEFAULT_PRIORITY: List[str] = [
    "git",
    "bash",
    "testing",
    "code-style",
    "architecture",
    "tooling",
    "documentation",
    "communication",
    FALLBACK_CATEGORY,
]


def normalize_category(name: str) -> str:
    """Normalize a category name to its key: lowercase, words joined by hyphens"""
    normalized = re.sub(r"[\s_]+", "-", name.strip().lower())
    normalized = re.sub(r"-{2,}", "-", normalized)
    return normalized.strip("-")


def display_category(key: str) -> str:
    """Display form of a category key ("code-style" -> "Code Style")"""
    return " ".join(word.capitalize() for word in key.split("-") if word)


@dataclass(frozen=True)
class CategoryTable:
    """Keyword table for classification plus the display/sort order of groups."""
    keywords: Tuple[Tuple[str, Tuple[str, ...]], ...]
    priority: Tuple[str, ...]
    fallback: str = FALLBACK_CATEGORY

    @classmethod
    def build(
        cls,
        keywords: Iterable[Tuple[str, Sequence[str]]],
        priority: Sequence[str],
        fallback: str = FALLBACK_CATEGORY,
    ) -> "CategoryTable":
        """Build a table, normalizing category keys and lower-casing keywords."""
        return cls(
            keywords=tuple(
                (normalize_category(category), tuple(word.lower() for word in words))
                for category, words in keywords
            ),
            priority=tuple(normalize_category(category) for category in priority),
            fallback=normalize_category(fallback),
        )

    def sort_key(self, category: str) -> Tuple[int, int, str]:
        if category in self.priority:
            return (0, self.priority.index(category), "")
        return (1, 0, category)

    def order(self, categories: Iterable[str]) -> List[str]:
        """Listed categories in priority order, then the rest alphabetically."""
        return sorted(set(categories), key=self.sort_key)

    def keyword_map(self) -> Dict[str, List[str]]:
        return {category: list(words) for category, words in self.keywords}


DEFAULT_CATEGORY_TABLE = CategoryTable.build(DEFAULT_KEYWORDS, DEFAULT_PRIORITY)
