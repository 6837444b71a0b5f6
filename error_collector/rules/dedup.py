"""
Duplicate detection and rule matching.

Both checks are plain case-insensitive substring tests. Meaning-level
duplicates ("use pnpm" vs "prefer pnpm over npm") are left to the calling
agent; only the syntactic overlap is caught here.
"""

from typing import Iterable, List, Optional, Tuple

from ..common.schemas import Rule


def is_duplicate(existing_texts: Iterable[str], new_text: str) -> bool:
    """True if new_text is contained in an existing text or contains one."""
    return find_duplicate(existing_texts, new_text) is not None


def find_duplicate(existing_texts: Iterable[str], new_text: str) -> Optional[str]:
    """Return the first existing text that overlaps with new_text."""
    lower = new_text.lower()
    for existing in existing_texts:
        existing_lower = existing.lower()
        if existing_lower in lower or lower in existing_lower:
            return existing
    return None


def find_duplicate_rule(rules: Iterable[Rule], new_text: str) -> Optional[Rule]:
    """Rule-level variant of find_duplicate"""
    rules = list(rules)
    match = find_duplicate([rule.text for rule in rules], new_text)
    if match is None:
        return None
    return next(rule for rule in rules if rule.text == match)


def find_matches(rules: List[Rule], needle: str) -> List[Tuple[int, Rule]]:
    """
    All rules whose text contains needle (case-insensitive).

    Returns:
        List of (1-based index, rule)
    """
    needle_lower = needle.lower()
    return [
        (i, rule)
        for i, rule in enumerate(rules, 1)
        if needle_lower in rule.text.lower()
    ]
