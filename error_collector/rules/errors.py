"""Errors raised by RuleStore operations."""

from typing import List, Tuple

from ..common.schemas import Rule


class RuleStoreError(Exception):
    """Base for rule store errors reported back to the caller"""


class InvalidRequestError(RuleStoreError):
    """Malformed request, rejected before any lookup"""


class RuleNotFoundError(RuleStoreError):
    """Index out of range or no rule matched"""


class AmbiguousMatchError(RuleStoreError):
    """A substring selector matched more than one rule"""

    def __init__(self, match: str, candidates: List[Tuple[int, Rule]]):
        self.match = match
        self.candidates = candidates
        listing = "\n".join(f"  {index}. {rule.text}" for index, rule in candidates)
        super().__init__(
            f'"{match}" matches {len(candidates)} rules. Use the index to select one:\n{listing}'
        )


class DuplicateRuleError(RuleStoreError):
    """The new text would duplicate an existing rule"""

    def __init__(self, text: str, existing: Rule):
        self.text = text
        self.existing = existing
        super().__init__(f'"{text}" duplicates existing rule: {existing.text}')
