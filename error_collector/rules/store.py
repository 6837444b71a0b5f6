"""
Rule Store

Add/list/delete/update/review operations over the learned rules section.

Every call reads the document fresh, works on the parsed model and, when it
mutates, writes the full document back once. There is no locking: two
concurrent writers race and the last write wins.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..common.config import CollectorConfig, load_config
from ..common.schemas import DATE_FORMAT, Rule, RuleMetadata, SectionModel, normalize_category
from .classifier import CategoryClassifier
from .dedup import find_duplicate_rule, find_matches
from .errors import (
    AmbiguousMatchError,
    DuplicateRuleError,
    InvalidRequestError,
    RuleNotFoundError,
)
from .parser import parse_section
from .renderer import SectionRenderer
from .resolver import GLOBAL_SCOPE, ResolvedDocument, resolve_document
from .writer import read_document, splice_section, write_document

logger = logging.getLogger("error_collector.rules.store")

UNCATEGORIZED = "uncategorized"


@dataclass
class AddResult:
    path: Path
    rule: Rule
    added: bool
    duplicate_of: Optional[Rule] = None
    scope: str = GLOBAL_SCOPE  # "project" or "global"


@dataclass
class ListResult:
    path: Path
    entries: List[Tuple[int, Rule]]
    # (category or None for legacy rules, entries) in display order
    groups: List[Tuple[Optional[str], List[Tuple[int, Rule]]]] = field(default_factory=list)
    category: Optional[str] = None
    scope: str = GLOBAL_SCOPE


@dataclass
class DeleteResult:
    path: Path
    index: int
    rule: Rule
    remaining: int


@dataclass
class UpdateResult:
    path: Path
    index: int
    old: Rule
    new: Rule


@dataclass
class ReviewEntry:
    index: int
    rule: Rule
    age_days: Optional[int] = None


@dataclass
class ReviewResult:
    path: Path
    threshold_days: int
    old: List[ReviewEntry] = field(default_factory=list)
    recent: List[ReviewEntry] = field(default_factory=list)
    undated: List[ReviewEntry] = field(default_factory=list)


@dataclass
class _LoadedSection:
    document: ResolvedDocument
    content: str
    model: SectionModel
    rules: List[Rule]


class RuleStore:
    """
    Operations on the learned rules of a CLAUDE.md document.

    Args:
        config: Collector configuration (default: load_config())
        home: Home directory used for resolution (default: Path.home())
        now: Clock, injectable for tests (default: datetime.now)
    """

    def __init__(
        self,
        config: Optional[CollectorConfig] = None,
        home: Optional[Path] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config or load_config()
        self.table = self.config.categories.to_table()
        self.classifier = CategoryClassifier(self.table)
        self.renderer = SectionRenderer(self.table)
        self._home = home
        self._now = now or datetime.now

    @property
    def header(self) -> str:
        return self.config.rules.section_header

    def resolve(self, project_dir: Optional[str] = None) -> ResolvedDocument:
        return resolve_document(
            project_dir,
            home=self._home,
            document_name=self.config.rules.document_name,
            global_dir=self.config.rules.global_dir,
        )

    def _today(self) -> str:
        return self._now().strftime(DATE_FORMAT)

    def _load(self, project_dir: Optional[str]) -> _LoadedSection:
        document = self.resolve(project_dir)
        content = read_document(document.path)
        model = parse_section(content, self.header)
        return _LoadedSection(
            document=document,
            content=content,
            model=model,
            rules=model.flatten(self.table),
        )

    def _save(self, loaded: _LoadedSection, rules: List[Rule]) -> None:
        headings = loaded.model.categories if self.config.rules.keep_empty_categories else ()
        body = self.renderer.render(rules, headings=headings)
        write_document(loaded.document.path, splice_section(loaded.content, body, self.header))

    def _select(
        self,
        rules: List[Rule],
        index: Optional[int],
        match: Optional[str],
    ) -> int:
        """Resolve an index/match selector to a 0-based position."""
        if (index is None) == (match is None):
            raise InvalidRequestError("Provide exactly one of 'index' or 'match'.")

        if index is not None:
            if not 1 <= index <= len(rules):
                if not rules:
                    raise RuleNotFoundError(f"Index {index} is out of range: there are no rules.")
                raise RuleNotFoundError(
                    f"Index {index} is out of range (valid: 1-{len(rules)})."
                )
            return index - 1

        if not match.strip():
            raise InvalidRequestError("'match' must not be empty.")
        candidates = find_matches(rules, match)
        if not candidates:
            raise RuleNotFoundError(f'No rule matches "{match}".')
        if len(candidates) > 1:
            raise AmbiguousMatchError(match, candidates)
        return candidates[0][0] - 1

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    def add_rule(
        self,
        rule: str,
        category: Optional[str] = None,
        project_dir: Optional[str] = None,
    ) -> AddResult:
        """
        Append a rule unless it duplicates an existing one.

        The category is classified from the text when not given. The rule is
        stamped with today's date.
        """
        text = " ".join(rule.split())
        if not text:
            raise InvalidRequestError("Rule text must not be empty.")

        loaded = self._load(project_dir)
        resolved_category = normalize_category(category) if category else ""
        new_rule = Rule(
            text=text,
            metadata=RuleMetadata(
                date=self._today(),
                category=resolved_category or self.classifier.classify(text),
            ),
        )

        duplicate = find_duplicate_rule(loaded.rules, text)
        if duplicate is not None:
            logger.info("Skipping duplicate rule for %s: %s", loaded.document.path, duplicate.text)
            return AddResult(
                path=loaded.document.path,
                rule=new_rule,
                added=False,
                duplicate_of=duplicate,
                scope=loaded.document.scope,
            )

        self._save(loaded, loaded.rules + [new_rule])
        logger.info("Added rule to %s [%s]: %s", loaded.document.path, new_rule.category, text)
        return AddResult(
            path=loaded.document.path,
            rule=new_rule,
            added=True,
            scope=loaded.document.scope,
        )

    def list_rules(
        self,
        category: Optional[str] = None,
        project_dir: Optional[str] = None,
    ) -> ListResult:
        """
        List rules with their 1-based indices.

        Args:
            category: Only rules of this category (case-insensitive);
                "uncategorized" selects legacy rules
        """
        loaded = self._load(project_dir)
        entries = list(enumerate(loaded.rules, 1))

        wanted = normalize_category(category) if category else None
        if wanted:
            if wanted == UNCATEGORIZED:
                entries = [(i, r) for i, r in entries if r.category is None]
            else:
                entries = [(i, r) for i, r in entries if r.category == wanted]

        groups: List[Tuple[Optional[str], List[Tuple[int, Rule]]]] = []
        legacy = [(i, r) for i, r in entries if r.category is None]
        if legacy:
            groups.append((None, legacy))
        for key in self.table.order(r.category for _, r in entries if r.category):
            groups.append((key, [(i, r) for i, r in entries if r.category == key]))

        return ListResult(
            path=loaded.document.path,
            entries=entries,
            groups=groups,
            category=wanted,
            scope=loaded.document.scope,
        )

    def delete_rule(
        self,
        index: Optional[int] = None,
        match: Optional[str] = None,
        project_dir: Optional[str] = None,
    ) -> DeleteResult:
        """Delete one rule selected by 1-based index or unique substring."""
        loaded = self._load(project_dir)
        position = self._select(loaded.rules, index, match)

        rules = list(loaded.rules)
        removed = rules.pop(position)
        self._save(loaded, rules)

        logger.info("Deleted rule %d from %s: %s", position + 1, loaded.document.path, removed.text)
        return DeleteResult(
            path=loaded.document.path,
            index=position + 1,
            rule=removed,
            remaining=len(rules),
        )

    def update_rule(
        self,
        new_rule: str,
        index: Optional[int] = None,
        match: Optional[str] = None,
        category: Optional[str] = None,
        project_dir: Optional[str] = None,
    ) -> UpdateResult:
        """
        Replace a rule's text, stamp today's date and optionally recategorize.

        Raises:
            DuplicateRuleError: the new text overlaps with another rule
        """
        text = " ".join(new_rule.split())
        if not text:
            raise InvalidRequestError("New rule text must not be empty.")

        loaded = self._load(project_dir)
        position = self._select(loaded.rules, index, match)
        old = loaded.rules[position]

        others = [rule for i, rule in enumerate(loaded.rules) if i != position]
        duplicate = find_duplicate_rule(others, text)
        if duplicate is not None:
            raise DuplicateRuleError(text, duplicate)

        resolved_category = normalize_category(category) if category else ""
        updated = Rule(
            text=text,
            metadata=RuleMetadata(
                date=self._today(),
                category=resolved_category or old.category,
            ),
        )

        rules = list(loaded.rules)
        rules[position] = updated
        self._save(loaded, rules)

        logger.info("Updated rule %d in %s: %s -> %s", position + 1, loaded.document.path, old.text, text)
        return UpdateResult(path=loaded.document.path, index=position + 1, old=old, new=updated)

    def review_rules(
        self,
        threshold_days: Optional[int] = None,
        project_dir: Optional[str] = None,
    ) -> ReviewResult:
        """
        Bucket rules by age.

        Age is the number of whole days from the rule's date (at midnight) to
        now. Rules at or over the threshold are "old"; rules without a usable
        date are "undated".
        """
        if threshold_days is None:
            threshold_days = self.config.rules.review_threshold_days
        if threshold_days < 0:
            raise InvalidRequestError("'threshold_days' must not be negative.")

        loaded = self._load(project_dir)
        now = self._now()
        result = ReviewResult(path=loaded.document.path, threshold_days=threshold_days)

        for i, rule in enumerate(loaded.rules, 1):
            dated = rule.parsed_date()
            if dated is None:
                if rule.date:
                    logger.warning("Unparseable date %r on rule %d, treating as undated", rule.date, i)
                result.undated.append(ReviewEntry(index=i, rule=rule))
                continue

            age_days = (now - dated).days
            entry = ReviewEntry(index=i, rule=rule, age_days=age_days)
            if age_days >= threshold_days:
                result.old.append(entry)
            else:
                result.recent.append(entry)

        return result
