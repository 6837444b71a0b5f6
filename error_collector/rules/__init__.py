"""
Learned Rules Engine

Parses, renders and edits the "## Learned Rules" section of a CLAUDE.md
document while leaving the rest of the document untouched.

Key Components:
- decode_metadata/encode_metadata: Inline <!-- @date:... @category:... --> annotation
- CategoryClassifier: Keyword-based category inference
- parse_section/SectionRenderer: Text <-> SectionModel
- splice_section: Writes a rendered section back into the document
- resolve_document: Project vs. global CLAUDE.md
- RuleStore: add/list/delete/update/review operations
"""

from .classifier import CategoryClassifier, classify_rule
from .dedup import find_duplicate, find_matches, is_duplicate
from .errors import (
    AmbiguousMatchError,
    DuplicateRuleError,
    InvalidRequestError,
    RuleNotFoundError,
    RuleStoreError,
)
from .metadata import decode_metadata, encode_metadata
from .parser import SectionBounds, locate_section, parse_section
from .renderer import SectionRenderer, render_rule
from .resolver import ResolvedDocument, resolve_document
from .store import (
    AddResult,
    DeleteResult,
    ListResult,
    ReviewEntry,
    ReviewResult,
    RuleStore,
    UpdateResult,
)
from .writer import read_document, splice_section, write_document

__all__ = [
    "CategoryClassifier",
    "classify_rule",
    "find_duplicate",
    "find_matches",
    "is_duplicate",
    "AmbiguousMatchError",
    "DuplicateRuleError",
    "InvalidRequestError",
    "RuleNotFoundError",
    "RuleStoreError",
    "decode_metadata",
    "encode_metadata",
    "SectionBounds",
    "locate_section",
    "parse_section",
    "SectionRenderer",
    "render_rule",
    "ResolvedDocument",
    "resolve_document",
    "AddResult",
    "DeleteResult",
    "ListResult",
    "ReviewEntry",
    "ReviewResult",
    "RuleStore",
    "UpdateResult",
    "read_document",
    "splice_section",
    "write_document",
]
