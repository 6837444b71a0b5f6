"""
Section Parser

Recovers the rules of the "## Learned Rules" section of a CLAUDE.md-style
document. The section runs from the header to the next ``#``/``##`` heading
(or end of file); ``###`` headings inside it are category headings:

    ## Learned Rules

    - Legacy rule without metadata

    ### Bash

    - Quote paths with spaces <!-- @date:2025-01-31 @category:bash -->
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from ..common.config import DEFAULT_SECTION_HEADER
from ..common.schemas import Rule, SectionModel, normalize_category
from .metadata import decode_metadata

logger = logging.getLogger("error_collector.rules.parser")

TOP_HEADING_PATTERN = re.compile(r"^#{1,2}\s")
CATEGORY_HEADING_PATTERN = re.compile(r"^###\s+(.+?)\s*$")
BULLET_PATTERN = re.compile(r"^-\s+(.+)$")


@dataclass
class SectionBounds:
    """Location of the managed section inside a document"""
    start: int  # offset of the header
    end: int  # offset of the terminating heading, or len(content)
    body: str  # text after the header up to end (starts with the header line's remainder)


def _is_terminating_heading(stripped: str, header: str) -> bool:
    return bool(TOP_HEADING_PATTERN.match(stripped)) and stripped != header


def locate_section(content: str, header: str = DEFAULT_SECTION_HEADER) -> Optional[SectionBounds]:
    """
    Find the section by literal search for its header.

    Returns:
        SectionBounds, or None if the header does not occur.
    """
    start = content.find(header)
    if start == -1:
        return None

    body_start = start + len(header)
    position = body_start
    # The first piece is the rest of the header line itself
    for i, line in enumerate(content[body_start:].splitlines(keepends=True)):
        if i > 0 and _is_terminating_heading(line.strip(), header):
            return SectionBounds(start=start, end=position, body=content[body_start:position])
        position += len(line)

    return SectionBounds(start=start, end=len(content), body=content[body_start:])


def parse_section(content: str, header: str = DEFAULT_SECTION_HEADER) -> SectionModel:
    """
    Parse the managed section of a document.

    A missing section yields an empty model; that is how callers learn the
    section has not been created yet.

    Args:
        content: Full document text
        header: Section header line

    Returns:
        SectionModel with uncategorized rules and rules grouped by category
    """
    model = SectionModel()
    bounds = locate_section(content, header)
    if bounds is None:
        return model

    current_category = None

    for line in bounds.body.splitlines()[1:]:
        line_stripped = line.strip()

        heading_match = CATEGORY_HEADING_PATTERN.match(line_stripped)
        if heading_match:
            current_category = normalize_category(heading_match.group(1)) or None
            if current_category:
                model.categories.setdefault(current_category, [])
            continue

        bullet_match = BULLET_PATTERN.match(line_stripped)
        if not bullet_match:
            continue

        text, metadata = decode_metadata(bullet_match.group(1))
        if not text:
            continue
        if metadata.category is None and current_category is not None:
            metadata.category = current_category

        rule = Rule(text=text, metadata=metadata)
        if rule.category is None:
            model.uncategorized.append(rule)
        else:
            model.categories.setdefault(rule.category, []).append(rule)

    logger.debug(
        "Parsed %d rules (%d uncategorized, %d categories)",
        model.rule_count(), len(model.uncategorized), len(model.categories),
    )
    return model
