"""
Section Writer

Reads and writes backing documents and splices a rendered section body into
the document text. Text before the header and from the terminating heading
onward is kept exactly as it was.
"""

import logging
from pathlib import Path

from ..common.config import DEFAULT_SECTION_HEADER
from .parser import locate_section

logger = logging.getLogger("error_collector.rules.writer")


def read_document(path: Path) -> str:
    """
    Read a document verbatim.

    A missing file reads as an empty document. Other I/O errors propagate.
    """
    try:
        # newline="" keeps \r\n intact so untouched content round-trips
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        logger.debug("Document %s does not exist yet", path)
        return ""


def write_document(path: Path, content: str) -> None:
    """Overwrite the full document, creating parent directories if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def _separator(content: str) -> str:
    """Padding so that an appended section follows exactly one blank line"""
    if not content or content.endswith("\n\n"):
        return ""
    if content.endswith("\n"):
        return "\n"
    return "\n\n"


def splice_section(content: str, body: str, header: str = DEFAULT_SECTION_HEADER) -> str:
    """
    Replace (or append) the managed section.

    Args:
        content: Current document text ("" for a new document)
        body: Rendered section body from SectionRenderer.render
        header: Section header line

    Returns:
        New document text
    """
    section = f"{header}\n{body}"

    bounds = locate_section(content, header)
    if bounds is None:
        return content + _separator(content) + section

    after = content[bounds.end:]
    if after:
        # blank line before the heading that ends the section
        section += "\n"
    return content[:bounds.start] + section + after
