"""
Location Resolver

Picks the document a call operates on:
1. If a project directory is given, walk up looking for CLAUDE.md
2. A hit outside the home directory is used (project scope)
3. Otherwise fall back to ~/.claude/CLAUDE.md (global scope)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..common.config import DEFAULT_DOCUMENT_NAME

logger = logging.getLogger("error_collector.rules.resolver")

PROJECT_SCOPE = "project"
GLOBAL_SCOPE = "global"


@dataclass
class ResolvedDocument:
    """Document chosen for an operation"""
    path: Path
    scope: str  # "project" or "global"


def resolve_document(
    project_dir: Optional[str] = None,
    home: Optional[Path] = None,
    document_name: str = DEFAULT_DOCUMENT_NAME,
    global_dir: str = ".claude",
) -> ResolvedDocument:
    """
    Resolve the backing document.

    Args:
        project_dir: Directory to start the upward search from
        home: Home directory (default: Path.home())
        document_name: File name looked for at each level
        global_dir: Directory of the global document, relative to home unless absolute

    Returns:
        ResolvedDocument with the path and its scope
    """
    home = Path(home or Path.home()).resolve()
    global_path = home / Path(global_dir).expanduser() / document_name

    if project_dir:
        directory = Path(project_dir).expanduser().resolve()
        while True:
            candidate = directory / document_name
            # The home directory's own CLAUDE.md is not a project document
            if candidate.is_file() and directory != home:
                logger.debug("Using project document %s", candidate)
                return ResolvedDocument(path=candidate, scope=PROJECT_SCOPE)
            parent = directory.parent
            if parent == directory:
                break
            directory = parent

    logger.debug("Using global document %s", global_path)
    return ResolvedDocument(path=global_path, scope=GLOBAL_SCOPE)
