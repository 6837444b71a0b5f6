"""
Metadata Codec

Encodes/decodes the inline annotation that trails a rule line:

    - Always use pytest, not unittest <!-- @date:2025-01-31 @category:testing -->

Only ``date`` and ``category`` are recognized; other ``@key:value`` tokens
inside the comment are dropped. The last trailing ``<!-- ... -->`` is consumed
as metadata, valid tokens or not. Earlier ``<!--`` in the line stay part of
the rule text.
"""

import re
from typing import Tuple

from ..common.schemas import RuleMetadata


# Comment body may not contain another "<!--"; anchors to the last comment
METADATA_PATTERN = re.compile(r"\s*<!--((?:(?!<!--).)*?)-->\s*$")
TOKEN_PATTERN = re.compile(r"@?([A-Za-z_]\w*)\s*:\s*(\S+)")

# Field order used when encoding
RECOGNIZED_KEYS = ("date", "category")


def decode_metadata(line: str) -> Tuple[str, RuleMetadata]:
    """
    Split a rule line into its text and metadata.

    Args:
        line: Rule line without the bullet marker

    Returns:
        (text, metadata). Without an annotation the metadata is empty.
    """
    match = METADATA_PATTERN.search(line)
    if not match:
        return line.strip(), RuleMetadata()

    fields = {}
    for key, value in TOKEN_PATTERN.findall(match.group(1)):
        key = key.lower()
        if key in RECOGNIZED_KEYS and key not in fields:
            fields[key] = value

    return line[:match.start()].strip(), RuleMetadata(**fields)


def encode_metadata(metadata: RuleMetadata) -> str:
    """Annotation suffix for a rule line ("" when no field is set)."""
    tokens = []
    for key in RECOGNIZED_KEYS:
        value = getattr(metadata, key)
        if value:
            tokens.append(f"@{key}:{value}")
    if not tokens:
        return ""
    return f" <!-- {' '.join(tokens)} -->"
