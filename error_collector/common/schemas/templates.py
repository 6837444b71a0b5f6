"""
Result Text Templates

Renders RuleStore results as the human-readable text returned to the agent.
"""

from typing import TYPE_CHECKING, Optional

from .categories import display_category

if TYPE_CHECKING:
    from ...rules.store import AddResult, DeleteResult, ListResult, ReviewResult, UpdateResult
    from .rule import Rule


NO_DATE = "no date"
UNCATEGORIZED = "uncategorized"


def _document_label(result) -> str:
    """Scope and path, e.g. project document /work/app/CLAUDE.md"""
    return f"{result.scope} document {result.path}"


def format_rule_line(index: int, rule: "Rule") -> str:
    """Flat list line: index, date, category, text"""
    return f"{index}. [{rule.date or NO_DATE}] [{rule.category or UNCATEGORIZED}] {rule.text}"


def format_add_result(
    result: "AddResult",
    error_description: Optional[str] = None,
    correction: Optional[str] = None,
) -> str:
    """Confirmation for record_error, echoing the correction context"""
    if not result.added:
        return (
            f"Rule already exists in {_document_label(result)}. No duplicate added.\n"
            f"Existing rule: {result.duplicate_of.text}"
        )

    lines = [
        f"Rule recorded in {_document_label(result)} [{result.rule.category}]:",
        f"- {result.rule.text}",
    ]
    if error_description or correction:
        lines.append("")
    if error_description:
        lines.append(f"Error: {error_description}")
    if correction:
        lines.append(f"Correction: {correction}")
    return "\n".join(lines)


def format_rule_list(result: "ListResult", grouped: bool = False) -> str:
    """Flat or grouped listing; indices are the ones delete/update accept"""
    if not result.entries:
        if result.category:
            return f"No learned rules in category '{result.category}' found in {_document_label(result)}."
        return f"No learned rules found in {_document_label(result)}."

    if not grouped:
        body = "\n".join(format_rule_line(i, rule) for i, rule in result.entries)
        return f"Learned Rules from {_document_label(result)}:\n\n{body}"

    blocks = []
    for key, entries in result.groups:
        title = display_category(key) if key else "Uncategorized"
        lines = [f"### {title}"]
        lines.extend(f"{i}. [{rule.date or NO_DATE}] {rule.text}" for i, rule in entries)
        blocks.append("\n".join(lines))
    return f"Learned Rules from {_document_label(result)}:\n\n" + "\n\n".join(blocks)


def format_delete_result(result: "DeleteResult") -> str:
    return (
        f"Deleted rule {result.index} from {result.path}:\n"
        f"- {result.rule.text}\n\n"
        f"{result.remaining} rule(s) remaining."
    )


def format_update_result(result: "UpdateResult") -> str:
    return (
        f"Updated rule {result.index} in {result.path} [{result.new.category or UNCATEGORIZED}]:\n"
        f"- Before: {result.old.text}\n"
        f"- After:  {result.new.text}"
    )


def format_review(result: "ReviewResult") -> str:
    """Three buckets: old (>= threshold), recent, undated"""
    total = len(result.old) + len(result.recent) + len(result.undated)
    if total == 0:
        return f"No learned rules found in {result.path}."

    lines = [
        f"Rule review for {result.path} (threshold: {result.threshold_days} days)",
        "",
        f"Older than {result.threshold_days} days ({len(result.old)}):",
    ]
    lines.extend(
        f"  {e.index}. [{e.rule.date}, {e.age_days} days] [{e.rule.category or UNCATEGORIZED}] {e.rule.text}"
        for e in result.old
    )
    if not result.old:
        lines.append("  (none)")

    lines.extend(["", f"Recent ({len(result.recent)}):"])
    lines.extend(
        f"  {e.index}. [{e.rule.date}, {e.age_days} days] [{e.rule.category or UNCATEGORIZED}] {e.rule.text}"
        for e in result.recent
    )
    if not result.recent:
        lines.append("  (none)")

    lines.extend(["", f"Undated ({len(result.undated)}):"])
    lines.extend(
        f"  {e.index}. [{e.rule.category or UNCATEGORIZED}] {e.rule.text}"
        for e in result.undated
    )
    if not result.undated:
        lines.append("  (none)")

    if result.old:
        lines.extend([
            "",
            "Review the old rules: update the ones that still apply, delete the ones that do not.",
        ])
    return "\n".join(lines)
