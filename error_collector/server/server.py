"""
Error Collector MCP Server.

Transport: stdio only (launched by Claude Code as an MCP server).

Expected MCP Tool Return Format:
{
    "ok": bool,
    "results": str,          # Present if ok is True (human-readable text)
    "path": str,             # Present if ok is True (document that was used)
    "scope": str,            # record_error/list_errors: "project" or "global"
    "error": str             # Present if ok is False
}
"""

import argparse
import logging
from typing import Any, Dict, Optional, Annotated
import os, sys, signal

from pydantic import Field
from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations

from ..common.config import load_config
from ..common.schemas import (
    format_add_result,
    format_delete_result,
    format_review,
    format_rule_list,
    format_update_result,
)
from ..rules import RuleStore, RuleStoreError

logger = logging.getLogger("error_collector.mcp")

PROJECT_DIR_DESCRIPTION = "Current working directory (to find project CLAUDE.md)"


class RulesMCPServerApp:
    """
    Main application class for the MCP server.

    Tools are thin wrappers around RuleStore: each call re-reads the
    document, so nothing is cached between calls.
    """
    def __init__(
            self,
            store: RuleStore,
            mcp_server_name: str = "error-collector",
        ) -> None:
        """
        Initializes the server with a rule store.
        Args:
            store (RuleStore): Store performing the rule operations.
            mcp_server_name (str): The name of the MCP server.
        """
        self.store = store
        self.mcp = FastMCP(name=mcp_server_name)

        def _run(operation, render, extra=None, **kwargs) -> Dict[str, Any]:
            """Run a store operation and shape the tool result.

            Store errors become {"ok": False, "error": ...}; I/O errors are
            raised to the client as ToolError.
            """
            try:
                result = operation(**kwargs)
            except RuleStoreError as exc:
                logger.info("%s rejected: %s", operation.__name__, exc)
                return {"ok": False, "error": str(exc)}
            except OSError as exc:
                logger.error("%s failed: %s", operation.__name__, exc)
                raise ToolError(f"Could not access rules document: {exc}") from exc
            response = {"ok": True, "results": render(result), "path": str(result.path)}
            if extra is not None:
                response.update(extra(result))
            return response

        # ---------- MCP Tools: Record Error ---------- #
        @self.mcp.tool(
            name="record_error",
            description=(
                "Record a correction from the user and save it as a learned rule in CLAUDE.md. "
                "Call this whenever the user corrects you. "
                "Duplicates are only detected by substring overlap; check list_errors first "
                "if a rule with the same meaning may already exist."
            ),
            annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False)
        )
        async def tool_record_error(
            error_description: Annotated[str, Field(description="What was wrong")],
            correction: Annotated[str, Field(description="What is correct")],
            rule: Annotated[str, Field(description='Derived guideline, e.g. "ALWAYS use X instead of Y"')],
            category: Annotated[Optional[str], Field(description="Category (e.g. git, bash, testing). Inferred from the rule if omitted.")] = None,
            project_dir: Annotated[Optional[str], Field(description=PROJECT_DIR_DESCRIPTION)] = None,
        ) -> Dict[str, Any]:
            """
            MCP tool to add a learned rule.

            Returns:
                Dict[str, Any]: Confirmation text, or the existing rule if it is a duplicate.
            """
            return _run(
                self.store.add_rule,
                lambda result: format_add_result(result, error_description, correction),
                extra=lambda result: {"added": result.added, "scope": result.scope},
                rule=rule,
                category=category,
                project_dir=project_dir,
            )

        # ---------- MCP Tools: List Errors ---------- #
        @self.mcp.tool(
            name="list_errors",
            description="List all learned rules from the CLAUDE.md file, optionally filtered by category or grouped by category.",
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_list_errors(
            category: Annotated[Optional[str], Field(description="Only list rules of this category")] = None,
            grouped: Annotated[bool, Field(description="Group the listing by category")] = False,
            project_dir: Annotated[Optional[str], Field(description=PROJECT_DIR_DESCRIPTION)] = None,
        ) -> Dict[str, Any]:
            """
            MCP tool to list learned rules with the indices delete_rule/update_rule accept.
            """
            return _run(
                self.store.list_rules,
                lambda result: format_rule_list(result, grouped=grouped),
                extra=lambda result: {"scope": result.scope},
                category=category,
                project_dir=project_dir,
            )

        # ---------- MCP Tools: Delete Rule ---------- #
        @self.mcp.tool(
            name="delete_rule",
            description="Delete a learned rule by its index (from list_errors) or by a unique text match.",
            annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True)
        )
        async def tool_delete_rule(
            index: Annotated[Optional[int], Field(description="1-based index from list_errors")] = None,
            match: Annotated[Optional[str], Field(description="Text that occurs in exactly one rule")] = None,
            project_dir: Annotated[Optional[str], Field(description=PROJECT_DIR_DESCRIPTION)] = None,
        ) -> Dict[str, Any]:
            """
            MCP tool to delete one learned rule. Exactly one of index/match is required.
            """
            return _run(self.store.delete_rule, format_delete_result, index=index, match=match, project_dir=project_dir)

        # ---------- MCP Tools: Update Rule ---------- #
        @self.mcp.tool(
            name="update_rule",
            description=(
                "Replace the text of a learned rule selected by index or unique text match. "
                "The rule's date is set to today; its category is kept unless a new one is given."
            ),
            annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True)
        )
        async def tool_update_rule(
            new_rule: Annotated[str, Field(description="Replacement rule text")],
            index: Annotated[Optional[int], Field(description="1-based index from list_errors")] = None,
            match: Annotated[Optional[str], Field(description="Text that occurs in exactly one rule")] = None,
            category: Annotated[Optional[str], Field(description="New category (keeps the current one if omitted)")] = None,
            project_dir: Annotated[Optional[str], Field(description=PROJECT_DIR_DESCRIPTION)] = None,
        ) -> Dict[str, Any]:
            """
            MCP tool to update one learned rule. Exactly one of index/match is required.
            """
            return _run(
                self.store.update_rule,
                format_update_result,
                new_rule=new_rule,
                index=index,
                match=match,
                category=category,
                project_dir=project_dir,
            )

        # ---------- MCP Tools: Review Rules ---------- #
        @self.mcp.tool(
            name="review_rules",
            description="Show learned rules grouped by age so stale ones can be updated or deleted.",
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_review_rules(
            threshold_days: Annotated[Optional[int], Field(description="Rules at least this many days old count as old (default 30)")] = None,
            project_dir: Annotated[Optional[str], Field(description=PROJECT_DIR_DESCRIPTION)] = None,
        ) -> Dict[str, Any]:
            """
            MCP tool to review learned rules by age.
            """
            return _run(
                self.store.review_rules,
                format_review,
                extra=lambda result: {"old": len(result.old)},
                threshold_days=threshold_days,
                project_dir=project_dir,
            )

    def run(self) -> None:
        """Runs the MCP server using stdio transport."""
        self.mcp.run(transport="stdio")


def main(argv=None) -> None:
    load_dotenv()
    config = load_config()

    parser = argparse.ArgumentParser(description="Run the error-collector MCP server (stdio).")
    parser.add_argument(
        "--server-name",
        default=config.server.name,
        help="Advertised MCP server name.",
    )
    parser.add_argument(
        "--log-level",
        default=config.server.log_level,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help="Log level (logs go to stderr).",
    )
    args = parser.parse_args(argv)

    # stdout carries the stdio transport
    logging.basicConfig(
        level=args.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting %s (pid %d)", args.server_name, os.getpid())

    app = RulesMCPServerApp(store=RuleStore(config=config), mcp_server_name=args.server_name)

    def _handle_shutdown(signum, frame):
        raise SystemExit(0)
    for sig in (signal.SIGINT, getattr(signal, "SIGTERM", None)):
        if sig is not None:
            signal.signal(sig, _handle_shutdown)

    app.run()


if __name__ == "__main__":
    main()
