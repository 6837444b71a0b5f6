"""
Error Collector MCP server.

Exposes the RuleStore operations as MCP tools over stdio.
"""

from .server import RulesMCPServerApp, main

__all__ = ["RulesMCPServerApp", "main"]
