"""
Error Collector Common Module

Configuration and schemas shared by the rule engine and the MCP server.
"""

from .config import CollectorConfig, load_config

__all__ = [
    "CollectorConfig",
    "load_config",
]
