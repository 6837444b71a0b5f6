"""
Error Collector

Turns user corrections into learned rules stored in CLAUDE.md.

Philosophy:
- The rules live in the document the agent already reads; no separate database
- Everything outside the "## Learned Rules" section is left byte-for-byte intact
- The section stays human-editable; metadata is an inline HTML comment
- Duplicate detection is a crude substring check; judging meaning is the agent's job

Usage:
    from error_collector.common import load_config
    from error_collector.rules import RuleStore
    from error_collector.server import RulesMCPServerApp
"""

__version__ = "0.1.0"
