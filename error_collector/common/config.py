"""
Configuration Management for the Error Collector

Loads configuration from ~/.error-collector/config.json and environment variables.
"""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, List

from .schemas.categories import (
    DEFAULT_KEYWORDS,
    DEFAULT_PRIORITY,
    FALLBACK_CATEGORY,
    CategoryTable,
)

logger = logging.getLogger("error_collector.config")

# Default config paths
CONFIG_DIR = Path.home() / ".error-collector"
CONFIG_PATH = CONFIG_DIR / "config.json"

DEFAULT_SECTION_HEADER = "## Learned Rules"
DEFAULT_DOCUMENT_NAME = "CLAUDE.md"


@dataclass
class RulesConfig:
    """Backing document and section configuration"""
    document_name: str = DEFAULT_DOCUMENT_NAME
    section_header: str = DEFAULT_SECTION_HEADER
    review_threshold_days: int = 30
    keep_empty_categories: bool = True
    global_dir: str = ".claude"  # relative to the home directory unless absolute


@dataclass
class CategoryConfig:
    """Classifier keyword table and group display order"""
    keywords: Dict[str, List[str]] = field(
        default_factory=lambda: {category: list(words) for category, words in DEFAULT_KEYWORDS}
    )
    priority: List[str] = field(default_factory=lambda: list(DEFAULT_PRIORITY))
    fallback: str = FALLBACK_CATEGORY

    def to_table(self) -> CategoryTable:
        return CategoryTable.build(self.keywords.items(), self.priority, self.fallback)


@dataclass
class ServerConfig:
    """MCP server configuration"""
    name: str = "error-collector"
    log_level: str = "WARNING"


@dataclass
class CollectorConfig:
    """Main Error Collector configuration"""
    rules: RulesConfig = field(default_factory=RulesConfig)
    categories: CategoryConfig = field(default_factory=CategoryConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


_TRUE_STRINGS = ("true", "1", "yes", "on")
_FALSE_STRINGS = ("false", "0", "no", "off")


def _parse_bool(value, name: str) -> bool:
    """JSON booleans as-is; "true"/"false"-style strings are accepted too"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _parse_rules_config(data: dict) -> RulesConfig:
    """Parse rules section from config dict"""
    rules_data = data.get("rules", {})
    return RulesConfig(
        document_name=rules_data.get("document_name", DEFAULT_DOCUMENT_NAME),
        section_header=rules_data.get("section_header", DEFAULT_SECTION_HEADER),
        review_threshold_days=int(rules_data.get("review_threshold_days", 30)),
        keep_empty_categories=_parse_bool(
            rules_data.get("keep_empty_categories", True), "keep_empty_categories"
        ),
        global_dir=rules_data.get("global_dir", ".claude"),
    )


def _parse_category_config(data: dict) -> CategoryConfig:
    """Parse categories section from config dict.

    ``keywords`` is an ordered object (JSON objects keep their key order), so
    the file controls which category wins when several keywords match.
    """
    category_data = data.get("categories", {})
    config = CategoryConfig()
    if "keywords" in category_data:
        config.keywords = {
            category: list(words) for category, words in category_data["keywords"].items()
        }
    if "priority" in category_data:
        config.priority = list(category_data["priority"])
    config.fallback = category_data.get("fallback", FALLBACK_CATEGORY)
    return config


def _parse_server_config(data: dict) -> ServerConfig:
    """Parse server section from config dict"""
    server_data = data.get("server", {})
    return ServerConfig(
        name=server_data.get("name", "error-collector"),
        log_level=server_data.get("log_level", "WARNING"),
    )


def load_config() -> CollectorConfig:
    """
    Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (~/.error-collector/config.json)
    3. Default values
    """
    config = CollectorConfig()

    # Load from config file if exists
    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH, encoding="utf-8") as f:
                data = json.load(f)

            config.rules = _parse_rules_config(data)
            config.categories = _parse_category_config(data)
            config.server = _parse_server_config(data)
        except (json.JSONDecodeError, IOError, AttributeError, TypeError, ValueError) as e:
            logger.warning("Failed to load config file %s: %s", CONFIG_PATH, e)
            config = CollectorConfig()

    # Environment variable overrides
    if os.getenv("ERROR_COLLECTOR_DOCUMENT"):
        config.rules.document_name = os.getenv("ERROR_COLLECTOR_DOCUMENT")
    if os.getenv("ERROR_COLLECTOR_SECTION_HEADER"):
        config.rules.section_header = os.getenv("ERROR_COLLECTOR_SECTION_HEADER")
    if os.getenv("ERROR_COLLECTOR_REVIEW_DAYS"):
        try:
            config.rules.review_threshold_days = int(os.getenv("ERROR_COLLECTOR_REVIEW_DAYS"))
        except ValueError:
            logger.warning("Ignoring non-integer ERROR_COLLECTOR_REVIEW_DAYS")
    if os.getenv("ERROR_COLLECTOR_GLOBAL_DIR"):
        config.rules.global_dir = os.getenv("ERROR_COLLECTOR_GLOBAL_DIR")

    if os.getenv("MCP_SERVER_NAME"):
        config.server.name = os.getenv("MCP_SERVER_NAME")
    if os.getenv("ERROR_COLLECTOR_LOG_LEVEL"):
        config.server.log_level = os.getenv("ERROR_COLLECTOR_LOG_LEVEL")

    return config
