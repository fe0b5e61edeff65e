"""Pattern catalog for scene element detection."""

from .patterns import (
    PATTERN_RULES,
    PatternRule,
    get_catalog_categories,
    get_icon_for_category,
    get_rule_for_category,
    get_size_for_category,
    match_rules,
)

__all__ = [
    "PATTERN_RULES",
    "PatternRule",
    "get_catalog_categories",
    "get_icon_for_category",
    "get_rule_for_category",
    "get_size_for_category",
    "match_rules",
]
