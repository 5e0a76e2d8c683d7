"""Expense categorization against a static keyword rule table."""
from billwise.categorizers.expense_categorizer import (
    ExpenseCategorizer,
    classify,
    resolve_subcategory,
    suggest_tags,
)
from billwise.categorizers.rules import CATEGORY_TAGS, DEFAULT_CATEGORY_RULES, OTHER_CATEGORY

__all__ = [
    "ExpenseCategorizer",
    "classify",
    "resolve_subcategory",
    "suggest_tags",
    "CATEGORY_TAGS",
    "DEFAULT_CATEGORY_RULES",
    "OTHER_CATEGORY",
]
