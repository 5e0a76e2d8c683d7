import re
from typing import Iterable, List, Optional, Sequence

from billwise.models import CategoryMatch, CategoryRule
from billwise.categorizers.rules import CATEGORY_TAGS, DEFAULT_CATEGORY_RULES, OTHER_CATEGORY

_LABEL_SPLIT = re.compile(r"[\s/]")
_SLUG_CHARS = re.compile(r"[\s/]")


def resolve_subcategory(matched_keywords: Sequence[str], subcategories: Sequence[str]) -> Optional[str]:
    """
    Pick a subcategory label for an already-chosen category.

    A label wins when any of its words (split on whitespace and "/") appears
    inside the joined matched keywords. Labels are tried in declared order and
    the first declared label is the fallback.

    Args:
        matched_keywords (Sequence[str]): Keywords of the winning rule found in the text.
        subcategories (Sequence[str]): Subcategory labels of the winning rule.

    Returns:
        Optional[str]: Chosen label, or None when the rule declares no subcategories.
    """
    if not subcategories:
        return None

    keyword_text = " ".join(matched_keywords).lower()
    for subcategory in subcategories:
        tokens = [t for t in _LABEL_SPLIT.split(subcategory.lower()) if t]
        if any(token in keyword_text for token in tokens):
            return subcategory

    return subcategories[0]


class ExpenseCategorizer:
    """
    Rule-based classifier mapping free-text expense descriptions to a spending category.

    The rule table is fixed at construction; iteration order decides ties.
    """

    def __init__(self, rules: Iterable[CategoryRule] = DEFAULT_CATEGORY_RULES):
        self.rules = tuple(rules)

    def classify(
        self,
        text: Optional[str],
        company_name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> CategoryMatch:
        """
        Classify an expense from its text, vendor name and extra description.

        Args:
            text (Optional[str]): Main expense text (e.g. extracted bill text).
            company_name (Optional[str]): Vendor name, if known.
            description (Optional[str]): Additional free-text description.

        Returns:
            CategoryMatch: Best category, or "Other" with confidence 0 when nothing matched.
        """
        corpus = f"{text or ''} {company_name or ''} {description or ''}".lower()

        best_rule: Optional[CategoryRule] = None
        best_confidence = 0.0
        best_keywords: List[str] = []

        for rule in self.rules:
            if not rule.keywords:
                continue
            matched = [kw for kw in rule.keywords if kw.lower() in corpus]
            if not matched:
                continue

            confidence = len(matched) / len(rule.keywords) * rule.base_confidence
            # Strictly greater: earlier rules keep ties
            if confidence > best_confidence:
                best_rule = rule
                best_confidence = confidence
                best_keywords = matched

        if best_rule is None:
            return CategoryMatch(category=OTHER_CATEGORY, confidence=0.0)

        return CategoryMatch(
            category=best_rule.category,
            confidence=best_confidence,
            subcategory=resolve_subcategory(best_keywords, best_rule.subcategories),
        )


def _slugify(label: str) -> str:
    return _SLUG_CHARS.sub("-", label.lower())


def suggest_tags(category: str, subcategory: Optional[str] = None) -> List[str]:
    """
    Build display tags for a categorized expense.

    Args:
        category (str): Category name, e.g. "Internet/Telecom".
        subcategory (Optional[str]): Subcategory label, if any.

    Returns:
        List[str]: Category slug, optional subcategory slug, then the curated tags
                   for the category (none for unknown categories or "Other").
    """
    tags = [_slugify(category)]
    if subcategory:
        tags.append(_slugify(subcategory))
    tags.extend(CATEGORY_TAGS.get(category, ()))
    return tags


_default_categorizer = ExpenseCategorizer()


def classify(
    text: Optional[str],
    company_name: Optional[str] = None,
    description: Optional[str] = None,
) -> CategoryMatch:
    """Classify with the default category table."""
    return _default_categorizer.classify(text, company_name, description)
