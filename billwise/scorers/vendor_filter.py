import re
from typing import List, Optional, Sequence

from rapidfuzz import fuzz

from billwise.config import FUZZY_THRESHOLD
from billwise.models import PlaceCandidate

# Providers a customer usually cannot switch away from
_UTILITY_PATTERN = re.compile(
    r"\b(electric|electricity|gas|natural gas|water|sewer|utility|utilities|power|energy|"
    r"internet|broadband|cable|phone|mobile|cellular|wireless|telecom|telecommunications|"
    r"cuc|caribbean utilities|flow|digicel|logic)\b",
    re.IGNORECASE,
)
_PUBLIC_BODY_PATTERN = re.compile(
    r"\b(cuc|caribbean utilities|government|municipal|city hall|county|state|federal|"
    r"postal|dmv|license|permit|registration)\b",
    re.IGNORECASE,
)


def is_unique_provider(text: Optional[str]) -> bool:
    """
    Whether a bill comes from a utility or public body with no real competitors.

    Args:
        text (Optional[str]): Product, vendor or bill description.

    Returns:
        bool: True if no alternative search should be run for it.
    """
    if not text:
        return False
    return bool(_UTILITY_PATTERN.search(text) or _PUBLIC_BODY_PATTERN.search(text))


def is_same_vendor(company_name: Optional[str], candidate_name: Optional[str], threshold: float = FUZZY_THRESHOLD) -> bool:
    """
    Fuzzy check whether a candidate place is the vendor the bill already comes from.

    Args:
        company_name (Optional[str]): Vendor named on the bill.
        candidate_name (Optional[str]): Name of the candidate place.
        threshold (float): Minimum token-set similarity (0-100) counted as the same vendor.

    Returns:
        bool: True if the names are similar enough.
    """
    if not company_name or not candidate_name:
        return False
    score = fuzz.token_set_ratio(company_name.lower(), candidate_name.lower())
    return score >= threshold


def exclude_current_vendor(
    company_name: Optional[str],
    candidates: Sequence[PlaceCandidate],
    threshold: float = FUZZY_THRESHOLD,
) -> List[PlaceCandidate]:
    """Drop candidates matching the bill's own vendor, keeping the rest in order."""
    if not company_name:
        return list(candidates)
    return [c for c in candidates if not is_same_vendor(company_name, c.name, threshold)]
