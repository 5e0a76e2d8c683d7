"""Place scoring and alternative filtering."""
from billwise.scorers.place_scorer import (
    format_distance,
    format_price_level,
    price_score,
    quality_score,
    score_candidate,
    score_candidates,
    service_score,
)
from billwise.scorers.vendor_filter import exclude_current_vendor, is_same_vendor, is_unique_provider

__all__ = [
    "format_distance",
    "format_price_level",
    "price_score",
    "quality_score",
    "score_candidate",
    "score_candidates",
    "service_score",
    "exclude_current_vendor",
    "is_same_vendor",
    "is_unique_provider",
]
