import math
from typing import Iterable, List, Optional, Sequence

from billwise.geo import distance_km
from billwise.models import PlaceCandidate, Review, ScoredPlace

NEUTRAL_PRICE_SCORE = 70
NEUTRAL_RATING_SCORE = 60

# Index = Google price level (0 = free .. 4 = very expensive); cheaper scores higher
PRICE_LEVEL_SCORES = (95, 85, 70, 55, 40)
PRICE_LEVEL_LABELS = ("Free", "$", "$$", "$$$", "$$$$")

SERVICE_KEYWORDS = ("service", "staff", "friendly", "helpful", "quick", "fast")


def _round_score(value: float) -> int:
    """Round half up and clamp into [0, 100]."""
    return int(min(max(math.floor(value + 0.5), 0), 100))


def _valid_price_level(price_level: Optional[int]) -> bool:
    return (
        isinstance(price_level, int)
        and not isinstance(price_level, bool)
        and 0 <= price_level < len(PRICE_LEVEL_SCORES)
    )


def price_score(price_level: Optional[int]) -> int:
    """
    Score value for money from the price level.

    Args:
        price_level (Optional[int]): 0 (free) .. 4 (most expensive), or None if unknown.

    Returns:
        int: 95/85/70/55/40 for levels 0..4; 70 when unknown or out of range.
    """
    if not _valid_price_level(price_level):
        return NEUTRAL_PRICE_SCORE
    return PRICE_LEVEL_SCORES[price_level]


def quality_score(rating: Optional[float], review_count: int = 0) -> int:
    """
    Score quality from the star rating, boosted when many people reviewed.

    Args:
        rating (Optional[float]): Average rating 0-5; None/0 means unrated.
        review_count (int): Number of reviews behind the rating.

    Returns:
        int: Score in [0, 100]; 60 for unrated places.
    """
    if not rating:
        return NEUTRAL_RATING_SCORE

    score = (rating / 5) * 100
    review_count = review_count or 0
    if review_count > 100:
        score = min(score + 10, 100)
    elif review_count > 50:
        score = min(score + 5, 100)

    return _round_score(score)


def has_positive_service_review(reviews: Optional[Iterable[Review]]) -> bool:
    """True if any review rated 4+ mentions service, staff, speed or friendliness."""
    for review in reviews or ():
        text = (review.text or "").lower()
        if (review.rating or 0) >= 4 and any(kw in text for kw in SERVICE_KEYWORDS):
            return True
    return False


def service_score(
    rating: Optional[float],
    open_now: Optional[bool] = None,
    reviews: Optional[Sequence[Review]] = None,
) -> int:
    """
    Score service from the rating, opening status and review mentions.

    Args:
        rating (Optional[float]): Average rating 0-5; None/0 means unrated.
        open_now (Optional[bool]): Whether the place is currently open.
        reviews (Optional[Sequence[Review]]): Review snippets with their ratings.

    Returns:
        int: Score in [0, 100]; 60 for unrated places.
    """
    if not rating:
        return NEUTRAL_RATING_SCORE

    score = (rating / 5) * 100
    if open_now is True:
        score = min(score + 5, 100)

    # One bonus however many reviews qualify
    if has_positive_service_review(reviews):
        score = min(score + 5, 100)

    return _round_score(score)


def format_price_level(price_level: Optional[int]) -> str:
    if not _valid_price_level(price_level):
        return "N/A"
    return PRICE_LEVEL_LABELS[price_level]


def format_distance(km: float) -> str:
    return f"{km:.1f} km"


def score_candidate(candidate: PlaceCandidate, reference_lat: float, reference_lon: float) -> ScoredPlace:
    """
    Annotate one candidate with its distance and price/quality/service scores.

    Args:
        candidate (PlaceCandidate): Place to score. Not modified.
        reference_lat (float): Latitude of the search origin.
        reference_lon (float): Longitude of the search origin.

    Returns:
        ScoredPlace: Copy of the candidate with the derived fields filled in.
    """
    return ScoredPlace.from_candidate(
        candidate,
        distance_km=distance_km(
            reference_lat, reference_lon, candidate.location.lat, candidate.location.lon
        ),
        price_score=price_score(candidate.price_level),
        quality_score=quality_score(candidate.rating, candidate.review_count),
        service_score=service_score(candidate.rating, candidate.open_now, candidate.reviews),
    )


def score_candidates(
    candidates: Iterable[PlaceCandidate],
    reference_lat: float,
    reference_lon: float,
) -> List[ScoredPlace]:
    """
    Score every candidate against the same reference point.

    Each candidate is scored on its own fields only, so output order and length
    match the input.
    """
    return [score_candidate(c, reference_lat, reference_lon) for c in candidates]
