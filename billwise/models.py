"""
Typed data models for expense categorization and alternative scoring.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass, field, fields
from typing import List, Optional, Tuple

from billwise.config import MAX_REVIEWS


@dataclass(frozen=True)
class CategoryRule:
    """A spending category with its keyword list and confidence ceiling."""
    category: str
    keywords: Tuple[str, ...]
    base_confidence: float
    subcategories: Tuple[str, ...] = ()


@dataclass
class CategoryMatch:
    """Result of classifying one expense description."""
    category: str
    confidence: float
    subcategory: Optional[str] = None


@dataclass
class Review:
    """A single review snippet attached to a place."""
    text: str
    rating: Optional[float] = None


@dataclass
class GeoPoint:
    """Latitude/longitude pair in degrees."""
    lat: float
    lon: float


@dataclass
class PlaceCandidate:
    """Vendor/place record supplied by the places lookup."""
    id: str
    name: str
    type: str
    location: GeoPoint
    rating: Optional[float] = None
    review_count: int = 0
    price_level: Optional[int] = None  # 0 = free/cheapest .. 4 = most expensive
    open_now: Optional[bool] = None
    reviews: List[Review] = field(default_factory=list)
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None

    @property
    def top_reviews(self) -> List[Review]:
        """First reviews shown with a place; scoring always uses the full list."""
        return self.reviews[:MAX_REVIEWS]


@dataclass
class ScoredPlace(PlaceCandidate):
    """PlaceCandidate annotated with its distance and 0-100 scores."""
    distance_km: float = 0.0
    price_score: int = 0
    quality_score: int = 0
    service_score: int = 0

    @classmethod
    def from_candidate(cls, candidate: PlaceCandidate, **scores) -> "ScoredPlace":
        """Copy every candidate field into a new ScoredPlace."""
        values = {f.name: getattr(candidate, f.name) for f in fields(PlaceCandidate)}
        values["reviews"] = list(candidate.reviews)
        return cls(**values, **scores)


@dataclass
class BillRecord:
    """Input bill loaded from CSV."""
    description: str
    company_name: Optional[str] = None
    details: Optional[str] = None
    location: Optional[str] = None  # free-text city/address used for the places search
    search_query: Optional[str] = None


@dataclass
class BillResult:
    """Categorization and ranked alternatives for a bill."""
    description: str
    company_name: Optional[str]
    match: CategoryMatch
    tags: List[str]
    alternatives: List[ScoredPlace] = field(default_factory=list)

    @property
    def best_alternative(self) -> Optional[ScoredPlace]:
        """Alternative with the highest combined score, earliest on ties."""
        if not self.alternatives:
            return None
        return max(
            self.alternatives,
            key=lambda p: p.price_score + p.quality_score + p.service_score,
        )
