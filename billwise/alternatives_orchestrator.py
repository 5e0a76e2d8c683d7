# billwise/alternatives_orchestrator.py

import asyncio
from aiohttp import ClientError
from loguru import logger
from billwise.models import BillRecord, BillResult
from billwise.categorizers import classify, suggest_tags
from billwise.clients import PlacesAPIError
from billwise.places_fetcher import fetch_candidates
from billwise.scorers import exclude_current_vendor, is_unique_provider, score_candidates

# Places search type used to look for alternatives in each category
CATEGORY_SEARCH_TYPES = {
    "Meals & Entertainment": "restaurant",
    "Travel & Transport": "hotel",
}
DEFAULT_SEARCH_TYPE = "service"


def search_type_for(category: str) -> str:
    return CATEGORY_SEARCH_TYPES.get(category, DEFAULT_SEARCH_TYPE)


async def find_alternatives(bill: BillRecord) -> BillResult:
    """
    Categorize a bill and rank nearby alternatives to its vendor.

    Args:
        bill (BillRecord): Bill to process.

    Returns:
        BillResult: Category, tags and scored alternatives. Alternatives are empty
                    when the bill has no location, comes from a provider with no
                    competitors, or the places lookup failed.
    """
    match = classify(bill.description, bill.company_name, bill.details)
    tags = suggest_tags(match.category, match.subcategory)
    result = BillResult(
        description=bill.description,
        company_name=bill.company_name,
        match=match,
        tags=tags,
    )

    if not bill.location:
        return result

    provider_text = " ".join(filter(None, [bill.company_name, bill.description, bill.details]))
    if is_unique_provider(provider_text):
        logger.debug(f"No alternatives for unique provider: {provider_text}")
        return result

    search_type = search_type_for(match.category)
    try:
        origin, candidates = await fetch_candidates(
            bill.search_query or "", bill.location, search_type
        )
    except (PlacesAPIError, ClientError, asyncio.TimeoutError) as e:
        logger.warning(f"Places lookup failed for '{bill.company_name or bill.description}': {e}")
        return result

    candidates = exclude_current_vendor(bill.company_name, candidates)
    result.alternatives = score_candidates(candidates, origin.lat, origin.lon)
    return result
