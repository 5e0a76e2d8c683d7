import os
import asyncio
import pandas as pd
import csv
from typing import List
import sys
from loguru import logger

from billwise.models import BillRecord, BillResult
from billwise.alternatives_orchestrator import find_alternatives
from billwise.scorers import format_distance, format_price_level
from billwise.config import INPUT_CSV, OUTPUT_CSV, BATCH_SIZE, LOG_LEVEL
from billwise.clients import PlacesClient

OUTPUT_COLUMNS = [
    "Description", "Company", "Category", "Subcategory", "Confidence", "Tags",
    "Alternatives", "Best alternative", "Distance", "Price", "Price score",
    "Quality score", "Service score", "Top reviews",
]


def load_bills_from_csv(file_path: str, nrows: int = None) -> List[BillRecord]:
    """Load bills from CSV and convert to BillRecord objects."""
    df = pd.read_csv(file_path, nrows=nrows)
    records = []
    for _, row in df.iterrows():
        # Helper to safely extract values from pandas Series, converting NaN to None
        def safe_get(col):
            if col not in row.index:
                return None
            val = row[col]
            if pd.isna(val):
                return None
            return str(val).strip() or None

        record = BillRecord(
            description=safe_get("Description") or "",
            company_name=safe_get("Company"),
            details=safe_get("Details"),
            location=safe_get("Location"),
            search_query=safe_get("Search"),
        )
        records.append(record)
    return records


def batch_iter(records: List[BillRecord], batch_size: int):
    """
    Yield index and BillRecord slices of size `batch_size` for batched processing.
    """
    n = len(records)
    for i in range(0, n, batch_size):
        yield i, records[i:i+batch_size]


def result_row(result: BillResult) -> list:
    """Flatten a BillResult into one output CSV row."""
    row = [
        result.description,
        result.company_name or "",
        result.match.category,
        result.match.subcategory or "",
        f"{result.match.confidence:.4f}",
        ";".join(result.tags),
        len(result.alternatives),
    ]
    best = result.best_alternative
    if best is None:
        return row + [""] * 7
    return row + [
        best.name,
        format_distance(best.distance_km),
        format_price_level(best.price_level),
        best.price_score,
        best.quality_score,
        best.service_score,
        " | ".join(r.text for r in best.top_reviews),
    ]


async def main():
    """
    Orchestrate the full batch processing pipeline.

    - Loads input CSV in batches.
    - Categorizes each bill and looks up scored alternatives asynchronously.
    - Writes results incrementally to an output CSV.
    """
    # Initialize logs
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    all_bills = load_bills_from_csv(INPUT_CSV)
    logger.info(f"Loaded {len(all_bills)} bills from {INPUT_CSV}")

    # Fail before writing anything if a places lookup is needed but not configured
    if any(bill.location for bill in all_bills):
        PlacesClient()

    # Initialize output file
    output_path = OUTPUT_CSV
    if os.path.exists(output_path):
        os.remove(output_path)
    with open(output_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(OUTPUT_COLUMNS)

    # Process in batches, but use async.gather for parallelism within each batch
    try:
        for start_idx, batch_bills in batch_iter(all_bills, BATCH_SIZE):
            logger.info(f"Processing rows {start_idx}..{start_idx + len(batch_bills) - 1}")

            results = await asyncio.gather(*[find_alternatives(bill) for bill in batch_bills])

            with open(output_path, "a", newline="") as f:
                writer = csv.writer(f)
                for result in results:
                    writer.writerow(result_row(result))
    finally:
        # Close the shared session to prevent unclosed connector warnings
        if PlacesClient._initialized:
            await PlacesClient().close()

if __name__ == "__main__":
    asyncio.run(main())
