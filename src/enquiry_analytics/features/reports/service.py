"""
Reports Service Module

This module turns the ``filter``/``value`` query parameters into a time range,
runs the matching store operation and shapes the rows into the response
schemas the dashboard reads.

Two filter policies exist side by side. The enquiries-over-time and model
reports treat a missing or unknown filter as "all time"; the region,
category and sales reports reject the request with a 400 instead.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from fastapi import HTTPException, status

from ...core.errors import ReportQueryError
from ..enquiries.store import EnquiryStore, Row
from ..enquiries.time_range import FilterMode, TimeRange
from .schemas import (
    CategoryCount, DailyEnquiryCount, ModelCount, RegionCount, SalesEnquiryCount
)

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"


def _build_range(mode: FilterMode, value: str) -> TimeRange:
    try:
        return TimeRange.build(mode, value)
    except ValueError as e:
        logger.error(f"Could not build a {mode.value} range from {value!r}: {e}")
        raise ReportQueryError(f"Invalid {mode.value} value '{value}': {e}") from e


def resolve_optional_range(filter: Optional[str], value: Optional[str]) -> Optional[TimeRange]:
    """
    Resolves the time range for reports where filtering is optional.

    An absent value or an unrecognized filter means no time restriction.

    Raises:
        ReportQueryError: If the filter is recognized but the value cannot be
            turned into a date range.
    """
    mode = FilterMode.parse(filter)
    if mode is None or not value:
        return None
    return _build_range(mode, value)


def resolve_required_range(filter: Optional[str], value: Optional[str]) -> TimeRange:
    """
    Resolves the time range for reports that must be filtered.

    Raises:
        HTTPException: 400 when ``filter`` or ``value`` is missing, or when
            ``filter`` is not ``month`` or ``year``.
        ReportQueryError: If the value cannot be turned into a date range.
    """
    if not filter or not value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both 'filter' and 'value' query parameters are required.",
        )
    mode = FilterMode.parse(filter)
    if mode is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported filter '{filter}'. Use 'month' or 'year'.",
        )
    return _build_range(mode, value)


def merge_by_label(rows: Iterable[Row], label_field: str, count_fields: Sequence[str]) -> Dict[str, Dict[str, int]]:
    """
    Sums counts per label, folding missing and empty labels into "Unknown".

    Several groups can end up unlabeled (every unmatched catalog reference, or
    a location that is both missing and empty), so they are merged into one
    row. The order of first appearance is kept.
    """
    merged: Dict[str, Dict[str, int]] = {}
    for row in rows:
        raw_label = row.get(label_field)
        label = str(raw_label) if raw_label not in (None, "") else UNKNOWN_LABEL
        totals = merged.setdefault(label, dict.fromkeys(count_fields, 0))
        for field in count_fields:
            totals[field] += int(row.get(field) or 0)
    return merged


def _ranked(merged: Dict[str, Dict[str, int]], sort_field: str) -> List[tuple]:
    return sorted(merged.items(), key=lambda item: item[1][sort_field], reverse=True)


async def generate_enquiries_over_time_report(
    store: EnquiryStore, filter: Optional[str] = None, value: Optional[str] = None
) -> List[DailyEnquiryCount]:
    """
    Counts enquiries per calendar day, or per month when filtered by year.

    Returns:
        List[DailyEnquiryCount]: One entry per period, oldest first.
    """
    time_range = resolve_optional_range(filter, value)
    rows = await store.daily_enquiry_counts(time_range)
    return [
        DailyEnquiryCount(date=row["_id"], enquiries=row["count"])
        for row in rows
        if row.get("_id")
    ]


async def generate_model_breakdown_report(
    store: EnquiryStore, filter: Optional[str] = None, value: Optional[str] = None
) -> List[ModelCount]:
    """
    Counts enquiries per catalog model, most enquired first.

    Enquiries whose model is free text or points at no catalog entry are
    counted under "Unknown".
    """
    time_range = resolve_optional_range(filter, value)
    rows = await store.model_counts(time_range)
    merged = merge_by_label(rows, "model", ["count"])
    return [ModelCount(model=label, count=totals["count"]) for label, totals in _ranked(merged, "count")]


async def generate_region_leaderboard_report(
    store: EnquiryStore, filter: Optional[str], value: Optional[str]
) -> List[RegionCount]:
    time_range = resolve_required_range(filter, value)
    rows = await store.region_counts(time_range)
    merged = merge_by_label(rows, "_id", ["count"])
    return [RegionCount(region=label, count=totals["count"]) for label, totals in _ranked(merged, "count")]


async def generate_category_breakdown_report(
    store: EnquiryStore, filter: Optional[str], value: Optional[str]
) -> List[CategoryCount]:
    """
    Counts enquiries per catalog category.

    A model listed under several categories adds one to each of them, so the
    counts can sum to more than the number of enquiries.
    """
    time_range = resolve_required_range(filter, value)
    rows = await store.category_counts(time_range)
    merged = merge_by_label(rows, "_id", ["count"])
    return [CategoryCount(category=label, count=totals["count"]) for label, totals in _ranked(merged, "count")]


async def generate_sales_vs_enquiries_report(
    store: EnquiryStore, filter: Optional[str], value: Optional[str]
) -> List[SalesEnquiryCount]:
    """
    Compares enquiries with conversions for each catalog model.

    Only enquiries that reference a catalog entry are considered. References
    whose catalog entry no longer exists are reported as "Unknown".

    Returns:
        List[SalesEnquiryCount]: Sorted by enquiry_count, highest first.
    """
    time_range = resolve_required_range(filter, value)
    rows = await store.sales_vs_enquiries(time_range)
    merged = merge_by_label(rows, "model", ["enquiry_count", "converted_count"])
    return [
        SalesEnquiryCount(
            model=label,
            enquiry_count=totals["enquiry_count"],
            converted_count=totals["converted_count"],
        )
        for label, totals in _ranked(merged, "enquiry_count")
    ]
