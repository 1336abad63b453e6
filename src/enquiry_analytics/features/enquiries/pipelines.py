"""Aggregation pipeline builders for the enquiry reports.

Every pipeline starts with the same two steps: normalize ``date`` to a BSON
date (legacy documents store it as a string) and, when a time range is given,
keep only documents inside it. The builders are pure; ``EnquiryStore`` runs
them.
"""

from typing import Any, Dict, List, Optional

from ...core.config import CLIENT_MODEL_COLLECTION
from .models import CONVERTED_STATUS, ModelReference
from .time_range import TimeRange, granularity_for

Stage = Dict[str, Any]
Pipeline = List[Stage]

NORMALIZE_DATE_STAGE: Stage = {
    "$set": {
        "date": {
            "$convert": {"input": "$date", "to": "date", "onError": None, "onNull": None}
        }
    }
}


def time_filter_stages(time_range: Optional[TimeRange]) -> Pipeline:
    """Date normalization plus an optional half-open range match."""
    stages: Pipeline = [NORMALIZE_DATE_STAGE]
    if time_range is not None:
        stages.append({"$match": {"date": {"$gte": time_range.start, "$lt": time_range.end}}})
    return stages


def catalog_lookup_stages(local_field: str, catalog: str = CLIENT_MODEL_COLLECTION) -> Pipeline:
    """Joins the catalog collection on ``local_field``, keeping unmatched documents."""
    return [
        {
            "$lookup": {
                "from": catalog,
                "localField": local_field,
                "foreignField": "_id",
                "as": "model_info",
            }
        },
        {"$unwind": {"path": "$model_info", "preserveNullAndEmptyArrays": True}},
    ]


def daily_enquiries_pipeline(time_range: Optional[TimeRange]) -> Pipeline:
    date_format = granularity_for(time_range).date_format
    return time_filter_stages(time_range) + [
        {"$match": {"date": {"$type": "date"}}},
        {
            "$group": {
                "_id": {"$dateToString": {"format": date_format, "date": "$date"}},
                "count": {"$sum": 1},
            }
        },
        {"$sort": {"_id": 1}},
    ]


def model_counts_pipeline(
    time_range: Optional[TimeRange], catalog: str = CLIENT_MODEL_COLLECTION
) -> Pipeline:
    return time_filter_stages(time_range) + [
        {"$group": {"_id": "$interested_model", "count": {"$sum": 1}}},
        *catalog_lookup_stages("_id", catalog),
        {"$project": {"_id": 0, "model": "$model_info.model", "count": 1}},
        {"$sort": {"count": -1}},
    ]


def region_counts_pipeline(time_range: Optional[TimeRange]) -> Pipeline:
    return time_filter_stages(time_range) + [
        {"$group": {"_id": "$location", "count": {"$sum": 1}}},
        {"$sort": {"count": -1}},
    ]


def category_counts_pipeline(
    time_range: Optional[TimeRange], catalog: str = CLIENT_MODEL_COLLECTION
) -> Pipeline:
    return time_filter_stages(time_range) + [
        *catalog_lookup_stages("interested_model", catalog),
        # one row per category; no catalog entry or no categories keeps a null row
        {"$unwind": {"path": "$model_info.category", "preserveNullAndEmptyArrays": True}},
        {"$group": {"_id": "$model_info.category", "count": {"$sum": 1}}},
        {"$sort": {"count": -1}},
    ]


def sales_vs_enquiries_pipeline(
    time_range: Optional[TimeRange], catalog: str = CLIENT_MODEL_COLLECTION
) -> Pipeline:
    return time_filter_stages(time_range) + [
        {"$match": {"interested_model": {"$type": ModelReference.BSON_TYPE}}},
        {
            "$group": {
                "_id": "$interested_model",
                "enquiry_count": {"$sum": 1},
                "converted_count": {
                    "$sum": {"$cond": [{"$eq": ["$status", CONVERTED_STATUS]}, 1, 0]}
                },
            }
        },
        *catalog_lookup_stages("_id", catalog),
        {
            "$project": {
                "_id": 0,
                "model": "$model_info.model",
                "enquiry_count": 1,
                "converted_count": 1,
            }
        },
        {"$sort": {"enquiry_count": -1}},
    ]
