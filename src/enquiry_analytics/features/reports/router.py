import logging
from fastapi import APIRouter, Depends
from typing import Annotated, List

from ..enquiries.store import EnquiryStore, get_store

# Schemas for request (ReportFilterQuery) and responses
from .schemas import (
    ReportFilterQuery, DailyEnquiryCount, ModelCount, RegionCount,
    CategoryCount, SalesEnquiryCount
)
# Service functions that contain the business logic
from . import service as report_service

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Reports"],
    responses={
        400: {"description": "Missing or unsupported filter"},
        500: {"description": "Report query failed", "content": {"text/plain": {}}},
    },
)

Store = Annotated[EnquiryStore, Depends(get_store)]


@router.get("/enquiries", response_model=List[DailyEnquiryCount])
async def get_enquiries_over_time(
    store: Store,
    query: ReportFilterQuery = Depends()  # Injects filter/value from the query string
):
    return await report_service.generate_enquiries_over_time_report(
        store, filter=query.filter, value=query.value
    )

@router.get("/models", response_model=List[ModelCount])
async def get_model_breakdown(store: Store, query: ReportFilterQuery = Depends()):
    return await report_service.generate_model_breakdown_report(
        store, filter=query.filter, value=query.value
    )

# The remaining reports require a filter
@router.get("/leaderboard/regions", response_model=List[RegionCount])
async def get_region_leaderboard(store: Store, query: ReportFilterQuery = Depends()):
    return await report_service.generate_region_leaderboard_report(
        store, filter=query.filter, value=query.value
    )

@router.get("/categories", response_model=List[CategoryCount])
async def get_category_breakdown(store: Store, query: ReportFilterQuery = Depends()):
    return await report_service.generate_category_breakdown_report(
        store, filter=query.filter, value=query.value
    )

@router.get("/sales-enquiries", response_model=List[SalesEnquiryCount])
async def get_sales_vs_enquiries(store: Store, query: ReportFilterQuery = Depends()):
    return await report_service.generate_sales_vs_enquiries_report(
        store, filter=query.filter, value=query.value
    )
