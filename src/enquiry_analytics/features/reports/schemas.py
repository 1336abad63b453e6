"""Enquiry Report API Schemas

This module defines Pydantic models for the report endpoints:

1. Report filter query parameters
2. Enquiries over time
3. Enquiries by model
4. Region leaderboard
5. Enquiries by category
6. Sales against enquiries

Field names are the ones the dashboard frontend reads."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


# Shared query parameters for every report
class ReportFilterQuery(BaseModel):
    filter: Optional[str] = Field(None, description="Time window mode: 'month' or 'year'")
    value: Optional[str] = Field(None, description="YYYY-MM for a month filter, YYYY for a year filter")


# 1. Enquiries over time
class DailyEnquiryCount(BaseModel):
    date: str = Field(..., description="Day (YYYY-MM-DD) or month (YYYY-MM) bucket")
    enquiries: int


# 2. Enquiries by model
class ModelCount(BaseModel):
    model: str
    count: int

    model_config = ConfigDict(protected_namespaces=())


# 3. Region leaderboard
class RegionCount(BaseModel):
    region: str
    count: int


# 4. Enquiries by category
class CategoryCount(BaseModel):
    category: str
    count: int


# 5. Sales against enquiries
class SalesEnquiryCount(BaseModel):
    model: str
    enquiry_count: int
    converted_count: int

    model_config = ConfigDict(protected_namespaces=())
