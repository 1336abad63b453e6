"""
Root conftest for the pytest test suite.

The API is exercised through FastAPI's TestClient with its production
lifespan disabled, so no MongoDB is needed: the ``get_store`` dependency is
overridden with ``FakeEnquiryStore``, which returns canned aggregation rows
and records the time range each report was asked for.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend.
- `fake_store`: A fresh ``FakeEnquiryStore`` per test.
- `app_for_testing`: The FastAPI app with its lifespan disabled and the
  store dependency pointing at `fake_store`.
- `client`: A TestClient for `app_for_testing`.
"""

from contextlib import asynccontextmanager
from typing import Any, Generator, List, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from enquiry_analytics.core.errors import ReportQueryError
from enquiry_analytics.features.enquiries.store import get_store
from enquiry_analytics.features.enquiries.time_range import TimeRange

# Import the app
from enquiry_analytics.main import app as actual_app


class FakeEnquiryStore:
    """In-memory stand-in for ``EnquiryStore`` returning preset rows."""

    def __init__(self):
        self.rows: dict[str, List[dict]] = {
            "daily_enquiry_counts": [],
            "model_counts": [],
            "region_counts": [],
            "category_counts": [],
            "sales_vs_enquiries": [],
            "recent_transcripts": [],
        }
        self.calls: List[tuple[str, Any]] = []
        self.error: Optional[str] = None
        # raised as-is, for failures the store does not translate
        self.exception: Optional[Exception] = None

    async def _answer(self, operation: str, argument: Any) -> List[dict]:
        self.calls.append((operation, argument))
        if self.exception is not None:
            raise self.exception
        if self.error is not None:
            raise ReportQueryError(self.error)
        return self.rows[operation]

    async def daily_enquiry_counts(self, time_range: Optional[TimeRange]):
        return await self._answer("daily_enquiry_counts", time_range)

    async def model_counts(self, time_range: Optional[TimeRange]):
        return await self._answer("model_counts", time_range)

    async def region_counts(self, time_range: Optional[TimeRange]):
        return await self._answer("region_counts", time_range)

    async def category_counts(self, time_range: Optional[TimeRange]):
        return await self._answer("category_counts", time_range)

    async def sales_vs_enquiries(self, time_range: Optional[TimeRange]):
        return await self._answer("sales_vs_enquiries", time_range)

    async def recent_transcripts(self, limit: int):
        return await self._answer("recent_transcripts", limit)

    async def close(self):
        pass


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """
    Specifies the asyncio backend.
    """
    return "asyncio"


@pytest.fixture(scope="function")
def fake_store() -> FakeEnquiryStore:
    return FakeEnquiryStore()


@pytest.fixture(scope="function")
def app_for_testing(fake_store: FakeEnquiryStore) -> Generator[FastAPI, Any, None]:
    """
    Provides the FastAPI application with its production lifespan disabled
    and the store dependency pointed at the fake store.
    """
    original_lifespan = actual_app.router.lifespan_context

    @asynccontextmanager
    async def dummy_lifespan(app: FastAPI):
        app.state.store = fake_store
        yield

    actual_app.router.lifespan_context = dummy_lifespan
    actual_app.dependency_overrides[get_store] = lambda: fake_store

    yield actual_app

    # Restore the original lifespan context after the test
    actual_app.dependency_overrides.clear()
    actual_app.router.lifespan_context = original_lifespan


@pytest.fixture(scope="function")
def client(app_for_testing: FastAPI) -> Generator[TestClient, Any, None]:
    """
    Provides a starlette TestClient.
    """
    with TestClient(app_for_testing) as tc:
        yield tc
