"""
Enquiry Store Adapter

Runs the report pipelines against MongoDB. One ``EnquiryStore`` is opened in
the application lifespan, kept on ``app.state`` and handed to request
handlers through the ``get_store`` dependency; nothing here is global.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from ...core import config
from ...core.errors import ReportQueryError
from . import pipelines
from .pipelines import Pipeline
from .time_range import TimeRange

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class EnquiryStore:
    def __init__(
        self,
        database,
        client: Optional[AsyncMongoClient] = None,
        enquiry_collection: str = config.ENQUIRY_COLLECTION,
        client_model_collection: str = config.CLIENT_MODEL_COLLECTION,
        transcript_collection: str = config.TRANSCRIPT_COLLECTION,
    ):
        self.database = database
        self.client = client
        self.enquiry_collection = enquiry_collection
        self.client_model_collection = client_model_collection
        self.transcript_collection = transcript_collection

    @classmethod
    def connect(cls, uri: str = config.MONGO_URI, db_name: str = config.MONGO_DB_NAME, **kwargs) -> "EnquiryStore":
        """Creates a client for ``uri``; the driver connects lazily on first use."""
        client = AsyncMongoClient(uri, tz_aware=True)
        logger.info(f"Opened MongoDB client for database '{db_name}'")
        return cls(client[db_name], client=client, **kwargs)

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
            self.client = None
            logger.info("MongoDB client closed.")

    async def ping(self) -> None:
        try:
            await self.database.command("ping")
        except (PyMongoError, BSONError) as e:
            logger.error(f"MongoDB ping failed: {e}")
            raise ReportQueryError(str(e)) from e

    async def collection_counts(self) -> Dict[str, int]:
        counts = {}
        try:
            for name in (self.enquiry_collection, self.client_model_collection, self.transcript_collection):
                counts[name] = await self.database[name].count_documents({})
        except (PyMongoError, BSONError) as e:
            logger.error(f"Counting documents failed: {e}")
            raise ReportQueryError(str(e)) from e
        return counts

    async def _aggregate(self, pipeline: Pipeline) -> List[Row]:
        logger.debug(f"Aggregating on '{self.enquiry_collection}': {pipeline}")
        try:
            cursor = await self.database[self.enquiry_collection].aggregate(pipeline)
            return await cursor.to_list()
        except (PyMongoError, BSONError) as e:
            logger.error(f"Aggregation on '{self.enquiry_collection}' failed: {e}")
            raise ReportQueryError(str(e)) from e

    async def daily_enquiry_counts(self, time_range: Optional[TimeRange]) -> List[Row]:
        """Rows of ``{"_id": period, "count": n}``, oldest period first."""
        return await self._aggregate(pipelines.daily_enquiries_pipeline(time_range))

    async def model_counts(self, time_range: Optional[TimeRange]) -> List[Row]:
        """Rows of ``{"model": name, "count": n}``; ``model`` is absent for unmatched references."""
        return await self._aggregate(
            pipelines.model_counts_pipeline(time_range, self.client_model_collection)
        )

    async def region_counts(self, time_range: Optional[TimeRange]) -> List[Row]:
        return await self._aggregate(pipelines.region_counts_pipeline(time_range))

    async def category_counts(self, time_range: Optional[TimeRange]) -> List[Row]:
        return await self._aggregate(
            pipelines.category_counts_pipeline(time_range, self.client_model_collection)
        )

    async def sales_vs_enquiries(self, time_range: Optional[TimeRange]) -> List[Row]:
        return await self._aggregate(
            pipelines.sales_vs_enquiries_pipeline(time_range, self.client_model_collection)
        )

    async def recent_transcripts(self, limit: int = config.TRANSCRIPT_LIMIT) -> List[Row]:
        try:
            cursor = self.database[self.transcript_collection].find().limit(limit)
            return await cursor.to_list()
        except (PyMongoError, BSONError) as e:
            logger.error(f"Listing transcripts failed: {e}")
            raise ReportQueryError(str(e)) from e


def get_store(request: Request) -> EnquiryStore:
    """FastAPI dependency returning the store opened by the lifespan."""
    return request.app.state.store
