import logging
from typing import List

from pydantic import ValidationError

from ...core import config
from ...core.errors import ReportQueryError
from ..enquiries.models import Transcript
from ..enquiries.store import EnquiryStore
from .schemas import TranscriptRecord

logger = logging.getLogger(__name__)


async def list_recent_transcripts(store: EnquiryStore, limit: int = config.TRANSCRIPT_LIMIT) -> List[TranscriptRecord]:
    """
    Returns up to ``limit`` stored transcripts, in natural order.

    Store failures and unreadable documents surface as ``ReportQueryError``,
    which the application answers with a plain-text 500.
    """
    documents = await store.recent_transcripts(limit)
    logger.debug(f"Fetched {len(documents)} transcript(s)")
    try:
        return [
            TranscriptRecord.model_validate(Transcript.from_document(doc).model_dump(by_alias=True))
            for doc in documents
        ]
    except ValidationError as e:
        logger.error(f"Unreadable transcript document: {e}")
        raise ReportQueryError(str(e)) from e
