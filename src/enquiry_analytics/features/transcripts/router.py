from fastapi import APIRouter, Depends
from typing import Annotated, List

from ..enquiries.store import EnquiryStore, get_store
from .schemas import TranscriptRecord
from .service import list_recent_transcripts

router = APIRouter(
    prefix="/transcripts",
    tags=["Transcripts"],
)

@router.get("", response_model=List[TranscriptRecord])
async def list_transcripts(store: Annotated[EnquiryStore, Depends(get_store)]):
    return await list_recent_transcripts(store)
