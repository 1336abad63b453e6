from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import datetime


class TranscriptUserInfo(BaseModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    date: Optional[datetime.datetime] = None
    interested_model: Optional[str] = Field(None, description="Free-text label or catalog id (hex)")
    location: Optional[str] = None
    status: Optional[str] = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class TranscriptRecord(BaseModel):
    id: str = Field(..., alias="_id", description="Transcript document id (hex)")
    user_info: Optional[TranscriptUserInfo] = None
    transcript: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)
