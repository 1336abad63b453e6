"""Document models for the enquiry collections.

The service never writes these collections. The models describe the shape
of what it reads and normalize the loosely typed fields at the boundary:

- ``date`` may be stored as a BSON date or as an ISO string; both become a
  UTC ``datetime`` (or ``None`` when unreadable).
- ``interested_model`` may be a free-text label or an ObjectId reference into
  ``client_models``; it is held as a tagged ``InterestedModel`` value.
"""

import datetime
import logging
from typing import Annotated, Any, ClassVar, List, Literal, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

logger = logging.getLogger(__name__)

CONVERTED_STATUS = "Converted"


class ModelLabel(BaseModel):
    """A free-text product label that does not point at the catalog."""
    kind: Literal["label"] = "label"
    label: str

    def __str__(self) -> str:
        return self.label


class ModelReference(BaseModel):
    """A reference to a ``client_models`` document by ``_id``."""
    # BSON type alias used by ``$type`` to select references inside a pipeline
    BSON_TYPE: ClassVar[str] = "objectId"

    kind: Literal["reference"] = "reference"
    id: ObjectId

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def __str__(self) -> str:
        return str(self.id)


InterestedModel = Annotated[Union[ModelLabel, ModelReference], Field(discriminator="kind")]


def parse_interested_model(raw: Any) -> Optional[Union[ModelLabel, ModelReference]]:
    """Tags a stored ``interested_model`` value as a label or a reference."""
    if raw is None or isinstance(raw, (ModelLabel, ModelReference)):
        return raw
    if isinstance(raw, dict) and "kind" in raw:
        return raw  # already tagged, let the discriminator handle it
    if isinstance(raw, ObjectId):
        return ModelReference(id=raw)
    return ModelLabel(label=str(raw))


def normalize_date(raw: Any) -> Optional[datetime.datetime]:
    """Normalizes a stored ``date`` value to an aware UTC datetime.

    Accepts datetimes, dates and ISO 8601 strings (``2024-03-05``,
    ``2024-03-05T10:15:00Z``). Anything else is logged and dropped.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime.datetime):
        value = raw
    elif isinstance(raw, datetime.date):
        value = datetime.datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, str):
        try:
            value = datetime.datetime.fromisoformat(raw.strip())
        except ValueError:
            logger.warning(f"Unreadable enquiry date {raw!r}, treating as missing")
            return None
    else:
        logger.warning(f"Unsupported enquiry date type {type(raw).__name__}, treating as missing")
        return None

    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


class Enquiry(BaseModel):
    """
    One inbound customer lead.
    Collection name: "enquiry_details"
    """
    name: Optional[str] = None
    contact: Optional[str] = None
    date: Optional[datetime.datetime] = None
    interested_model: Optional[InterestedModel] = None
    location: Optional[str] = None
    status: Optional[str] = None

    # intake may store phone numbers as numbers
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, v):
        return normalize_date(v)

    @field_validator("interested_model", mode="before")
    @classmethod
    def _tag_interested_model(cls, v):
        tagged = parse_interested_model(v)
        # hand the discriminator a mapping carrying its "kind" key
        return tagged.model_dump() if isinstance(tagged, BaseModel) else tagged

    @field_serializer("interested_model")
    def _serialize_interested_model(self, v: Optional[Union[ModelLabel, ModelReference]]) -> Optional[str]:
        # The dashboard expects the raw label or the hex id, not the tagged form
        return str(v) if v is not None else None


class ClientModel(BaseModel):
    """
    Catalog entry for a product line.
    Collection name: "client_models"
    """
    id: ObjectId = Field(default_factory=ObjectId, alias="_id")
    model: Optional[str] = None
    category: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        protected_namespaces=(),
        extra="ignore",
    )


class Transcript(BaseModel):
    """
    Stored conversation with the lead details captured during it.
    Collection name: "transcript_details"
    """
    id: Optional[ObjectId] = Field(None, alias="_id")
    user_info: Optional[Enquiry] = None
    transcript: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        extra="ignore",
    )

    @field_serializer("id")
    def _serialize_id(self, v: Optional[ObjectId]) -> Optional[str]:
        return str(v) if v is not None else None

    @classmethod
    def from_document(cls, document: dict) -> "Transcript":
        return cls.model_validate(document)
