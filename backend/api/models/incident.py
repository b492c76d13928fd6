from pydantic import AfterValidator, BaseModel, Field
from typing import Annotated, List, Literal
from datetime import datetime, timezone

# Category tags shown in the report form. `type` itself stays a free string.
INCIDENT_TYPES = ("theft", "harassment", "suspicious", "hazard", "emergency", "other")
EMERGENCY_TYPE = "emergency"

IncidentStatus = Literal["reported", "investigating", "resolved"]
INCIDENT_STATUSES = ("reported", "investigating", "resolved")


def as_utc(value: datetime) -> datetime:
    # naive timestamps are read as UTC so feeds can always be compared
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class Location(BaseModel):
    lat: float = Field(..., description="Latitude")
    lng: float = Field(..., description="Longitude")
    name: str = Field(..., description="Display name of the place")


# Payload coming FROM the report screen (keep these names exactly)
class IncidentDraft(BaseModel):
    type: str = Field(..., description="Category tag, e.g. theft or emergency")
    description: str
    reporter: str = Field(..., description="Display name of the reporter")
    location: Location
    photos: List[str] = Field(default_factory=list)


class Incident(IncidentDraft):
    id: str
    time: UtcDatetime = Field(..., description="UTC time the incident was submitted")
    status: IncidentStatus = "reported"
