from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.alert import Alert
from models.incident import Incident, Location, UtcDatetime


class Point(BaseModel):
    lat: float
    lng: float


class DangerZone(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    risk: Literal["high", "medium", "low"]
    incidents: int = Field(..., ge=0, description="Incidents recorded in the zone")
    location: Point
    last_incident: UtcDatetime = Field(..., alias="lastIncident")


class Resource(BaseModel):
    id: str
    name: str
    phone: str
    available: str = Field(..., description="Opening hours, free text")
    type: str
    description: str


SafeWalkStatus = Literal["active", "completed", "cancelled"]


class SafeWalkIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    duration: int = Field(..., gt=0, description="Timer length in minutes")
    start_location: Location = Field(..., alias="startLocation")
    end_location: Location = Field(..., alias="endLocation")


class SafeWalk(SafeWalkIn):
    id: str
    start_time: UtcDatetime = Field(..., alias="startTime")
    status: SafeWalkStatus = "active"
    end_time: Optional[UtcDatetime] = Field(None, alias="endTime")


class EmergencyReportIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    location: Location
    type: str = Field(..., description="What kind of emergency, e.g. medical")
    description: Optional[str] = None


class EmergencyReportOut(BaseModel):
    alert: Alert
    incident: Incident
    message: str
