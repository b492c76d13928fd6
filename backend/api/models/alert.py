from pydantic import BaseModel, Field
from typing import Literal, Optional

from models.incident import Location, UtcDatetime

# Priority tier, not a workflow state ("resolved" here is a pre-seeded tier)
AlertSeverity = Literal["high", "medium", "low", "resolved"]
AlertType = Literal["security", "weather", "info", "theft", "emergency"]
AlertStatus = Literal["active", "resolved"]


class AlertDraft(BaseModel):
    title: str
    description: str
    severity: AlertSeverity
    type: AlertType
    location: Optional[Location] = None


class Alert(AlertDraft):
    id: str
    time: UtcDatetime = Field(..., description="UTC time the alert was created")
    status: AlertStatus = "active"
