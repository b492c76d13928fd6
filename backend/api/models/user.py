# backend/api/models/user.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from models.incident import UtcDatetime

# ---------- PUBLIC MODELS ----------

class UserLocation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lat: float
    lng: float
    last_updated: UtcDatetime = Field(..., alias="lastUpdated")


class User(BaseModel):
    # wire names are camelCase, same as the mobile client expects
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: EmailStr
    student_id: str = Field(..., alias="studentId")
    avatar: str = Field(..., description="Initials shown in the avatar bubble")
    location: UserLocation


class LocationUpdate(BaseModel):
    # what the app sends when location sharing is on
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
