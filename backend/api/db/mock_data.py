# backend/api/db/mock_data.py
"""
In-memory demo data for the REST service. Reseeded on every start and never
synchronized with what a client keeps locally.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from fastapi import Request

from models.alert import Alert
from models.incident import Incident, Location
from models.safety import DangerZone, Point, Resource, SafeWalk
from models.user import User, UserLocation
from services.defaults import default_alerts, default_incidents


@dataclass
class MockDatabase:
    users: List[User] = field(default_factory=list)
    alerts: List[Alert] = field(default_factory=list)
    incidents: List[Incident] = field(default_factory=list)
    danger_zones: List[DangerZone] = field(default_factory=list)
    resources: List[Resource] = field(default_factory=list)
    safe_walks: List[SafeWalk] = field(default_factory=list)


def _user(uid: str, name: str, email: str, student_id: str, avatar: str,
          lat: float, lng: float, seen: datetime) -> User:
    return User(
        id=uid, name=name, email=email, student_id=student_id, avatar=avatar,
        location=UserLocation(lat=lat, lng=lng, last_updated=seen),
    )


def _zone(zid: str, name: str, risk: str, incidents: int,
          lat: float, lng: float, last: datetime) -> DangerZone:
    return DangerZone(
        id=zid, name=name, risk=risk, incidents=incidents,
        location=Point(lat=lat, lng=lng), last_incident=last,
    )


def seed_mock_data(now: Optional[datetime] = None) -> MockDatabase:
    now = now or datetime.now(timezone.utc)
    ago = lambda **kw: now - timedelta(**kw)  # noqa: E731

    users = [
        _user("1", "John Doe", "john.doe@uh.edu", "1234567", "JD", 29.7205, -95.3424, ago(minutes=5)),
        _user("2", "Sarah M.", "sarah.m@uh.edu", "2345678", "SM", 29.7212, -95.3442, ago(minutes=2)),
        _user("3", "Mike R.", "mike.r@uh.edu", "3456789", "MR", 29.7198, -95.3408, ago(minutes=1)),
        _user("4", "Security", "security@uh.edu", "SEC001", "S", 29.7221, -95.3412, ago(seconds=30)),
    ]

    danger_zones = [
        _zone("1", "East Parking Garage", "high", 12, 29.7215, -95.3430, ago(days=2)),
        _zone("2", "Science Building Area", "medium", 5, 29.7190, -95.3390, ago(weeks=1)),
        _zone("3", "Library Back Entrance", "medium", 7, 29.7200, -95.3400, ago(days=3)),
        _zone("4", "Athletic Complex", "low", 2, 29.7180, -95.3380, ago(weeks=2)),
    ]

    resources = [
        Resource(id="1", name="Campus Police", phone="(713) 743-3333", available="24/7",
                 type="emergency", description="Emergency response and security services"),
        Resource(id="2", name="Escort Service", phone="(713) 743-3333", available="8 PM - 2 AM",
                 type="safety", description="Safe walk escort service"),
        Resource(id="3", name="Counseling Center", phone="(713) 743-5454", available="Mon-Fri 8am-5pm",
                 type="support", description="Mental health and counseling services"),
        Resource(id="4", name="Emergency Shuttle", phone="(713) 743-7433", available="Mon-Fri 7am-11pm",
                 type="transport", description="Emergency transportation service"),
    ]

    safe_walks = [
        SafeWalk(
            id="1",
            user_id="1",
            start_time=ago(minutes=10),
            duration=15,
            status="active",
            start_location=Location(lat=29.7205, lng=-95.3424, name="Library"),
            end_location=Location(lat=29.7210, lng=-95.3430, name="Student Center"),
        )
    ]

    # the server starts from the same day-one content as a fresh client
    return MockDatabase(
        users=users,
        alerts=default_alerts(now),
        incidents=default_incidents(now),
        danger_zones=danger_zones,
        resources=resources,
        safe_walks=safe_walks,
    )


def get_db(request: Request) -> MockDatabase:
    """FastAPI dependency: the store seeded for this app instance."""
    return request.app.state.mock_db
