"""
Day-one demo content for a fresh install (and after a reset).
Times are relative to `now` so the feed always looks recent.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List

from models.alert import Alert
from models.incident import Incident, Location

LIBRARY = Location(lat=29.7200, lng=-95.3400, name="Library")
STUDENT_CENTER = Location(lat=29.7210, lng=-95.3420, name="Student Center")
EAST_GARAGE = Location(lat=29.7215, lng=-95.3430, name="East Parking Garage")
LIBRARY_AREA = Location(lat=29.7200, lng=-95.3400, name="Library Area")
STADIUM_AREA = Location(lat=29.7180, lng=-95.3380, name="Stadium Area")


def default_incidents(now: datetime) -> List[Incident]:
    return [
        Incident(
            id="1",
            type="theft",
            description="Bike stolen from rack near library",
            reporter="John Doe",
            time=now - timedelta(hours=2),
            location=LIBRARY,
            status="investigating",
        ),
        Incident(
            id="2",
            type="harassment",
            description="Verbal harassment reported near student center",
            reporter="Sarah M.",
            time=now - timedelta(hours=4),
            location=STUDENT_CENTER,
            status="resolved",
        ),
    ]


def default_alerts(now: datetime) -> List[Alert]:
    return [
        Alert(
            id="1",
            title="Suspicious person near East Parking Garage",
            description="Campus police are investigating. Avoid the area if possible.",
            severity="high",
            type="security",
            time=now - timedelta(minutes=15),
            location=EAST_GARAGE,
        ),
        Alert(
            id="2",
            title="Weather Alert: Heavy Rain Expected",
            description="Thunderstorms expected this evening. Plan your commute accordingly.",
            severity="medium",
            type="weather",
            time=now - timedelta(hours=1),
        ),
        Alert(
            id="3",
            title="Safe Walk Service Extended Hours",
            description="Due to high demand, escort service will operate until 3 AM this week.",
            severity="low",
            type="info",
            time=now - timedelta(hours=3),
        ),
        Alert(
            id="4",
            title="All Clear: Library Area Incident Resolved",
            description="Campus police have resolved the earlier reported incident.",
            severity="resolved",
            type="security",
            time=now - timedelta(hours=5),
            location=LIBRARY_AREA,
            status="resolved",
        ),
        Alert(
            id="5",
            title="Bike Theft Reported in Stadium Area",
            description="Multiple bike thefts reported. Use designated bike racks and locks.",
            severity="medium",
            type="theft",
            time=now - timedelta(days=1),
            location=STADIUM_AREA,
        ),
    ]
