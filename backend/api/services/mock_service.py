# backend/api/services/mock_service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from db.mock_data import MockDatabase
from models.alert import Alert
from models.incident import Incident, IncidentDraft
from models.safety import DangerZone, EmergencyReportIn, SafeWalk, SafeWalkIn
from models.user import LocationUpdate, User, UserLocation
from services.activity import sorted_alerts

log = logging.getLogger(__name__)

# Types the server treats as high priority on POST /incidents
ALERTING_INCIDENT_TYPES = ("harassment", "suspicious")
RECENT_ZONE_WINDOW = timedelta(days=30)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _uuid() -> str:
    return str(uuid.uuid4())


# ---------------- Users ----------------
def find_user(db: MockDatabase, user_id: str) -> Optional[User]:
    return next((u for u in db.users if u.id == user_id), None)


def update_user_location(db: MockDatabase, user_id: str, body: LocationUpdate) -> Optional[User]:
    user = find_user(db, user_id)
    if user is None:
        return None
    user.location = UserLocation(lat=body.lat, lng=body.lng, last_updated=_now())
    return user


# ---------------- Alerts ----------------
def list_alerts(db: MockDatabase, severity: Optional[str] = None, status: Optional[str] = None) -> List[Alert]:
    """Filtered alerts, newest first. The stored list keeps its order."""
    return sorted_alerts(db.alerts, len(db.alerts), status=status, severity=severity)


def find_alert(db: MockDatabase, alert_id: str) -> Optional[Alert]:
    return next((a for a in db.alerts if a.id == alert_id), None)


# ---------------- Incidents ----------------
def create_incident(db: MockDatabase, draft: IncidentDraft) -> Incident:
    now = _now()
    incident = Incident(
        **draft.model_dump(),
        id=_uuid(),
        time=now,
        status="reported",
    )
    db.incidents.insert(0, incident)

    if draft.type in ALERTING_INCIDENT_TYPES:
        alert = Alert(
            id=_uuid(),
            title=f"New {draft.type} incident reported",
            description=draft.description,
            severity="high",
            type="security",
            time=now,
            location=draft.location,
            status="active",
        )
        db.alerts.insert(0, alert)
        log.info("Incident %s (%s) raised alert %s", incident.id, draft.type, alert.id)

    return incident


# ---------------- Danger zones ----------------
def list_danger_zones(db: MockDatabase, time_filter: Optional[str] = None) -> List[DangerZone]:
    zones = list(db.danger_zones)
    if time_filter == "30days":
        cutoff = _now() - RECENT_ZONE_WINDOW
        zones = [z for z in zones if z.last_incident > cutoff]
    return zones


# ---------------- Safe walks ----------------
def list_safe_walks(db: MockDatabase, user_id: Optional[str] = None, status: Optional[str] = None) -> List[SafeWalk]:
    walks = list(db.safe_walks)
    if user_id:
        walks = [w for w in walks if w.user_id == user_id]
    if status:
        walks = [w for w in walks if w.status == status]
    return walks


def start_safe_walk(db: MockDatabase, body: SafeWalkIn) -> SafeWalk:
    walk = SafeWalk(
        **body.model_dump(),
        id=_uuid(),
        start_time=_now(),
        status="active",
    )
    db.safe_walks.append(walk)
    return walk


def finish_safe_walk(db: MockDatabase, walk_id: str, status: str) -> Optional[SafeWalk]:
    """Move a walk to `completed` (check-in) or `cancelled` and stamp endTime."""
    walk = next((w for w in db.safe_walks if w.id == walk_id), None)
    if walk is None:
        return None
    walk.status = status
    walk.end_time = _now()
    return walk


# ---------------- Emergency ----------------
def report_emergency(db: MockDatabase, body: EmergencyReportIn) -> Tuple[Alert, Incident]:
    """Create the alert and the incident together; both or neither are stored."""
    now = _now()
    alert = Alert(
        id=_uuid(),
        title=f"EMERGENCY: {body.type}",
        description=body.description or "Emergency situation reported",
        severity="high",
        type="emergency",
        time=now,
        location=body.location,
        status="active",
    )
    incident = Incident(
        id=_uuid(),
        type="emergency",
        description=body.description or "Emergency situation",
        reporter="Emergency System",
        time=now,
        location=body.location,
        status="reported",
    )
    db.alerts.insert(0, alert)
    db.incidents.insert(0, incident)
    log.warning("Emergency reported by user %s at %s", body.user_id, body.location.name)
    return alert, incident
