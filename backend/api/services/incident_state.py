# backend/api/services/incident_state.py
"""
Client-side source of truth for incidents and alerts.

One `IncidentStateManager` per app session. Screens read through it, mutate
through it, and `subscribe()` to hear about changes. Every mutation writes the
affected collection straight through to storage.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Union

from db.local_store import KeyValueStore, MemoryKeyValueStore
from models.alert import Alert, AlertDraft
from models.incident import EMERGENCY_TYPE, INCIDENT_STATUSES, Incident, IncidentDraft, as_utc
from services.activity import DEFAULT_LIMIT, ActivityItem, recent_activities, sorted_alerts
from services.defaults import default_alerts, default_incidents
from services.persistence import CollectionStore

log = logging.getLogger(__name__)

INCIDENTS_KEY = "oasis-incidents"
ALERTS_KEY = "oasis-alerts"

Listener = Callable[["IncidentStateManager"], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class IncidentStateManager:
    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        *,
        notify: Optional[Callable[[str], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.storage = CollectionStore(store if store is not None else MemoryKeyValueStore())
        self._notify = notify or log.info
        self._clock = clock or _utcnow
        self._listeners: List[Listener] = []

        now = as_utc(self._clock())
        self.default_incidents = default_incidents(now)
        self.default_alerts = default_alerts(now)

        # each collection recovers on its own
        self._incidents: List[Incident] = self.storage.load(INCIDENTS_KEY, Incident, self.default_incidents)
        self._alerts: List[Alert] = self.storage.load(ALERTS_KEY, Alert, self.default_alerts)

        self._last_stamp: Optional[datetime] = max(
            (r.time for r in [*self._incidents, *self._alerts]), default=None
        )

    # ---------------- Reads ----------------
    @property
    def incidents(self) -> List[Incident]:
        return list(self._incidents)

    @property
    def alerts(self) -> List[Alert]:
        return list(self._alerts)

    @property
    def recent_activities(self) -> List[ActivityItem]:
        return self.get_recent_activities(DEFAULT_LIMIT)

    def get_recent_activities(self, limit: int = DEFAULT_LIMIT) -> List[ActivityItem]:
        return recent_activities(self._incidents, self._alerts, limit)

    def get_alerts(
        self,
        limit: int = DEFAULT_LIMIT,
        *,
        status: Optional[str] = None,
        severity: Optional[str] = None,
    ) -> List[Alert]:
        return sorted_alerts(self._alerts, limit, status=status, severity=severity)

    def get_incident(self, incident_id: str) -> Optional[Incident]:
        return next((i for i in self._incidents if i.id == incident_id), None)

    def get_alert(self, alert_id: str) -> Optional[Alert]:
        return next((a for a in self._alerts if a.id == alert_id), None)

    # ---------------- Subscription ----------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(manager)` after every mutation. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---------------- Mutations ----------------
    def add_incident(self, draft: Union[IncidentDraft, Mapping[str, Any]]) -> Incident:
        draft = _as_model(IncidentDraft, draft)
        now = self._stamp()
        incident = Incident(
            **draft.model_dump(include=set(IncidentDraft.model_fields)),
            id=_new_id(),
            time=now,
            status="reported",
        )
        self._incidents.insert(0, incident)
        self._persist_incidents()

        if draft.type == EMERGENCY_TYPE:
            # only emergencies need an immediate broadcast
            alert = Alert(
                id=_new_id(),
                title="Emergency incident reported",
                description=f"Emergency situation reported at {draft.location.name}",
                severity="high",
                type="emergency",
                time=now,
                location=draft.location.model_copy(),
                status="active",
            )
            self._alerts.insert(0, alert)
            self._persist_alerts()
            self._notify("Emergency incident reported and alert created")
        else:
            self._notify("Incident reported successfully!")

        self._emit()
        return incident

    def update_incident_status(self, incident_id: str, status: str) -> Optional[Incident]:
        if status not in INCIDENT_STATUSES:
            raise ValueError(f"Unknown incident status: {status!r}")

        for idx, incident in enumerate(self._incidents):
            if incident.id == incident_id:
                updated = incident.model_copy(update={"status": status})
                self._incidents[idx] = updated
                break
        else:
            log.warning("update_incident_status: no incident with id %s, ignoring", incident_id)
            return None

        self._persist_incidents()
        self._notify(f"Incident status updated to {status}")
        self._emit()
        return updated

    def add_alert(self, draft: Union[AlertDraft, Mapping[str, Any]]) -> Alert:
        draft = _as_model(AlertDraft, draft)
        alert = Alert(
            **draft.model_dump(include=set(AlertDraft.model_fields)),
            id=_new_id(),
            time=self._stamp(),
            status="active",
        )
        self._alerts.insert(0, alert)
        self._persist_alerts()
        self._notify("New alert created")
        self._emit()
        return alert

    def resolve_alert(self, alert_id: str) -> Optional[Alert]:
        for idx, alert in enumerate(self._alerts):
            if alert.id == alert_id:
                # severity is a tier and stays as it was
                resolved = alert.model_copy(update={"status": "resolved"})
                self._alerts[idx] = resolved
                break
        else:
            log.warning("resolve_alert: no alert with id %s, ignoring", alert_id)
            return None

        self._persist_alerts()
        self._notify("Alert resolved")
        self._emit()
        return resolved

    def clear_all_data(self) -> None:
        """Back to the built-in demo content; persisted entries are erased."""
        self._incidents = [i.model_copy(deep=True) for i in self.default_incidents]
        self._alerts = [a.model_copy(deep=True) for a in self.default_alerts]
        for key in (INCIDENTS_KEY, ALERTS_KEY):
            try:
                self.storage.remove(key)
            except Exception:
                log.exception("Failed to erase %s from storage", key)
        self._notify("All data cleared and reset to defaults")
        self._emit()

    # ---------------- Internals ----------------
    def _stamp(self) -> datetime:
        # wall clock, but never earlier than anything already recorded
        now = as_utc(self._clock())
        if self._last_stamp is not None and now < self._last_stamp:
            now = self._last_stamp
        self._last_stamp = now
        return now

    def _persist_incidents(self) -> None:
        self._persist(INCIDENTS_KEY, self._incidents)

    def _persist_alerts(self) -> None:
        self._persist(ALERTS_KEY, self._alerts)

    def _persist(self, key: str, records) -> None:
        try:
            self.storage.save(key, records)
        except Exception:
            # storage is a mirror; the in-memory state stays authoritative
            log.exception("Failed to persist %s", key)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                log.exception("State listener %r failed", listener)


def _as_model(model, value):
    return value if isinstance(value, model) else model.model_validate(value)
