# backend/api/services/api_client.py
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, TypeAdapter

from models.alert import Alert
from models.incident import Incident, IncidentDraft, Location
from models.safety import DangerZone, EmergencyReportOut, Resource, SafeWalk
from models.user import User

API_BASE_URL = os.getenv("OASIS_API_BASE_URL", "http://localhost:3001/api").rstrip("/")
DEFAULT_TIMEOUT = 12

T = TypeVar("T")


class ApiError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"API request failed: {status_code} {message}")
        self.status_code = status_code
        self.message = message


def _loc(location: Location | Dict[str, Any]) -> Dict[str, Any]:
    return location.model_dump() if isinstance(location, BaseModel) else dict(location)


def _drop_none(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


class OasisApiClient:
    """
    Thin synchronous wrapper over the mock REST service.
    `session` can be any requests-compatible client (requests.Session,
    Starlette's TestClient, ...).
    """

    def __init__(self, base_url: str = API_BASE_URL, *, session: Optional[Any] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ---------------- plumbing ----------------
    def _request(self, method: str, endpoint: str, *, params: Optional[Dict[str, Any]] = None,
                 json: Optional[Any] = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        kwargs: Dict[str, Any] = {"headers": {"Content-Type": "application/json"}, "timeout": self.timeout}
        if params:
            kwargs["params"] = params
        if json is not None:
            kwargs["json"] = json
        r = self.session.request(method, url, **kwargs)
        if not 200 <= r.status_code < 300:
            try:
                message = r.json().get("error")
            except ValueError:
                message = None
            raise ApiError(r.status_code, str(message or r.text))
        return r.json()

    def _get(self, endpoint: str, model: Type[T], **kwargs) -> T:
        return TypeAdapter(model).validate_python(self._request("GET", endpoint, **kwargs))

    # ---------------- Health ----------------
    def health(self) -> Dict[str, str]:
        return self._request("GET", "/health")

    # ---------------- Users ----------------
    def get_users(self) -> List[User]:
        return self._get("/users", List[User])

    def get_user(self, user_id: str) -> User:
        return self._get(f"/users/{user_id}", User)

    def update_user_location(self, user_id: str, lat: float, lng: float) -> User:
        data = self._request("PUT", f"/users/{user_id}/location", json={"lat": lat, "lng": lng})
        return User.model_validate(data)

    # ---------------- Alerts ----------------
    def get_alerts(self, severity: Optional[str] = None, status: Optional[str] = None) -> List[Alert]:
        return self._get("/alerts", List[Alert], params=_drop_none({"severity": severity, "status": status}))

    def get_alert(self, alert_id: str) -> Alert:
        return self._get(f"/alerts/{alert_id}", Alert)

    # ---------------- Incidents ----------------
    def get_incidents(self) -> List[Incident]:
        return self._get("/incidents", List[Incident])

    def report_incident(self, draft: IncidentDraft | Dict[str, Any]) -> Incident:
        draft = draft if isinstance(draft, IncidentDraft) else IncidentDraft.model_validate(draft)
        data = self._request("POST", "/incidents", json=draft.model_dump(mode="json"))
        return Incident.model_validate(data)

    # ---------------- Danger zones / resources ----------------
    def get_danger_zones(self, time_filter: Optional[str] = None) -> List[DangerZone]:
        return self._get("/danger-zones", List[DangerZone], params=_drop_none({"timeFilter": time_filter}))

    def get_resources(self) -> List[Resource]:
        return self._get("/resources", List[Resource])

    # ---------------- Safe walks ----------------
    def get_safe_walks(self, user_id: Optional[str] = None, status: Optional[str] = None) -> List[SafeWalk]:
        params = _drop_none({"userId": user_id, "status": status})
        return self._get("/safe-walks", List[SafeWalk], params=params)

    def start_safe_walk(self, user_id: str, duration: int, start_location: Location | Dict[str, Any],
                        end_location: Location | Dict[str, Any]) -> SafeWalk:
        body = {
            "userId": user_id,
            "duration": duration,
            "startLocation": _loc(start_location),
            "endLocation": _loc(end_location),
        }
        return SafeWalk.model_validate(self._request("POST", "/safe-walks", json=body))

    def check_in_safe_walk(self, walk_id: str) -> SafeWalk:
        return SafeWalk.model_validate(self._request("PUT", f"/safe-walks/{walk_id}/check-in"))

    def cancel_safe_walk(self, walk_id: str) -> SafeWalk:
        return SafeWalk.model_validate(self._request("PUT", f"/safe-walks/{walk_id}/cancel"))

    # ---------------- Emergency ----------------
    def report_emergency(self, user_id: str, location: Location | Dict[str, Any], type: str,
                         description: Optional[str] = None) -> EmergencyReportOut:
        body = {"userId": user_id, "location": _loc(location), "type": type}
        if description is not None:
            body["description"] = description
        return EmergencyReportOut.model_validate(self._request("POST", "/emergency", json=body))
