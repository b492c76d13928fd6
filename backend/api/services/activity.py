from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field, model_serializer

from models.alert import Alert
from models.incident import Incident

DEFAULT_LIMIT = 10


class ActivityItem(BaseModel):
    """One row of the activity feed: a record tagged with where it came from."""

    activity_type: Literal["incident", "alert"] = Field(..., alias="activityType")
    record: Union[Incident, Alert]

    @property
    def time(self):
        return self.record.time

    @property
    def id(self) -> str:
        return self.record.id

    @model_serializer(mode="wrap")
    def _flatten(self, handler) -> Dict[str, Any]:
        # feed rows go out as the record's own fields plus `activityType`
        data = handler(self)
        flat = dict(data["record"])
        flat["activityType"] = self.activity_type
        return flat


def recent_activities(
    incidents: Sequence[Incident],
    alerts: Sequence[Alert],
    limit: int = DEFAULT_LIMIT,
) -> List[ActivityItem]:
    """
    Merge incidents and alerts into one feed, newest first, at most `limit` rows.
    Ties keep insertion order (incidents before alerts). Inputs are not touched.
    """
    items = [ActivityItem(activityType="incident", record=i) for i in incidents]
    items += [ActivityItem(activityType="alert", record=a) for a in alerts]
    items.sort(key=lambda item: item.time, reverse=True)
    return items[: max(0, limit)]


def sorted_alerts(
    alerts: Sequence[Alert],
    limit: int = DEFAULT_LIMIT,
    *,
    status: Optional[str] = None,
    severity: Optional[str] = None,
) -> List[Alert]:
    picked = [
        a for a in alerts
        if (status is None or a.status == status) and (severity is None or a.severity == severity)
    ]
    picked.sort(key=lambda a: a.time, reverse=True)
    return picked[: max(0, limit)]
