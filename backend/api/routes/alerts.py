from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from db.mock_data import MockDatabase, get_db
from models.alert import Alert
from services import mock_service

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=List[Alert])
def list_alerts(
    severity: Optional[str] = Query(None, description="high|medium|low|resolved"),
    status: Optional[str] = Query(None, description="active|resolved"),
    db: MockDatabase = Depends(get_db),
):
    """Alerts newest first, optionally filtered by severity and/or status."""
    return mock_service.list_alerts(db, severity=severity, status=status)


@router.get("/{alert_id}", response_model=Alert)
def get_alert(alert_id: str, db: MockDatabase = Depends(get_db)):
    alert = mock_service.find_alert(db, alert_id)
    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")
    return alert
