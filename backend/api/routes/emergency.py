from fastapi import APIRouter, Depends

from db.mock_data import MockDatabase, get_db
from models.safety import EmergencyReportIn, EmergencyReportOut
from services import mock_service

router = APIRouter(tags=["emergency"])


@router.post("/emergency", response_model=EmergencyReportOut, status_code=201)
def report_emergency(body: EmergencyReportIn, db: MockDatabase = Depends(get_db)):
    """SOS button: stores one alert and one incident, returns both."""
    alert, incident = mock_service.report_emergency(db, body)
    return EmergencyReportOut(
        alert=alert,
        incident=incident,
        message="Emergency reported and authorities notified",
    )
