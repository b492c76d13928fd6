from typing import List

from fastapi import APIRouter, Depends

from db.mock_data import MockDatabase, get_db
from models.incident import Incident, IncidentDraft
from services import mock_service

router = APIRouter(prefix="/incidents", tags=["incident"])


@router.get("", response_model=List[Incident])
def list_incidents(db: MockDatabase = Depends(get_db)):
    return db.incidents


@router.post("", response_model=Incident, status_code=201)
def report_incident(data: IncidentDraft, db: MockDatabase = Depends(get_db)):
    """
    Accept the report-screen payload (type, description, reporter, location, photos).
    Harassment and suspicious-activity reports also raise a high-severity alert.
    """
    return mock_service.create_incident(db, data)
