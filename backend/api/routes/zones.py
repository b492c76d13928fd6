from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from db.mock_data import MockDatabase, get_db
from models.safety import DangerZone, Resource
from services import mock_service

router = APIRouter(tags=["zones"])


@router.get("/danger-zones", response_model=List[DangerZone])
def danger_zones(
    time_filter: Optional[str] = Query(None, alias="timeFilter", description="'30days' keeps recent zones only"),
    db: MockDatabase = Depends(get_db),
):
    return mock_service.list_danger_zones(db, time_filter)


@router.get("/resources", response_model=List[Resource])
def resources(db: MockDatabase = Depends(get_db)):
    return db.resources
