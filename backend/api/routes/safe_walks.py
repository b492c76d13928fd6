from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from db.mock_data import MockDatabase, get_db
from models.safety import SafeWalk, SafeWalkIn
from services import mock_service

router = APIRouter(prefix="/safe-walks", tags=["safe-walk"])


@router.get("", response_model=List[SafeWalk])
def list_safe_walks(
    user_id: Optional[str] = Query(None, alias="userId"),
    status: Optional[str] = Query(None, description="active|completed|cancelled"),
    db: MockDatabase = Depends(get_db),
):
    return mock_service.list_safe_walks(db, user_id=user_id, status=status)


@router.post("", response_model=SafeWalk, status_code=201)
def start_safe_walk(body: SafeWalkIn, db: MockDatabase = Depends(get_db)):
    return mock_service.start_safe_walk(db, body)


@router.put("/{walk_id}/check-in", response_model=SafeWalk, summary="Arrived safely")
def check_in(walk_id: str, db: MockDatabase = Depends(get_db)):
    walk = mock_service.finish_safe_walk(db, walk_id, "completed")
    if walk is None:
        raise HTTPException(status_code=404, detail="Safe walk not found")
    return walk


@router.put("/{walk_id}/cancel", response_model=SafeWalk)
def cancel(walk_id: str, db: MockDatabase = Depends(get_db)):
    walk = mock_service.finish_safe_walk(db, walk_id, "cancelled")
    if walk is None:
        raise HTTPException(status_code=404, detail="Safe walk not found")
    return walk
