from typing import List

from fastapi import APIRouter, Depends, HTTPException

from db.mock_data import MockDatabase, get_db
from models.user import LocationUpdate, User
from services import mock_service

router = APIRouter(prefix="/users", tags=["user"])


@router.get("", response_model=List[User])
def list_users(db: MockDatabase = Depends(get_db)):
    return db.users


@router.get("/{user_id}", response_model=User)
def get_user(user_id: str, db: MockDatabase = Depends(get_db)):
    user = mock_service.find_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}/location", response_model=User, summary="Update a user's shared location")
def update_location(user_id: str, body: LocationUpdate, db: MockDatabase = Depends(get_db)):
    user = mock_service.update_user_location(db, user_id, body)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
