from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from retrospace.database import get_db
from retrospace.schemas import User
from retrospace.services.records import UserRecordService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_users(db: AsyncSession = Depends(get_db)):
    """Get every user."""
    return await UserRecordService(db).get_all()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    user: User,
    db: AsyncSession = Depends(get_db),
):
    """Create a user. Fails with 409 when the username is taken in any case."""
    return await UserRecordService(db).create(user)


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    changes: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Shallow-merge the given fields into a stored user."""
    return await UserRecordService(db).merge(user_id, changes)
