from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from retrospace.database import get_db
from retrospace.schemas import Message
from retrospace.services.records import MessageRecordService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_messages(db: AsyncSession = Depends(get_db)):
    """Get every message in send order."""
    return await MessageRecordService(db).get_all()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_message(
    message: Message,
    db: AsyncSession = Depends(get_db),
):
    """Append a message."""
    return await MessageRecordService(db).create(message)


@router.put("/{message_id}")
async def update_message(
    message_id: str,
    changes: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Shallow-merge the given fields into a stored message (read flag)."""
    return await MessageRecordService(db).merge(message_id, changes)
