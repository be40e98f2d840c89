from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from retrospace.database import get_db
from retrospace.schemas import Post
from retrospace.services.records import PostRecordService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_posts(db: AsyncSession = Depends(get_db)):
    """Get every post, newest first."""
    return await PostRecordService(db).get_all()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    post: Post,
    db: AsyncSession = Depends(get_db),
):
    """Create a post at the head of the collection."""
    return await PostRecordService(db).create(post)


@router.put("/{post_id}")
async def update_post(
    post_id: str,
    changes: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Shallow-merge the given fields into a stored post."""
    return await PostRecordService(db).merge(post_id, changes)


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a post. Unknown ids succeed as well."""
    await PostRecordService(db).delete(post_id)
    return {"success": True}
