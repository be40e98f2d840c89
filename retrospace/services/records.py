"""
Document storage for the remote data service.

Each collection is a table of JSON documents plus the few columns needed for
ordering and lookups. Updates shallow-merge the given fields into the stored
document, the way the service has always accepted partial records.
"""
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from fastapi import HTTPException, status
from retrospace.models import UserRecord, PostRecord, MessageRecord
from retrospace.schemas import User, Post, Message


class RecordService:
    """Shared list/get/merge operations over one document table."""
    
    model = None
    label = "Record"
    newest_first = False
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    def columns(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Indexed column values derived from a document."""
        return {}
    
    async def get_all(self) -> List[Dict[str, Any]]:
        order = self.model.seq.desc() if self.newest_first else self.model.seq.asc()
        result = await self.db.execute(select(self.model).order_by(order))
        return [record.document for record in result.scalars().all()]
    
    async def get_by_id(self, record_id: str):
        result = await self.db.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()
    
    async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        record = self.model(id=document["id"], document=document, **self.columns(document))
        self.db.add(record)
        # Visible before the response goes out; clients reload right after writing
        await self.db.commit()
        return document
    
    async def merge(self, record_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow-merge ``changes`` into the stored document."""
        record = await self.get_by_id(record_id)
        if not record:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.label} not found"
            )
        
        # Assign a new dict so the JSON column is flagged dirty
        document = {**record.document, **changes, "id": record_id}
        record.document = document
        for column, value in self.columns(document).items():
            setattr(record, column, value)
        
        await self.db.commit()
        return document


class UserRecordService(RecordService):
    model = UserRecord
    label = "User"
    
    def columns(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return {"username_key": document["username"].lower()}
    
    async def get_by_username(self, username: str) -> Optional[UserRecord]:
        result = await self.db.execute(
            select(UserRecord).where(UserRecord.username_key == username.lower())
        )
        return result.scalars().first()
    
    async def create(self, user: User) -> Dict[str, Any]:
        """Store a new user unless the username is taken in any letter case."""
        if await self.get_by_username(user.username):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username taken"
            )
        return await self.insert(user.to_document())


class PostRecordService(RecordService):
    model = PostRecord
    label = "Post"
    newest_first = True
    
    def columns(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return {"author_id": document["authorId"]}
    
    async def create(self, post: Post) -> Dict[str, Any]:
        return await self.insert(post.to_document())
    
    async def delete(self, post_id: str) -> None:
        """Remove a post; deleting an unknown id is not an error."""
        await self.db.execute(delete(PostRecord).where(PostRecord.id == post_id))
        await self.db.commit()


class MessageRecordService(RecordService):
    model = MessageRecord
    label = "Message"
    
    def columns(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return {"sender_id": document["senderId"], "receiver_id": document["receiverId"]}
    
    async def create(self, message: Message) -> Dict[str, Any]:
        return await self.insert(message.to_document())
