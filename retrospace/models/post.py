from datetime import datetime
from sqlalchemy import String, Integer, DateTime, JSON, func
from sqlalchemy.orm import Mapped, mapped_column
from retrospace.database import Base


class PostRecord(Base):
    __tablename__ = "posts"
    
    # Listing is seq descending, which puts new posts at the head
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    author_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
    
    def __repr__(self) -> str:
        return f"<PostRecord(id={self.id}, author_id={self.author_id})>"
