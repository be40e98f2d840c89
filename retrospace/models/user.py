from datetime import datetime
from sqlalchemy import String, Integer, DateTime, JSON, func
from sqlalchemy.orm import Mapped, mapped_column
from retrospace.database import Base


class UserRecord(Base):
    __tablename__ = "users"
    
    # Insertion order; ids are opaque client-generated strings
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    
    # Lower-cased username for case-insensitive lookups, not a unique constraint
    username_key: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
    
    def __repr__(self) -> str:
        return f"<UserRecord(id={self.id}, username={self.username_key})>"
