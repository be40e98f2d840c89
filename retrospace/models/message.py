from datetime import datetime
from sqlalchemy import String, Integer, DateTime, JSON, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from retrospace.database import Base


class MessageRecord(Base):
    __tablename__ = "messages"
    
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    sender_id: Mapped[str] = mapped_column(String(64), nullable=False)
    receiver_id: Mapped[str] = mapped_column(String(64), nullable=False)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    
    __table_args__ = (
        Index("idx_message_receiver", "receiver_id"),
        Index("idx_message_sender", "sender_id"),
    )
    
    def __repr__(self) -> str:
        return f"<MessageRecord(id={self.id}, sender={self.sender_id}, receiver={self.receiver_id})>"
