from typing import Callable, Iterable, List

from retrospace.core.errors import Forbidden
from retrospace.schemas import User, Message, new_id, now_ms, display_time
from retrospace.services.gateway import PersistenceGateway
from retrospace.services.moderation import ensure_active


def inbox(viewer: User, messages: Iterable[Message]) -> List[Message]:
    """Messages to the viewer from senders they have not blocked, newest first."""
    received = [
        msg for msg in messages
        if msg.receiver_id == viewer.id and msg.sender_id not in viewer.blocked_users
    ]
    return sorted(received, key=lambda msg: msg.created_at, reverse=True)


def unread_count(viewer: User, messages: Iterable[Message]) -> int:
    return sum(1 for msg in inbox(viewer, messages) if not msg.read)


class MessageService:
    def __init__(self, gateway: PersistenceGateway, clock: Callable[[], int] = now_ms):
        self.gateway = gateway
        self.clock = clock
    
    async def send(self, sender: User, receiver_id: str, content: str) -> Message:
        ensure_active(sender)
        if not content.strip():
            raise ValueError("Message is empty")
        
        created_at = self.clock()
        message = Message(
            id=new_id("m"),
            sender_id=sender.id,
            receiver_id=receiver_id,
            content=content,
            timestamp=display_time(created_at),
            created_at=created_at,
        )
        return await self.gateway.create_message(message)
    
    async def mark_read(self, viewer: User, message: Message) -> Message:
        """Flip ``read`` on a received message. Fetching never does this."""
        if message.receiver_id != viewer.id:
            raise Forbidden("Only the receiver can mark a message read")
        if message.read:
            return message
        return await self.gateway.update_message(message.model_copy(update={"read": True}))
