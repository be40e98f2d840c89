from retrospace.schemas.base import Entity


class Message(Entity):
    id: str
    sender_id: str
    receiver_id: str
    content: str
    timestamp: str = "Just now"   # Display string
    created_at: int               # Epoch ms, used for sorting
    read: bool = False
