from retrospace.models.user import UserRecord
from retrospace.models.post import PostRecord
from retrospace.models.message import MessageRecord

__all__ = ["UserRecord", "PostRecord", "MessageRecord"]
