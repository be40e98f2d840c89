import time
from datetime import datetime
from typing import Any, Dict
from uuid import uuid4
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


def new_id(prefix: str) -> str:
    """Opaque record id, e.g. ``user-3f9a1c0d2b7e``."""
    return f"{prefix}-{uuid4().hex[:12]}"


def now_ms() -> int:
    """Current time as epoch milliseconds, the unit used on the wire."""
    return int(time.time() * 1000)


def display_time(ms: int = None) -> str:
    """Human readable timestamp stored next to records for display."""
    moment = datetime.fromtimestamp((ms if ms is not None else now_ms()) / 1000)
    return moment.strftime("%b %d, %Y %I:%M %p")


class Entity(BaseModel):
    """Base for records exchanged as camelCase JSON documents."""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"
    
    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
    
    @classmethod
    def from_document(cls, document: Dict[str, Any]):
        return cls.model_validate(document)
