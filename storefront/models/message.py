"""
Chat message documents persisted from the real-time channel.
"""
from datetime import datetime
from pydantic import BaseModel, Field


class MessageDocument(BaseModel):
    user: str = Field(..., min_length=1, max_length=100, description="Display name of the sender")
    message: str = Field(..., min_length=1, max_length=2000, description="Message text")
    created_at: datetime = Field(..., description="When the message was received")
