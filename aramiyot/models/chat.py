"""
Chat transcript data models
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime
from enum import Enum


class MessageSender(str, Enum):
    """Message sender enumeration"""
    USER = "user"
    AI = "ai"


class ChatAttachment(BaseModel):
    """Image attached to a user message, carried as a data URI"""
    type: Literal["image"] = "image"
    url: str
    name: Optional[str] = None


class ChatMessage(BaseModel):
    """
    One turn of the conversation.

    The assistant message is created with empty text and its text is
    replaced while the response streams in.
    """
    id: str
    text: str = ""
    sender: MessageSender
    timestamp: datetime = Field(default_factory=datetime.now)
    attachment: Optional[ChatAttachment] = None


class ChatTranscript(BaseModel):
    """Ordered list of messages as stored under the conversation key"""
    messages: List[ChatMessage] = Field(default_factory=list)

    def is_only_greeting(self) -> bool:
        """True when the transcript holds nothing but the seeded greeting"""
        return len(self.messages) == 1 and self.messages[0].id.startswith("initial-greeting")


class ErrorResponse(BaseModel):
    """Error payload returned by every endpoint"""
    error: str
    details: Optional[object] = None
