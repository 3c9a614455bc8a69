"""
Pydantic data models for API requests.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class Message(BaseModel):
    """Chat message model."""
    role: str  # "user", "assistant" or "tool"
    content: str = ""
    tool_calls: Optional[List[dict]] = None
    tool_name: Optional[str] = None

    def is_empty(self) -> bool:
        """A message with neither text nor tool calls carries nothing for the model."""
        return not self.content and not self.tool_calls


class ChatRequest(BaseModel):
    """Chat request model: the chat id and its full message history."""
    id: str = Field(..., min_length=1, max_length=128)
    messages: List[Message]
