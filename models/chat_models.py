"""
Data models for chat processing.
Contains the request-scoped context object, model turn results and booking stages.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional
import ollama
from auth import SessionCapability
from config import Config


class BookingStage(str, Enum):
    """Advisory stages of the booking flow, reported in tool results."""
    SEARCHED = "searched"
    SEATS_SELECTED = "seats_selected"
    RESERVED = "reserved"
    PAYMENT_PENDING = "payment_pending"
    PAYMENT_VERIFIED = "payment_verified"
    BOARDING_PASS_ISSUED = "boarding_pass_issued"


@dataclass
class ChatContext:
    """
    Context object containing all chat processing state.
    Provides centralized access to request-scoped data, eliminating parameter chaining.
    """
    chat_id: str
    client: ollama.AsyncClient
    capability: SessionCapability
    core_messages: list
    system_prompt: str
    model_name: str = Config.CHAT_MODEL
    call_count: int = 0
    tools_used: List[str] = field(default_factory=list)

    @property
    def messages(self) -> list:
        """System prompt followed by the core messages."""
        return [{"role": "system", "content": self.system_prompt}, *self.core_messages]

    def next_call_number(self) -> int:
        """Increment and return the next LLM call number."""
        self.call_count += 1
        return self.call_count


@dataclass
class ToolCall:
    """A tool invocation requested by the model."""
    name: str
    arguments: Any  # a dict, or the raw value when the model sent something other than a JSON object

    @property
    def has_valid_arguments(self) -> bool:
        return isinstance(self.arguments, dict)

    def to_message_part(self) -> dict:
        arguments = self.arguments if self.has_valid_arguments else {}
        return {"function": {"name": self.name, "arguments": arguments}}


@dataclass
class ModelTurn:
    """Accumulated output of one streamed model call."""
    content: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    done_reason: Optional[str] = None

    def to_message(self) -> dict:
        message = {"role": "assistant", "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [call.to_message_part() for call in self.tool_calls]
        return message
