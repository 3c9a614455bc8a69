"""
Models package exports.
"""
from models.api_models import Message, ChatRequest
from models.chat_models import ChatContext, ModelTurn, ToolCall, BookingStage

__all__ = [
    'Message',
    'ChatRequest',
    'ChatContext',
    'ModelTurn',
    'ToolCall',
    'BookingStage'
]
