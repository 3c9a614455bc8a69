"""
Chat service containing core chat processing logic.
Handles message normalization, the model/tool loop and conversation persistence.
"""
import json
from datetime import datetime
from typing import AsyncIterator, List

from auth import SessionCapability
from config import Config
from models.api_models import ChatRequest, Message
from models.chat_models import ChatContext, ModelTurn
from services.booking_tools import execute_tool, tool_definitions
from services.stream_service import StreamService
from utils.constants import BOOKING_SYSTEM_PROMPT
from utils.logger import app_logger
from utils.store import get_store


class ChatService:
    """Service for handling chat logic."""

    @staticmethod
    def get_system_prompt() -> str:
        """Booking-flow system prompt with today's date."""
        return BOOKING_SYSTEM_PROMPT.format(current_date=datetime.now().strftime("%Y-%m-%d"))

    @staticmethod
    def prepare_messages(messages: List[Message]) -> list:
        """Drop empty messages and convert the rest to plain dicts (core messages)."""
        core_messages = [
            message.model_dump(exclude_none=True)
            for message in messages
            if not message.is_empty()
        ]
        dropped = len(messages) - len(core_messages)
        if dropped:
            app_logger.info(f"Dropped {dropped} empty message(s)")
        return core_messages

    @staticmethod
    def build_context(request: ChatRequest, client, capability: SessionCapability) -> ChatContext:
        return ChatContext(
            chat_id=request.id,
            client=client,
            capability=capability,
            core_messages=ChatService.prepare_messages(request.messages),
            system_prompt=ChatService.get_system_prompt()
        )

    @staticmethod
    def save_conversation(context: ChatContext, response_messages: list) -> bool:
        """
        Persist core messages followed by the model's messages.

        Failures are logged and swallowed; the response has already been streamed.
        """
        session = context.capability.resolve()
        if session is None:
            app_logger.warning(f"Session lost before chat {context.chat_id} could be saved")
            return False

        try:
            get_store().save_chat(
                context.chat_id,
                messages=[*context.core_messages, *response_messages],
                user_id=session.user_id
            )
        except Exception as e:
            app_logger.error(f"Failed to save chat {context.chat_id}: {e}")
            return False

        app_logger.info(f"Saved chat {context.chat_id} for user {session.user_id}")
        return True

    @staticmethod
    async def orchestrate_chat_flow(context: ChatContext) -> AsyncIterator[str]:
        """
        Drive the model until it answers without requesting tools.

        Nothing is yielded before the first model chunk, so a caller can pull
        the first event to surface model errors before committing to a stream.

        Yields:
            SSE events: token, tool_call, tool_result, status, done
        """
        tools = tool_definitions()
        response_messages = []
        roundtrips = 0

        while True:
            turn = ModelTurn()
            async for event in StreamService.stream_model_turn(
                context,
                messages=[*context.messages, *response_messages],
                tools=tools,
                turn=turn
            ):
                yield event

            response_messages.append(turn.to_message())

            if not turn.tool_calls:
                break

            for call in turn.tool_calls:
                app_logger.info(f"Executing tool {call.name}")
                context.tools_used.append(call.name)
                yield StreamService.send_sse_event("tool_call", {"toolName": call.name, "args": call.arguments})

                result = await execute_tool(call.name, call.arguments, context)
                yield StreamService.send_sse_event("tool_result", {"toolName": call.name, "result": result})

                response_messages.append({
                    "role": "tool",
                    "content": json.dumps(result),
                    "tool_name": call.name
                })

            roundtrips += 1
            if roundtrips >= Config.MAX_TOOL_ROUNDTRIPS:
                app_logger.warning(f"Tool round-trip limit ({Config.MAX_TOOL_ROUNDTRIPS}) reached for chat {context.chat_id}")
                yield StreamService.send_sse_event("status", {
                    "stage": "tool_limit_reached",
                    "message": f"Stopped after {roundtrips} tool round-trips"
                })
                break

        ChatService.save_conversation(context, response_messages)

        yield StreamService.send_sse_event("done", {
            "chatId": context.chat_id,
            "responseMessages": response_messages,
            "toolsUsed": list(dict.fromkeys(context.tools_used))
        })
