"""
Streaming service containing the core streaming logic.
Streams one model call as SSE token events while collecting tool calls.
"""
import json
from collections.abc import Mapping
from typing import AsyncIterator
from models.chat_models import ChatContext, ModelTurn, ToolCall
from utils.logger import app_logger


class StreamService:
    """Service for handling streaming model calls."""

    @staticmethod
    def send_sse_event(event_type: str, data: dict) -> str:
        """Format data as Server-Sent Events (SSE) format."""
        return f"event: {event_type}\ndata: {json.dumps(data, separators=(',', ':'))}\n\n"

    @staticmethod
    def _parse_tool_call(raw) -> ToolCall:
        """
        Convert a streamed tool call (dict or client object) into a ToolCall.

        Arguments that are not a JSON object are kept as sent; execute_tool
        rejects them so the conversation can continue.
        """
        function = raw['function']
        arguments = function['arguments'] or {}
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except json.JSONDecodeError as e:
                app_logger.warning(f"Unparseable arguments for tool {function['name']}: {e}")
                return ToolCall(name=function['name'], arguments=arguments)
        if not isinstance(arguments, Mapping):
            return ToolCall(name=function['name'], arguments=arguments)
        return ToolCall(name=function['name'], arguments=dict(arguments))

    @staticmethod
    async def stream_model_turn(
        context: ChatContext,
        messages: list,
        tools: list,
        turn: ModelTurn
    ) -> AsyncIterator[str]:
        """Stream one model call, yielding token events as chunks arrive.

        Args:
            context: Chat context
            messages: Messages to send to the model
            tools: Tool definitions offered to the model
            turn: Receives the accumulated content and tool calls

        Yields:
            SSE token events
        """
        call_number = context.next_call_number()
        app_logger.info(f"LLM Call #{call_number}: Streaming response ({len(messages)} messages)")

        stream = await context.client.chat(
            model=context.model_name,
            messages=messages,
            tools=tools,
            stream=True
        )

        async for chunk in stream:
            message = chunk['message']

            token = message['content']
            if token:
                turn.content += token
                yield StreamService.send_sse_event("token", {"content": token})

            for raw_call in message.get('tool_calls') or []:
                turn.tool_calls.append(StreamService._parse_tool_call(raw_call))

            if chunk.get('done'):
                turn.done_reason = chunk.get('done_reason')

        app_logger.info(
            f"LLM Call #{call_number} completed: {len(turn.content)} characters, "
            f"{len(turn.tool_calls)} tool call(s)"
        )
        if turn.done_reason == "length":
            app_logger.warning(f"LLM Call #{call_number} was truncated at the model's output limit")
