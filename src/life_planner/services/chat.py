"""Assistant conversation loop with function calling."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from life_planner.domain.chat import (
    ActionRecord,
    ChatReply,
    ConversationTurn,
    FunctionCallRequest,
)
from life_planner.domain.errors import (
    ConfigurationError,
    ModelCallError,
    UnauthenticatedError,
)
from life_planner.services.actions import (
    ACTION_HANDLERS,
    ActionHandler,
    execute_action,
)
from life_planner.services.catalog import FUNCTION_CATALOG, FunctionSpec
from life_planner.services.planner import PlannerServices

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 10
SYSTEM_PROMPT = (
    "You are a helpful life planning assistant. Use the provided functions to "
    "help users organize their meals, workouts, tasks, reminders, and schedule. "
    "Call a function whenever the user asks to create, change, list or remove "
    "one of those items, then confirm what you did in plain language."
)
FALLBACK_MESSAGE = "I'm here to help!"
TRUNCATED_MESSAGE = (
    "I've completed the requested actions, though the conversation may have "
    "been truncated due to complexity."
)
QUOTA_MESSAGE = "OpenAI API quota exceeded. Please check your billing settings."
INVALID_KEY_MESSAGE = "Invalid OpenAI API key. Please check your configuration."
GENERIC_ERROR_MESSAGE = "I encountered an error while processing your request."
MISSING_KEY_MESSAGE = (
    "OpenAI API key not configured. "
    "Please set the OPENAI_API_KEY environment variable."
)

_MODEL_ERROR_MESSAGES = {
    "insufficient_quota": QUOTA_MESSAGE,
    "invalid_api_key": INVALID_KEY_MESSAGE,
}


class ChatCompletionClient(Protocol):
    """Interface for a chat model that supports function calling."""

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        tools: list[dict[str, object]],
        temperature: float,
    ) -> ConversationTurn:
        """Return the assistant turn produced for the conversation."""


@dataclass
class ChatService:
    """Turns one user utterance into one assistant reply."""

    client: ChatCompletionClient | None
    model: str
    temperature: float = 0.7
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    system_prompt: str = SYSTEM_PROMPT
    fallback_message: str = FALLBACK_MESSAGE
    truncated_message: str = TRUNCATED_MESSAGE
    catalog: tuple[FunctionSpec, ...] = FUNCTION_CATALOG
    handlers: Mapping[str, ActionHandler] = field(
        default_factory=lambda: ACTION_HANDLERS
    )

    @property
    def is_configured(self) -> bool:
        """Return True when a model client is available."""
        return self.client is not None

    async def reply(
        self,
        message: str,
        history: list[ConversationTurn] | None,
        services: PlannerServices,
    ) -> ChatReply:
        """Run the function-calling loop until the model answers in text."""
        client = self.client
        if client is None:
            raise ConfigurationError(MISSING_KEY_MESSAGE)
        if services.owner_id is None:
            raise UnauthenticatedError()

        conversation = self._start_conversation(message, history)
        tools = [spec.to_tool() for spec in self.catalog]
        actions: list[ActionRecord] = []
        iterations = 0
        logger.info(
            "Chat request",
            extra={"owner_id": str(services.owner_id), "turns": len(conversation)},
        )

        while iterations < self.max_iterations:
            turn = await self._complete(client, conversation, tools)
            conversation.append(turn)
            if not turn.tool_calls:
                logger.info(
                    "Chat complete",
                    extra={"iterations": iterations + 1, "actions": len(actions)},
                )
                return ChatReply(
                    message=turn.content or self.fallback_message,
                    actions=actions,
                    conversation=conversation,
                    iterations=iterations + 1,
                )
            for call in turn.tool_calls:
                action = self._run_call(call, services)
                actions.append(action)
                conversation.append(
                    ConversationTurn(
                        role="tool",
                        content=json.dumps(action.result),
                        tool_call_id=call.id,
                        name=call.name,
                    )
                )
            iterations += 1

        logger.warning(
            "Chat iteration limit reached",
            extra={"iterations": iterations, "actions": len(actions)},
        )
        return ChatReply(
            message=self.truncated_message,
            actions=actions,
            conversation=conversation,
            iterations=iterations,
            truncated=True,
        )

    def _start_conversation(
        self, message: str, history: list[ConversationTurn] | None
    ) -> list[ConversationTurn]:
        user_turn = ConversationTurn(role="user", content=message)
        if not history:
            system_turn = ConversationTurn(role="system", content=self.system_prompt)
            return [system_turn, user_turn]
        return [*history, user_turn]

    async def _complete(
        self,
        client: ChatCompletionClient,
        conversation: list[ConversationTurn],
        tools: list[dict[str, object]],
    ) -> ConversationTurn:
        try:
            return await client.complete(
                model=self.model,
                messages=[turn.to_message() for turn in conversation],
                tools=tools,
                temperature=self.temperature,
            )
        except Exception as exc:
            code = getattr(exc, "code", None)
            raise ModelCallError(
                code if isinstance(code, str) else None, str(exc)
            ) from exc

    def _run_call(
        self, call: FunctionCallRequest, services: PlannerServices
    ) -> ActionRecord:
        logger.info("Function call", extra={"function": call.name})
        try:
            arguments = json.loads(call.arguments or "{}")
        except json.JSONDecodeError:
            logger.warning(
                "Malformed function arguments", extra={"function": call.name}
            )
            return ActionRecord(
                function=call.name,
                arguments=call.arguments,
                result={
                    "success": False,
                    "error": "Failed to parse function arguments",
                },
            )
        if not isinstance(arguments, dict):
            return ActionRecord(
                function=call.name,
                arguments=arguments,
                result={
                    "success": False,
                    "error": "Function arguments must be a JSON object",
                },
            )
        result = execute_action(self.handlers, services, call.name, arguments)
        return ActionRecord(function=call.name, arguments=arguments, result=result)


def model_error_message(code: str | None) -> str:
    """Return the user-facing message for a failed model call."""
    return _MODEL_ERROR_MESSAGES.get(code or "", GENERIC_ERROR_MESSAGE)
