"""Pydantic models for the chat endpoint."""

from pydantic import BaseModel, ConfigDict, Field

from life_planner.domain.chat import (
    ActionRecord,
    ConversationTurn,
    FunctionCallRequest,
)


class ChatFunction(BaseModel):
    """Function name and raw JSON arguments of a tool call."""

    name: str
    arguments: str = "{}"


class ChatToolCall(BaseModel):
    """Tool call attached to an assistant message."""

    id: str
    type: str = "function"
    function: ChatFunction


class ChatMessage(BaseModel):
    """One prior conversation message in chat-completions shape."""

    role: str
    content: str | None = None
    tool_calls: list[ChatToolCall] | None = None
    tool_call_id: str | None = None
    name: str | None = None

    def to_turn(self) -> ConversationTurn:
        """Convert the message into a conversation turn."""
        return ConversationTurn(
            role=self.role,
            content=self.content,
            tool_calls=[
                FunctionCallRequest(
                    id=call.id,
                    name=call.function.name,
                    arguments=call.function.arguments,
                )
                for call in self.tool_calls or []
            ],
            tool_call_id=self.tool_call_id,
            name=self.name,
        )


class ChatRequest(BaseModel):
    """Chat endpoint payload."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    messages: list[ChatMessage] = Field(default_factory=list)
    user_id: str | None = Field(default=None, alias="userId")

    def history(self) -> list[ConversationTurn]:
        """Return prior turns as domain objects."""
        return [message.to_turn() for message in self.messages]


def chat_response(
    message: str,
    actions: list[ActionRecord] | None = None,
    conversation: list[ConversationTurn] | None = None,
) -> dict[str, object]:
    """Build the chat endpoint response body."""
    performed = actions or []
    return {
        "message": message,
        "actions": [
            {
                "function": action.function,
                "arguments": action.arguments,
                "result": action.result,
            }
            for action in performed
        ],
        "actionResults": [action.result for action in performed],
        "activeModule": None,
        "messages": [turn.to_message() for turn in conversation or []],
    }
