"""Domain models for assistant conversations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class FunctionCallRequest:
    """A model request to invoke one catalog function."""

    id: str
    name: str
    arguments: str


@dataclass(frozen=True)
class ConversationTurn:
    """One message in a conversation, in the order it was appended."""

    role: str
    content: str | None = None
    tool_calls: list[FunctionCallRequest] = field(default_factory=list)
    tool_call_id: str | None = None
    name: str | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def to_message(self) -> dict[str, object]:
        """Return the chat-completions message shape for this turn."""
        message: dict[str, object] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [
                {
                    "id": call.id,
                    "type": "function",
                    "function": {"name": call.name, "arguments": call.arguments},
                }
                for call in self.tool_calls
            ]
        if self.tool_call_id is not None:
            message["tool_call_id"] = self.tool_call_id
        if self.name is not None and self.role == "tool":
            message["name"] = self.name
        return message


@dataclass(frozen=True)
class ActionRecord:
    """A function call attempted during one assistant reply."""

    function: str
    arguments: object
    result: dict[str, object]

    @property
    def success(self) -> bool:
        """Return True when the handler completed without raising."""
        return bool(self.result.get("success"))


@dataclass(frozen=True)
class ChatReply:
    """Final outcome of one orchestration run."""

    message: str
    actions: list[ActionRecord]
    conversation: list[ConversationTurn]
    iterations: int
    truncated: bool = False
