"""OpenAI Chat Completions client with function calling."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from life_planner.domain.chat import ConversationTurn, FunctionCallRequest
from life_planner.services.chat import ChatCompletionClient


@dataclass
class OpenAIChatClient(ChatCompletionClient):
    """Chat client backed by OpenAI Chat Completions."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIChatClient":
        """Create an OpenAI chat client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        tools: list[dict[str, object]],
        temperature: float,
    ) -> ConversationTurn:
        """Request one assistant turn, allowing at most one function call."""
        request_payload: dict[str, object] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if tools:
            request_payload["tools"] = tools
            request_payload["tool_choice"] = "auto"
            request_payload["parallel_tool_calls"] = False

        response = await self.client.chat.completions.create(**request_payload)
        if not response.choices:
            raise RuntimeError("OpenAI returned no choices")
        message = response.choices[0].message
        tool_calls = [
            FunctionCallRequest(
                id=call.id,
                name=call.function.name,
                arguments=call.function.arguments or "{}",
            )
            for call in message.tool_calls or []
        ]
        return ConversationTurn(
            role="assistant", content=message.content, tool_calls=tool_calls
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
