from dataclasses import dataclass
from typing import Any, Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class JSONCompletion:
    data: dict[str, Any]
    model: str
    tokens_used: int = 0


class AIClient(Protocol):
    async def complete_json(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.3,
        max_tokens: int = 1500,
    ) -> JSONCompletion: ...
