from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


class SchemaLevel(str, Enum):
    UNCONSTRAINED = "unconstrained"
    CONSTRAINED = "constrained"


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class RawModelOutput:
    text: str


class AIClient(Protocol):
    async def complete(
        self, messages: Sequence[ChatMessage], *, schema_level: SchemaLevel
    ) -> RawModelOutput: ...

    async def aclose(self) -> None: ...
