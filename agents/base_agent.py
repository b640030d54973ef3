from __future__ import annotations

from typing import Optional, Protocol, List

from tools.llm_client import ChatMessage
from utils.logging import get_logger
from utils.telemetry import Telemetry


class CompletionClient(Protocol):
    model_name: str

    async def acomplete(self, system_prompt: str, messages: List[ChatMessage], temperature: float = 0.2) -> str:
        ...


class BaseAgent:
    def __init__(self, name: str, role: str, llm: CompletionClient, telemetry: Optional[Telemetry] = None):
        self.name = name
        self.role = role
        self.logger = get_logger(f"agent.{name}")
        self.llm = llm
        self.telemetry = telemetry or Telemetry()

    async def acomplete(self, system_prompt: str, user_content: str, temperature: float = 0.2) -> str:
        messages = [ChatMessage(role="user", content=user_content)]
        self.telemetry.incr("llm_requests")
        try:
            with self.telemetry.timer("llm_ms"):
                return await self.llm.acomplete(system_prompt, messages, temperature=temperature)
        except Exception:
            self.telemetry.incr("llm_failures")
            raise

    def describe(self) -> str:
        return f"{self.name}: {self.role}"
