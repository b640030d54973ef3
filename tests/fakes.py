from typing import List, Optional

from tools.llm_client import ChatMessage, LLMError


class FakeLLM:
    model_name = "fake:reviewer"

    def __init__(self, reply: str = "", error: Optional[str] = None):
        self.reply = reply
        self.error = error
        self.calls: List[tuple] = []

    async def acomplete(self, system_prompt: str, messages: List[ChatMessage], temperature: float = 0.2) -> str:
        self.calls.append((system_prompt, messages, temperature))
        if self.error:
            raise LLMError(self.error)
        return self.reply
