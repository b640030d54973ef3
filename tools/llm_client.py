from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional
import asyncio

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from utils.config import AppConfig, load_config
from utils.logging import get_logger


logger = get_logger(__name__)

SUPPORTED_PROVIDERS = ("openai", "anthropic")


@dataclass
class ChatMessage:
    role: str
    content: str


class LLMError(Exception):
    pass


class LLMClient:
    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or load_config()
        self._provider, self._model = self._parse_model_preference(self.config.model_preference)
        self._client: Any = None
        self._unavailable_reason: Optional[str] = self._preflight()
        # One-time preflight log (no secrets)
        status = "ready" if self.ready else f"unavailable:{self._unavailable_reason}"
        logger.info(f"LLM preflight provider={self._provider} model={self._model} status={status}")

    @staticmethod
    def _parse_model_preference(pref: str) -> tuple[str, str]:
        if ":" in pref:
            provider, model = pref.split(":", 1)
        else:
            provider, model = "openai", pref
        return provider.strip().lower(), model.strip()

    def _preflight(self) -> Optional[str]:
        if self._provider not in SUPPORTED_PROVIDERS:
            return f"unsupported_provider:{self._provider}"
        if self._provider == "openai" and not self.config.openai_api_key:
            return "missing_openai_api_key"
        if self._provider == "anthropic" and not self.config.anthropic_api_key:
            return "missing_anthropic_api_key"
        return None

    @property
    def ready(self) -> bool:
        return self._unavailable_reason is None

    @property
    def model_name(self) -> str:
        return f"{self._provider}:{self._model}"

    def _get_client(self) -> Any:
        if self._client is None:
            if self._provider == "openai":
                self._client = AsyncOpenAI(api_key=self.config.openai_api_key)
            else:
                self._client = AsyncAnthropic(api_key=self.config.anthropic_api_key)
        return self._client

    async def acomplete(self, system_prompt: str, messages: List[ChatMessage], temperature: float = 0.2) -> str:
        if not self.ready:
            raise LLMError(self._unavailable_reason or "provider_unavailable")
        max_retries = max(1, self.config.max_retries)
        timeout = self.config.request_timeout_seconds
        for attempt in range(1, max_retries + 1):
            try:
                if self._provider == "openai":
                    return await self._openai_complete(system_prompt, messages, temperature, timeout)
                return await self._anthropic_complete(system_prompt, messages, temperature, timeout)
            except LLMError as e:
                logger.warning(f"LLM request failed (attempt {attempt}/{max_retries}): {e}")
                if attempt == max_retries:
                    raise
                await asyncio.sleep(0.5 * attempt)
        raise LLMError("no attempts made")

    async def _openai_complete(self, system_prompt: str, messages: List[ChatMessage], temperature: float, timeout: int) -> str:
        full_messages = ([{"role": "system", "content": system_prompt}] +
                         [{"role": m.role, "content": m.content} for m in messages])
        try:
            resp = await asyncio.wait_for(
                self._get_client().chat.completions.create(
                    model=self._model,
                    messages=full_messages,
                    temperature=temperature,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise LLMError(f"timed out after {timeout}s") from e
        except Exception as e:
            raise LLMError(str(e)) from e
        return resp.choices[0].message.content or ""

    async def _anthropic_complete(self, system_prompt: str, messages: List[ChatMessage], temperature: float, timeout: int) -> str:
        try:
            resp = await asyncio.wait_for(
                self._get_client().messages.create(
                    model=self._model,
                    system=system_prompt,
                    max_tokens=1500,
                    temperature=temperature,
                    messages=[{"role": m.role, "content": m.content} for m in messages],
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise LLMError(f"timed out after {timeout}s") from e
        except Exception as e:
            raise LLMError(str(e)) from e
        return "".join(block.text for block in resp.content if getattr(block, "type", "") == "text")
