"""
LLM Client - schema-constrained extraction call

The only network boundary to the extraction provider.
- Gemini: response_schema + application/json (google-genai)
- OpenAI: Structured Outputs (json_schema response_format)

Returns the provider's raw text. Parsing and validation happen in
response_validator. No retry, no cache, no truncation, no timeout beyond
the SDK default: a provider error is raised once as ProviderFailure.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, Optional

from google import genai
from google.genai import types as genai_types
from openai import AsyncOpenAI

from config import Settings, LLMProviderName
from exceptions import ProviderFailure
from schemas.profile_schema import to_openai_response_format

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Raw provider output"""
    provider: LLMProviderName
    raw_response: str
    model: str
    usage: Optional[Dict[str, int]] = None


class LLMClient:
    """
    Single-provider extraction client

    The SDK client is built only when an API key is present, so the API can
    boot without credentials (share links keep working); generate() then
    fails with ProviderFailure.
    """

    def __init__(
        self,
        provider: LLMProviderName,
        api_key: str,
        model: str,
        temperature: float = 0.1,
    ):
        self.provider = provider
        self.model = model
        self.temperature = temperature

        self.gemini_client: Optional[genai.Client] = None
        self.openai_client: Optional[AsyncOpenAI] = None

        if not api_key:
            logger.warning(f"[LLMClient] ⚠️ No API key for {provider.value}; extraction disabled")
        elif provider == LLMProviderName.GEMINI:
            self.gemini_client = genai.Client(api_key=api_key)
        elif provider == LLMProviderName.OPENAI:
            self.openai_client = AsyncOpenAI(api_key=api_key)
        else:
            raise ValueError(f"Unknown provider: {provider}")

        logger.info(f"[LLMClient] provider={provider.value}, model={model}, configured={self.is_configured}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMClient":
        if settings.LLM_PROVIDER == LLMProviderName.OPENAI:
            api_key, model = settings.OPENAI_API_KEY, settings.OPENAI_MODEL
        else:
            api_key, model = settings.GEMINI_API_KEY, settings.GEMINI_MODEL
        return cls(
            provider=settings.LLM_PROVIDER,
            api_key=api_key,
            model=model,
            temperature=settings.LLM_TEMPERATURE,
        )

    @property
    def is_configured(self) -> bool:
        return self.gemini_client is not None or self.openai_client is not None

    async def generate(
        self,
        system_instruction: str,
        user_text: str,
        response_schema: Dict[str, Any],
    ) -> LLMResponse:
        """
        Run one extraction call

        Args:
            system_instruction: fixed extraction rules
            user_text: document text
            response_schema: Gemini-style schema (converted for OpenAI)

        Raises:
            ProviderFailure: missing credentials, SDK/network/quota error,
                or an empty response
        """
        if not self.is_configured:
            raise ProviderFailure(
                f"{self.provider.value} API key not configured",
                details={"provider": self.provider.value},
            )

        start_time = datetime.now()
        logger.info(
            f"[LLMClient] {self.provider.value} call - model: {self.model}, "
            f"input: {len(user_text)} chars"
        )

        try:
            if self.provider == LLMProviderName.GEMINI:
                response = await self._call_gemini(system_instruction, user_text, response_schema)
            else:
                response = await self._call_openai(system_instruction, user_text, response_schema)
        except Exception as e:
            elapsed = (datetime.now() - start_time).total_seconds()
            logger.error(f"[LLMClient] ❌ {self.provider.value} error ({elapsed:.2f}s): {type(e).__name__}: {e}")
            raise ProviderFailure(
                "The extraction provider request failed",
                details={
                    "provider": self.provider.value,
                    "model": self.model,
                    "reason": str(e),
                },
            ) from e

        elapsed = (datetime.now() - start_time).total_seconds()
        if not response.raw_response:
            logger.error(f"[LLMClient] ❌ {self.provider.value} returned an empty response ({elapsed:.2f}s)")
            raise ProviderFailure(
                "The extraction provider returned an empty response",
                details={"provider": self.provider.value, "model": self.model},
            )

        logger.info(
            f"[LLMClient] ✅ {self.provider.value} response - {elapsed:.2f}s, "
            f"{len(response.raw_response)} chars, usage: {response.usage}"
        )
        return response

    async def _call_gemini(
        self,
        system_instruction: str,
        user_text: str,
        response_schema: Dict[str, Any],
    ) -> LLMResponse:
        config = genai_types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self.temperature,
            response_mime_type="application/json",
            response_schema=response_schema,
        )

        # google-genai is sync here; keep the event loop free
        response = await asyncio.to_thread(
            self.gemini_client.models.generate_content,
            model=self.model,
            contents=user_text,
            config=config,
        )

        usage = None
        if getattr(response, "usage_metadata", None):
            usage = {
                "prompt_tokens": getattr(response.usage_metadata, "prompt_token_count", 0) or 0,
                "completion_tokens": getattr(response.usage_metadata, "candidates_token_count", 0) or 0,
                "total_tokens": getattr(response.usage_metadata, "total_token_count", 0) or 0,
            }

        return LLMResponse(
            provider=LLMProviderName.GEMINI,
            raw_response=response.text or "",
            model=self.model,
            usage=usage,
        )

    async def _call_openai(
        self,
        system_instruction: str,
        user_text: str,
        response_schema: Dict[str, Any],
    ) -> LLMResponse:
        response = await self.openai_client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_text},
            ],
            temperature=self.temperature,
            response_format=to_openai_response_format(response_schema),
        )

        raw_content = ""
        if response.choices:
            raw_content = response.choices[0].message.content or ""

        return LLMResponse(
            provider=LLMProviderName.OPENAI,
            raw_response=raw_content,
            model=self.model,
            usage={
                "prompt_tokens": response.usage.prompt_tokens if response.usage else 0,
                "completion_tokens": response.usage.completion_tokens if response.usage else 0,
                "total_tokens": response.usage.total_tokens if response.usage else 0,
            },
        )
