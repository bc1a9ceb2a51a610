import logging
from typing import Optional

from google import genai
from google.genai import types

from aceinterview.core.config import settings
from aceinterview.core.exceptions import GenerationError
from aceinterview.services.base.llm_client import BaseLLMClient

logger = logging.getLogger(__name__)

_client: Optional[genai.Client] = None


def get_genai_client() -> genai.Client:
    """Shared GenAI SDK client, created on first use"""
    global _client
    if _client is None:
        _client = genai.Client(api_key=settings.GEMINI_API_KEY)
    return _client


class GeminiClient(BaseLLMClient):
    def __init__(self, model: Optional[str] = None, temperature: float = 0.7,
                 max_output_tokens: Optional[int] = None, client: Optional[genai.Client] = None):
        self.model = model or settings.GEMINI_MODEL
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens or settings.MAX_OUTPUT_TOKENS
        self._client = client

    @property
    def client(self) -> genai.Client:
        return self._client or get_genai_client()

    def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        json_output: bool = False,
        temperature: Optional[float] = None,
    ) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self.temperature if temperature is None else temperature,
            max_output_tokens=self.max_output_tokens,
            response_mime_type="application/json" if json_output else None,
        )
        logger.info(f"🤖 [GEMINI] Calling {self.model} (json={json_output}, prompt={len(prompt)} chars)")
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            logger.error(f"❌ [GEMINI] Request failed: {e}")
            raise GenerationError(f"Gemini request failed: {e}") from e

        text = response.text or ""
        if not text.strip():
            logger.error("❌ [GEMINI] Empty response")
            raise GenerationError("Gemini returned an empty response.")
        return text.strip()


def check_gemini_connection() -> bool:
    """Make a tiny request to confirm the API key and model are usable"""
    try:
        get_genai_client().models.generate_content(
            model=settings.GEMINI_MODEL,
            contents="Test",
            config={"max_output_tokens": 10},
        )
        return True
    except Exception as e:
        logger.error(f"❌ [GEMINI] Connection check failed: {e}")
        return False
