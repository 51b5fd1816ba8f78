"""
Gemini API client.

Thin wrapper over the google-genai SDK that sends a single user prompt and
returns the model's free text. Callers extract whatever structure they need.
"""

import logging
import os
import time

from google import genai
from google.genai import types as genai_types

from englishai.config import DEFAULT_MODEL


logger = logging.getLogger(__name__)


def _response_text(response) -> str:
    """Text of the first candidate, or raise if the response is empty."""
    if response.text is not None:
        return response.text

    if response.candidates and len(response.candidates) > 0:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            return candidate.content.parts[0].text
    raise ValueError("Empty response from API")


class GeminiClient:
    """Wrapper for Gemini API text generation."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
        sleep_seconds: float = 1.0,
    ):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not set. Check your .env file.")

        self.client = genai.Client(api_key=self.api_key)
        self.model_name = model
        self.temperature = temperature
        self.sleep_seconds = sleep_seconds

    def _contents(self, prompt: str) -> list[genai_types.Content]:
        return [
            genai_types.Content(role="user", parts=[genai_types.Part(text=prompt)])
        ]

    def _config(self) -> genai_types.GenerateContentConfig:
        return genai_types.GenerateContentConfig(temperature=self.temperature)

    def generate(self, prompt: str, max_retries: int = 1) -> str:
        """
        Generate text synchronously.

        Retries only when asked to (batch scripts); the app makes one attempt
        and leaves retrying to the learner.
        """
        for attempt in range(max_retries):
            try:
                response = self.client.models.generate_content(
                    model=self.model_name,
                    contents=self._contents(prompt),
                    config=self._config(),
                )
                return _response_text(response)

            except Exception as e:
                logger.warning(f"API call failed (attempt {attempt + 1}/{max_retries}): {e}")
                if attempt < max_retries - 1:
                    time.sleep(self.sleep_seconds * (attempt + 1))
                else:
                    raise

    async def generate_async(self, prompt: str) -> str:
        """Generate text on the running event loop. Single attempt."""
        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=self._contents(prompt),
            config=self._config(),
        )
        return _response_text(response)
