import logging
import httpx
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from vota_informado.config import GeminiSettings

logger = logging.getLogger(__name__)


class GenerationServiceError(Exception):
    """Raised when the text-generation service cannot produce a response."""
    pass

class MissingCredentialError(GenerationServiceError):
    """Raised when no API key is configured for the text-generation service."""
    pass


class TextGenerator(ABC):
    """A capability that turns a prompt into free text."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Returns the generated text for `prompt`.

        Raises:
            GenerationServiceError: If the service fails or is unreachable.
        """


class GeminiTextGenerator(TextGenerator):
    """
    Calls the Gemini `generateContent` REST endpoint. One request per prompt,
    no retries.
    """
    def __init__(self, settings: Optional[GeminiSettings] = None):
        self.settings = settings or GeminiSettings()

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}/models/{self.settings.model}:generateContent"

    async def generate(self, prompt: str) -> str:
        if not self.is_configured:
            logger.error("GEMINI_API_KEY environment variable not set. Cannot call the text-generation service.")
            raise MissingCredentialError("API key for Gemini is not set")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {
            'Content-Type': 'application/json',
            'x-goog-api-key': self.settings.api_key,
            'Accept': 'application/json'
        }

        async with httpx.AsyncClient() as client:
            try:
                logger.debug(f"Sending generateContent request to {self.endpoint} ({len(prompt)} prompt chars)")
                response = await client.post(
                    self.endpoint,
                    headers=headers,
                    json=payload,
                    timeout=self.settings.timeout_seconds
                )
                response.raise_for_status()
                body = response.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"HTTP error from text-generation service: {e.response.status_code} - {e.response.text}")
                raise GenerationServiceError(f"Text-generation service returned HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                logger.error(f"Request error while calling text-generation service: {e}")
                raise GenerationServiceError(f"Text-generation service unreachable: {e}") from e
            except ValueError as e:
                logger.error(f"Text-generation service returned a non-JSON body: {e}")
                raise GenerationServiceError("Text-generation service returned an invalid response") from e
            except Exception as e:
                logger.error(f"An unexpected error occurred calling the text-generation service: {e}", exc_info=True)
                raise GenerationServiceError(f"Unexpected text-generation failure: {e}") from e

        text = extract_text(body)
        if text is None:
            logger.error(f"Text-generation response had no text candidates: {body}")
            raise GenerationServiceError("Text-generation service returned no text")
        logger.info(f"Generated {len(text)} characters with model {self.settings.model}")
        return text


def extract_text(body: Dict[str, Any]) -> Optional[str]:
    """Joins the text parts of the first candidate of a generateContent response."""
    if not isinstance(body, dict):
        return None
    candidates = body.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list):
        return None
    texts = [part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)]
    if not texts:
        return None
    return "".join(texts)
