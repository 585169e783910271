"""Gemini-backed text generation."""

import os
from typing import Optional

import google.generativeai as genai
import structlog
from google.api_core import exceptions as google_exceptions
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from drivetally.domain.analysis import TextGenerator
from drivetally.domain.errors import ServiceError

DEFAULT_MODEL = "gemini-2.5-flash"

logger = structlog.get_logger(__name__)

# Worth another attempt; anything else (bad key, bad request) fails at once
TRANSIENT_ERRORS = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.ResourceExhausted,
    google_exceptions.DeadlineExceeded,
    google_exceptions.InternalServerError,
)


class GeminiTextGenerator(TextGenerator):
    """Text generator calling the Gemini API.

    Configuration comes from the environment unless given explicitly:
    GEMINI_API_KEY (required) and GEMINI_MODEL.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        self.model_name = model_name or os.environ.get("GEMINI_MODEL", DEFAULT_MODEL)
        self._model = None

    def _get_model(self):
        if self._model is None:
            if not self.api_key:
                raise ServiceError(
                    "GEMINI_API_KEY is not set; the analysis service is unavailable"
                )
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(
                model_name=self.model_name,
                generation_config={"temperature": 0.4},
            )
        return self._model

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _generate(self, prompt: str) -> str:
        response = self._get_model().generate_content(prompt)
        return response.text

    def summarize(self, formatted_text: str) -> str:
        """Send the prompt to Gemini and return its text.

        Raises:
            ServiceError: If the API key is missing or the call fails
        """
        self._get_model()
        try:
            text = self._generate(formatted_text)
        except google_exceptions.GoogleAPIError as e:
            logger.error("gemini_request_failed", model=self.model_name, error=str(e))
            raise ServiceError(
                "Could not reach the analysis service. Check your connection and try again."
            ) from e
        except ValueError as e:
            # response.text raises ValueError when the answer was blocked
            logger.error("gemini_empty_response", model=self.model_name, error=str(e))
            raise ServiceError("The analysis service returned no text.") from e

        if not text or not text.strip():
            raise ServiceError("The analysis service returned no text.")
        logger.debug("gemini_response", model=self.model_name, length=len(text))
        return text
