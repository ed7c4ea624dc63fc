"""
FileRelay: Google Gemini Service Implementation
=================================================

What:  Concrete generative service using the Google Gemini API.
How:   Sends the fixed prompt plus the upload as a base64 inline-data part
       to Gemini with a single awaited call, and returns the response text.
Who:   Instantiated once at import; used by RelayService for each request.
When:  After upload validation, once per accepted request.

Failure Policy:
    Single shot, fail closed. Any exception from the SDK (network, quota,
    safety block, malformed input) becomes a GenerationError whose
    `details` is the SDK's message. There is no retry, no fallback model
    and no partial-result handling.
"""

import logging
import time
import uuid
from typing import Optional

import google.generativeai as genai

from filerelay.config import settings
from filerelay.exceptions import GenerationError
from filerelay.middleware.request_id import request_id_var
from filerelay.schemas.upload import Upload
from filerelay.services.llm_base import GenerativeService
from filerelay.services.upload_service import UploadService

logger = logging.getLogger(__name__)


class GeminiService(GenerativeService):
    """
    Google Gemini implementation of the generative relay.

    The SDK is configured and the model handle created once; both are
    read-only afterwards and shared by all concurrent requests.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        """
        Args:
            api_key: Override settings.gemini_api_key (used in tests).
            model_name: Override settings.gemini_model.
        """
        key = settings.gemini_api_key if api_key is None else api_key
        self.model_name = model_name or settings.gemini_model
        self.configured = bool(key and key.strip())

        # The SDK keeps auth in module-level state
        if self.configured:
            genai.configure(api_key=key)

        self.model = genai.GenerativeModel(self.model_name)

        logger.info(
            "GeminiService initialized with model=%s (api key %s)",
            self.model_name,
            "configured" if self.configured else "missing",
        )

    async def generate(self, prompt: str, upload: Upload) -> str:
        """
        Describe an uploaded file with Gemini.

        Flow:
            1. Base64-encode the bytes into an inline-data part
            2. Await generate_content_async([prompt, part])
            3. Return response.text verbatim

        Raises:
            GenerationError: on any failure, including a response without
                text (e.g. blocked by safety filters).
        """
        rid = request_id_var.get("") or str(uuid.uuid4())[:8]
        part = UploadService.to_generative_part(upload)

        logger.info(
            "[%s] Sending %s (%d bytes) to %s",
            rid,
            upload.mime_type,
            upload.size,
            self.model_name,
        )

        start_time = time.perf_counter()
        try:
            response = await self.model.generate_content_async([prompt, part])
            # .text raises ValueError when the candidate has no text parts
            text = response.text
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.warning(
                "[%s] Gemini call failed after %.0fms: %s",
                rid,
                duration_ms,
                str(e),
            )
            raise GenerationError(
                details=str(e),
                context={
                    "request_id": rid,
                    "model": self.model_name,
                    "error_type": type(e).__name__,
                },
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "[%s] Gemini call completed in %.0fms, generated %d chars",
            rid,
            duration_ms,
            len(text),
        )
        return text

    async def health_check(self) -> bool:
        """True when an API key was configured. Makes no network call."""
        return self.configured


# ── Singleton Instance ────────────────────────────────────────────────────
# One client handle per process, reused read-only across requests
gemini_service = GeminiService()
