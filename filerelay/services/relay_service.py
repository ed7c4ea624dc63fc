"""
FileRelay: Relay Service (Request Orchestrator)
=================================================

What:  Coordinates validate → generate → wrap for one uploaded file.
How:   Composes UploadService and a GenerativeService implementation.
Who:   Called by the POST /read-file route handler.
When:  Once per request, after the multipart body has been read.

Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────────┐
    │  Upload  │───▶│  Validate   │───▶│  Gemini API  │───▶│  Generation  │
    │  (Route) │    │ (UploadServ)│    │ (GeminiServ) │    │  Result      │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────────┘

    Application errors propagate unchanged to the global handlers; any
    other failure of the model call is wrapped in GenerationError so it
    gets the same 500 body. Nothing is retried.

RelayService keeps no per-request state; the generative service is passed
in for every call so the route can resolve it through FastAPI dependencies.
"""

import logging
from typing import Optional

from filerelay.config import settings
from filerelay.exceptions import FileRelayError, GenerationError
from filerelay.schemas.upload import GenerationResult
from filerelay.services.gemini_service import gemini_service
from filerelay.services.llm_base import GenerativeService
from filerelay.services.upload_service import UploadService, upload_service

logger = logging.getLogger(__name__)


class RelayService:
    """
    Relays a validated upload to the generative model.

    Attributes:
        prompt: Instruction sent with every file (settings.relay_prompt).
        uploads: Validator used to build the Upload entity.
    """

    def __init__(
        self,
        prompt: Optional[str] = None,
        uploads: Optional[UploadService] = None,
    ):
        self.prompt = prompt or settings.relay_prompt
        self.uploads = uploads or upload_service

    async def relay(
        self,
        generator: GenerativeService,
        filename: Optional[str],
        mime_type: Optional[str],
        content: bytes,
    ) -> GenerationResult:
        """
        Validate the bytes, submit them with the prompt, wrap the text.

        Args:
            generator: Generative service for this request.
            filename: Original client filename (logging only).
            mime_type: Declared Content-Type of the upload.
            content: Raw bytes read from the request.

        Returns:
            GenerationResult holding the model text verbatim.

        Raises:
            ValidationError: Type or size rejected (no API call is made).
            GenerationError: The model call failed (any non-application
                exception from the generator is wrapped).
        """
        upload = self.uploads.build_upload(filename, mime_type, content)
        try:
            text = await generator.generate(self.prompt, upload)
        except FileRelayError:
            raise
        except Exception as e:
            raise GenerationError(
                details=str(e),
                context={"error_type": type(e).__name__},
            ) from e
        logger.info(
            "Relayed %s (%d bytes): %d chars generated",
            upload.filename or "upload",
            upload.size,
            len(text),
        )
        return GenerationResult(generated_text=text)


def get_generative_service() -> GenerativeService:
    """
    FastAPI dependency returning the process-wide generative service.

    Tests replace it through app.dependency_overrides.
    """
    return gemini_service


# ── Singleton Instance ────────────────────────────────────────────────────
relay_service = RelayService()
