"""
FileRelay: Read-File Route Handler
====================================

What:  Handles POST /read-file: one uploaded image or PDF in, the model's
       description out.
How:   Receives the multipart upload (already spooled by the multipart
       parser), rejects repeated file fields and bad metadata, reads at
       most max_file_size + 1 bytes of the spooled part, then delegates to
       RelayService.
Who:   Called by any HTTP client.

Request Flow:
    1. Client sends multipart/form-data with a 'file' field
    2. Missing field → MissingFileError (400)
    3. More than one 'file' part → ValidationError (400)
    4. Declared type/size checked → ValidationError (400)
    5. Bounded read, actual size re-checked → ValidationError (400)
    6. Gemini call → GenerationError (500) or 200 {"generatedText": ...}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from filerelay.exceptions import MissingFileError, ValidationError
from filerelay.schemas.upload import ErrorResponse, GenerationResult
from filerelay.services.llm_base import GenerativeService
from filerelay.services.relay_service import get_generative_service, relay_service
from filerelay.services.upload_service import upload_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Read File"])


@router.post(
    "/read-file",
    response_model=GenerationResult,
    responses={
        200: {"description": "File described successfully", "model": GenerationResult},
        400: {"description": "Missing file, invalid type, file too large or more than one file", "model": ErrorResponse},
        500: {"description": "Generative API failure", "model": ErrorResponse},
    },
    summary="Describe an uploaded image or PDF",
    description=(
        "Upload a JPEG, PNG or PDF file (max 10MB) in the `file` form field. "
        "The file is sent to Google Gemini with a fixed prompt and the "
        "generated description is returned as `generatedText`."
    ),
)
async def read_file(
    request: Request,
    file: Optional[UploadFile] = File(
        default=None,
        description="Image (JPEG, PNG) or PDF file, max 10MB",
    ),
    generator: GenerativeService = Depends(get_generative_service),
) -> GenerationResult:
    """
    Describe an uploaded file.

    Returns:
        GenerationResult (HTTP 200), serialized as {"generatedText": "..."}.

    Error responses (handled by global exception handlers):
        HTTP 400: No file (MissingFileError), bad type or size (ValidationError)
                  or more than one `file` part (ValidationError)
        HTTP 500: Gemini call failed (GenerationError)
    """
    if file is None:
        raise MissingFileError()

    # FastAPI binds only one of repeated parts; the form is already parsed
    form = await request.form()
    file_parts = len(form.getlist("file"))
    if file_parts > 1:
        await file.close()
        raise ValidationError(
            message="Unexpected field",
            field="file",
            context={"file_parts": file_parts},
        )

    logger.info(
        "Received read-file request: filename=%s, type=%s, size=%s",
        file.filename or "unknown",
        file.content_type,
        file.size if file.size is not None else "unknown",
    )

    try:
        # Reject on declared metadata before touching the body
        upload_service.validate(file.content_type, file.size)

        # The parser has already spooled the whole part; reading one byte
        # past the limit is enough for the actual-size re-check
        content = await file.read(upload_service.max_file_size + 1)

        return await relay_service.relay(
            generator,
            filename=file.filename,
            mime_type=file.content_type,
            content=content,
        )
    finally:
        await file.close()
