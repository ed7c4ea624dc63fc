"""
FileRelay: Gemini Service Unit Tests (Mocked)
===============================================

What:  Tests for GeminiService with a mocked Google Generative AI SDK.
How:   Patches the genai module and model to simulate success/failure.

What we test:
    ✅ Prompt and base64 inline-data part are submitted in one call
    ✅ Response text is returned verbatim
    ✅ Any SDK failure becomes GenerationError with the original message
    ✅ No retry after a failure
    ❌ Real API calls
"""

import base64
from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import pytest

from filerelay.exceptions import GenerationError
from filerelay.schemas.upload import Upload
from filerelay.services.gemini_service import GeminiService

PROMPT = "What's in this file? Explain in 10 points."


def make_upload(content: bytes, mime_type: str = "image/jpeg") -> Upload:
    return Upload(content=content, mime_type=mime_type, size=len(content), filename="f")


def make_service(mock_genai, response=None, error=None, api_key="test-key"):
    """Build a GeminiService whose model is an AsyncMock."""
    mock_model = MagicMock()
    if error is not None:
        mock_model.generate_content_async = AsyncMock(side_effect=error)
    else:
        mock_model.generate_content_async = AsyncMock(return_value=response)
    mock_genai.GenerativeModel.return_value = mock_model
    return GeminiService(api_key=api_key, model_name="gemini-1.5-flash"), mock_model


class TestGeminiServiceInit:
    """Client handle set-up."""

    def test_configures_sdk_once_with_key(self):
        with patch("filerelay.services.gemini_service.genai") as mock_genai:
            service = GeminiService(api_key="abc", model_name="gemini-1.5-pro")

        mock_genai.configure.assert_called_once_with(api_key="abc")
        mock_genai.GenerativeModel.assert_called_once_with("gemini-1.5-pro")
        assert service.model is mock_genai.GenerativeModel.return_value
        assert service.configured is True

    def test_missing_key_skips_configure(self):
        with patch("filerelay.services.gemini_service.genai") as mock_genai:
            service = GeminiService(api_key="")

        mock_genai.configure.assert_not_called()
        assert service.configured is False

    @pytest.mark.asyncio
    async def test_health_check_reflects_configuration(self):
        with patch("filerelay.services.gemini_service.genai"):
            assert await GeminiService(api_key="abc").health_check() is True
            assert await GeminiService(api_key="").health_check() is False


class TestGeminiServiceGenerate:
    """Single-shot generation against a mocked model."""

    @pytest.mark.asyncio
    async def test_generate_success(self, sample_jpeg_bytes):
        with patch("filerelay.services.gemini_service.genai") as mock_genai:
            mock_response = MagicMock()
            mock_response.text = "Ten bullet points..."
            service, mock_model = make_service(mock_genai, response=mock_response)

            result = await service.generate(PROMPT, make_upload(sample_jpeg_bytes))

        assert result == "Ten bullet points..."
        mock_model.generate_content_async.assert_awaited_once_with(
            [
                PROMPT,
                {
                    "mime_type": "image/jpeg",
                    "data": base64.b64encode(sample_jpeg_bytes).decode("ascii"),
                },
            ]
        )

    @pytest.mark.asyncio
    async def test_text_returned_verbatim(self, sample_png_bytes):
        """Leading/trailing whitespace from the model is preserved."""
        with patch("filerelay.services.gemini_service.genai") as mock_genai:
            mock_response = MagicMock()
            mock_response.text = "  1. A logo\n2. Blue background\n"
            service, _ = make_service(mock_genai, response=mock_response)

            result = await service.generate(PROMPT, make_upload(sample_png_bytes, "image/png"))

        assert result == "  1. A logo\n2. Blue background\n"

    @pytest.mark.asyncio
    async def test_sdk_failure_wrapped(self, sample_jpeg_bytes):
        with patch("filerelay.services.gemini_service.genai") as mock_genai:
            service, mock_model = make_service(
                mock_genai, error=RuntimeError("quota exceeded")
            )

            with pytest.raises(GenerationError) as exc_info:
                await service.generate(PROMPT, make_upload(sample_jpeg_bytes))

        assert exc_info.value.details == "quota exceeded"
        assert exc_info.value.message == "An error occurred while generating content"
        assert exc_info.value.context["error_type"] == "RuntimeError"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        # Single shot: no retry after the failure
        assert mock_model.generate_content_async.await_count == 1

    @pytest.mark.asyncio
    async def test_response_without_text_wrapped(self, sample_pdf_bytes):
        """Blocked responses raise ValueError from .text; that is a failure too."""
        with patch("filerelay.services.gemini_service.genai") as mock_genai:
            mock_response = MagicMock()
            type(mock_response).text = PropertyMock(
                side_effect=ValueError("response was blocked")
            )
            service, _ = make_service(mock_genai, response=mock_response)

            with pytest.raises(GenerationError) as exc_info:
                await service.generate(PROMPT, make_upload(sample_pdf_bytes, "application/pdf"))

        assert exc_info.value.details == "response was blocked"
