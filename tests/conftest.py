"""
FileRelay: Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── sample_jpeg_bytes / sample_png_bytes / sample_pdf_bytes
    ├── stub_service: in-memory GenerativeService recording its calls
    └── test_client: HTTPX AsyncClient with the stub injected
"""

import asyncio
import os
from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before any filerelay import: settings are read at import time
os.environ["GOOGLE_GENERATIVE_AI_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from filerelay.exceptions import GenerationError  # noqa: E402
from filerelay.schemas.upload import Upload  # noqa: E402
from filerelay.services.llm_base import GenerativeService  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Stub Generative Service
# ══════════════════════════════════════════════════════════════════════════

class StubGenerativeService(GenerativeService):
    """
    Stands in for GeminiService in endpoint tests.

    - text: returned for every call (None → echo the upload's bytes)
    - error: message of a GenerationError raised instead
    - failure: any other exception raised instead (e.g. a dropped connection)
    - delay: seconds to sleep before answering (interleaves concurrent calls)
    """

    def __init__(
        self,
        text: Optional[str] = None,
        error: Optional[str] = None,
        delay: float = 0,
        failure: Optional[Exception] = None,
    ):
        self.text = text
        self.error = error
        self.failure = failure
        self.delay = delay
        self.calls: List[tuple] = []

    async def generate(self, prompt: str, upload: Upload) -> str:
        self.calls.append((prompt, upload))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise GenerationError(details=self.error)
        if self.failure is not None:
            raise self.failure
        if self.text is not None:
            return self.text
        return f"described: {upload.content.decode()}"

    async def health_check(self) -> bool:
        return True


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_jpeg_bytes():
    """Minimal JPEG: SOI marker + JFIF header + EOI marker."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_png_bytes():
    """PNG signature followed by an empty IEND chunk."""
    return b'\x89PNG\r\n\x1a\n\x00\x00\x00\x00IEND\xaeB`\x82'


@pytest.fixture
def sample_pdf_bytes():
    return b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"


@pytest.fixture
def stub_service():
    return StubGenerativeService(text="Ten bullet points...")


@pytest_asyncio.fixture
async def test_client(stub_service):
    """
    HTTPX AsyncClient talking to the app through ASGITransport, with the
    generative service dependency replaced by `stub_service`.

    Usage:
        async def test_read(test_client, stub_service):
            stub_service.text = "..."
            response = await test_client.post("/read-file", files=...)
    """
    from filerelay.main import app
    from filerelay.services.relay_service import get_generative_service

    app.dependency_overrides[get_generative_service] = lambda: stub_service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
