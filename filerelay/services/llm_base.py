"""
FileRelay: Abstract Generative Service Interface
==================================================

What:  Abstract base class defining the contract for the generative-content
       collaborator: "submit (prompt, file bytes + MIME type) → text".
How:   Concrete implementations inherit from GenerativeService and
       implement generate() and health_check().
Who:   Called by RelayService for every accepted upload; the route receives
       the concrete instance through a FastAPI dependency, so tests can
       substitute a stub.
"""

from abc import ABC, abstractmethod

from filerelay.schemas.upload import Upload


class GenerativeService(ABC):
    """
    Abstract interface for describing an uploaded file with a hosted model.

    Contract:
        - generate() makes exactly one call to the provider; no retries
        - Provider errors of any kind are wrapped in GenerationError
        - The returned text is passed back to the caller unchanged
        - Implementations keep no per-request state, so one instance can
          serve concurrent requests
    """

    @abstractmethod
    async def generate(self, prompt: str, upload: Upload) -> str:
        """
        Submit the prompt and the upload to the model and return its text.

        Args:
            prompt: Instruction text sent before the file part.
            upload: Validated upload (bytes + MIME type).

        Returns:
            str: The model's text response, verbatim.

        Raises:
            GenerationError: When the provider call fails for any reason.
                `details` carries the underlying error message.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Report whether the service is ready to accept calls.

        Must not consume provider quota.
        """
        ...
