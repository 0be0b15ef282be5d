"""Port interface for AI text-generation providers."""

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..application.cancellation import CancellationToken


class LLMPort(Protocol):
    """Generate text for a prompt with one provider.

    Implementations raise ``ProviderError`` on any failure and
    ``GenerationCancelled`` when the token is cancelled before the request
    is sent or while it is in flight.
    """

    provider: str

    @abstractmethod
    def generate(
        self,
        prompt: str,
        model: str,
        api_key: str,
        cancellation: "CancellationToken | None" = None,
    ) -> str:
        """Send ``prompt`` to ``model`` and return the generated text."""
