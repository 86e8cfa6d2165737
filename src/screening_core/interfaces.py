"""Abstract interface for completion backends.

The SDK ships two implementations in :mod:`screening_core.gateway`:

  - ``LiveCompletion`` — OpenAI chat completions over the network
  - ``DeterministicFallback`` — local content computed from the scores

``LLMGateway`` picks between them by availability, so route handlers never
branch on whether the model is reachable::

    gateway = LLMGateway(settings, prompts)
    result = await gateway.complete(request)
    result.degraded  # True when the fallback answered
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator

from screening_core.models.completion import Completion, CompletionRequest


class CompletionBackend(ABC):
    """Something that can answer a single-turn completion request."""

    name: str = "backend"

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> Completion:
        """Return the full completion text for *request*.

        Live implementations may raise on any upstream failure; the gateway
        converts that into fallback content.
        """
        ...

    @abstractmethod
    def stream(self, request: CompletionRequest) -> AsyncIterator[str]:
        """Yield incremental text chunks for *request* as they arrive.

        Implementations are async generators.  Closing the generator early
        (client disconnect) must release the upstream request.
        """
        ...
