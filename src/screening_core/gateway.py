"""LLM gateway — live OpenAI completions with a deterministic fallback.

Two ``CompletionBackend`` implementations live here:

  - :class:`LiveCompletion` calls the OpenAI chat completions API with a
    single system/user message pair.  The client is built with
    ``max_retries=0``: a failed call fails over immediately instead of being
    retried.
  - :class:`DeterministicFallback` renders content locally from the scores
    carried on the request.  It never touches the network and never raises.

:class:`LLMGateway` selects the live backend when a credential is
configured and converts *any* live failure (auth, quota, network, timeout,
empty output) into fallback content.  Callers always receive a
:class:`GatewayResult`; ``degraded`` and ``note`` tell them which backend
answered.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

import openai

from screening_core.analysis import heuristic_analysis
from screening_core.config import LLMSettings
from screening_core.constants import FALLBACK_MODEL
from screening_core.errors import UpstreamServiceError
from screening_core.interfaces import CompletionBackend
from screening_core.models.completion import (
    Completion,
    CompletionKind,
    CompletionRequest,
    GatewayResult,
    StreamEvent,
)
from screening_core.prompt import PromptManager

logger = logging.getLogger(__name__)

# --- Client-facing notes attached to degraded results ---
NOTE_NOT_CONFIGURED = (
    "LLM service is not configured; content was generated locally from the scores."
)
NOTE_UNAVAILABLE = (
    "LLM service was unavailable; content was generated locally from the scores."
)
NOTE_UNPARSEABLE = (
    "LLM response could not be interpreted; content was generated locally from the scores."
)
NOTE_STREAM_INTERRUPTED = "LLM stream was interrupted."


# ---------------------------------------------------------------------------
# Live backend
# ---------------------------------------------------------------------------

class LiveCompletion(CompletionBackend):
    """OpenAI chat completions backend.

    Args:
        settings: LLM configuration (credential, model, timeout).
        client: optional pre-built ``openai.AsyncOpenAI``; tests inject a
            mock here.
    """

    name = "openai"

    def __init__(self, settings: LLMSettings, client: openai.AsyncOpenAI | None = None) -> None:
        self._settings = settings
        self._client = client or openai.AsyncOpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            max_retries=0,
        )

    def _messages(self, request: CompletionRequest) -> list[dict]:
        return [
            {"role": "system", "content": request.system_prompt},
            {"role": "user", "content": request.user_prompt},
        ]

    async def complete(self, request: CompletionRequest) -> Completion:
        try:
            response = await self._client.chat.completions.create(
                model=self._settings.model,
                messages=self._messages(request),
                temperature=request.temperature,
                max_tokens=request.max_tokens,
            )
        except openai.OpenAIError as exc:
            raise UpstreamServiceError(type(exc).__name__) from exc

        if not response.choices:
            raise UpstreamServiceError("completion returned no choices")
        text = response.choices[0].message.content or ""
        if not text.strip():
            raise UpstreamServiceError("completion returned empty content")
        return Completion(text=text, model=response.model or self._settings.model)

    async def aclose(self) -> None:
        """Release the HTTP connection pool held by the OpenAI client."""
        await self._client.close()

    async def stream(self, request: CompletionRequest) -> AsyncIterator[str]:
        try:
            stream = await self._client.chat.completions.create(
                model=self._settings.model,
                messages=self._messages(request),
                temperature=request.temperature,
                max_tokens=request.max_tokens,
                stream=True,
            )
        except openai.OpenAIError as exc:
            raise UpstreamServiceError(type(exc).__name__) from exc

        try:
            async for event in stream:
                if not event.choices:
                    continue
                delta = event.choices[0].delta.content
                if delta:
                    yield delta
        except openai.OpenAIError as exc:
            raise UpstreamServiceError(type(exc).__name__) from exc
        finally:
            # Runs on completion, on error and when the consumer stops early
            await stream.close()


# ---------------------------------------------------------------------------
# Fallback backend
# ---------------------------------------------------------------------------

class DeterministicFallback(CompletionBackend):
    """Local content generated from the request's scores."""

    name = FALLBACK_MODEL

    def __init__(self, prompts: PromptManager) -> None:
        self._prompts = prompts

    async def complete(self, request: CompletionRequest) -> Completion:
        analysis = heuristic_analysis(request.scores)
        if request.kind is CompletionKind.REPORT:
            text = self._prompts.render_fallback_report(
                request.scores,
                request.interpretations,
                red_flags=analysis.concerns,
                recommendations=analysis.recommendations,
            )
        else:
            text = analysis.model_dump_json(by_alias=True)
        return Completion(text=text, model=self.name)

    async def stream(self, request: CompletionRequest) -> AsyncIterator[str]:
        completion = await self.complete(request)
        yield completion.text


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------

class LLMGateway:
    """Selects a backend by availability and absorbs live failures.

    Args:
        settings: LLM configuration; a live backend is built only when it
            carries a credential.
        prompts: prompt manager used by the fallback backend.
        live: optional live backend override (tests, alternative providers).
        fallback: optional fallback override.
    """

    def __init__(
        self,
        settings: LLMSettings,
        prompts: PromptManager,
        *,
        live: CompletionBackend | None = None,
        fallback: CompletionBackend | None = None,
    ) -> None:
        if live is None and settings.live_enabled:
            live = LiveCompletion(settings)
        self._live = live
        self._model = settings.model
        self._fallback = fallback or DeterministicFallback(prompts)
        if self._live is None:
            logger.warning("No LLM credential configured; all content will come from the fallback")

    @property
    def live_available(self) -> bool:
        return self._live is not None

    async def aclose(self) -> None:
        """Close the live backend, if it holds network resources."""
        aclose = getattr(self._live, "aclose", None)
        if aclose is not None:
            await aclose()

    async def fallback(self, request: CompletionRequest, note: str) -> GatewayResult:
        """Answer *request* from the fallback backend, marked as degraded."""
        completion = await self._fallback.complete(request)
        return GatewayResult(
            text=completion.text, model=completion.model, degraded=True, note=note,
        )

    async def complete(self, request: CompletionRequest) -> GatewayResult:
        if self._live is None:
            return await self.fallback(request, NOTE_NOT_CONFIGURED)
        try:
            completion = await self._live.complete(request)
        except Exception as exc:
            logger.warning(
                "Live %s completion failed (%s); using fallback",
                request.kind.value, type(exc).__name__,
            )
            return await self.fallback(request, NOTE_UNAVAILABLE)
        return GatewayResult(text=completion.text, model=completion.model)

    async def stream(self, request: CompletionRequest) -> AsyncIterator[StreamEvent]:
        """Yield chunk events followed by exactly one ``done`` or ``error``.

        A live failure before the first chunk is answered by the fallback as
        a single chunk.  A failure after chunks were sent cannot be patched
        over, so it ends the stream with an ``error`` event.  Partial output
        is never retried.
        """
        if self._live is None:
            async for event in self._stream_fallback(request, NOTE_NOT_CONFIGURED):
                yield event
            return

        emitted = False
        chunks = self._live.stream(request)
        try:
            async for text in chunks:
                emitted = True
                yield StreamEvent(type="chunk", text=text)
        except Exception as exc:
            logger.warning(
                "Live %s stream failed after %s output (%s)",
                request.kind.value, "partial" if emitted else "no", type(exc).__name__,
            )
            if emitted:
                yield StreamEvent(type="error", note=NOTE_STREAM_INTERRUPTED)
                return
            async for event in self._stream_fallback(request, NOTE_UNAVAILABLE):
                yield event
            return
        finally:
            # Propagates early close to the live backend's upstream stream
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()

        yield StreamEvent(type="done", model=self._model)

    async def _stream_fallback(
        self, request: CompletionRequest, note: str,
    ) -> AsyncIterator[StreamEvent]:
        result = await self.fallback(request, note)
        yield StreamEvent(type="chunk", text=result.text, degraded=True)
        yield StreamEvent(type="done", degraded=True, note=note, model=result.model)
