"""LLM call tracing.

The pipeline depends on BaseTracer, not on Langfuse, so tests and runs
without Langfuse credentials use NoOpTracer and never touch the network.
Tracing is observability only: every Langfuse call is guarded and a backend
error is logged, never raised into the review.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from langfuse import Langfuse

from diffreview_core.config import tracing_enabled

if TYPE_CHECKING:
    from diffreview_core.models import PRDetails

logger = logging.getLogger(__name__)

TRACE_NAME = "github-action-pr-review"
GENERATION_NAME = "openai-chat-completion"
_REQUEST_TIMEOUT_SECONDS = 10


class Generation(ABC):
    """Handle for one traced LLM call."""

    @abstractmethod
    def end(self, output: Any) -> None:
        """Close the span, recording the call's output (None when it failed)."""


class BaseTracer(ABC):
    enabled: bool = False

    @abstractmethod
    def start_trace(self, pr_details: PRDetails) -> None:
        """Open the per-run trace that generations are attached to."""

    @abstractmethod
    def start_generation(self, prompt: str, model: str, model_parameters: dict) -> Generation:
        """Open a span for one LLM call."""

    def shutdown(self) -> None:
        """Flush pending events. Default is a no-op so callers can always call it."""


class _NoOpGeneration(Generation):
    def end(self, output: Any) -> None:
        pass


class NoOpTracer(BaseTracer):
    """Used when Langfuse credentials are not configured."""

    def start_trace(self, pr_details: PRDetails) -> None:
        pass

    def start_generation(self, prompt: str, model: str, model_parameters: dict) -> Generation:
        return _NoOpGeneration()


class _LangfuseGeneration(Generation):
    def __init__(self, generation):
        self._generation = generation

    def end(self, output: Any) -> None:
        try:
            self._generation.end(output=output)
        except Exception as e:
            logger.error("Langfuse error while ending generation: %s", e)


class LangfuseTracer(BaseTracer):
    enabled = True

    def __init__(self, secret_key: str, public_key: str, host: str | None = None, client=None):
        if client is None:
            client = Langfuse(
                secret_key=secret_key,
                public_key=public_key,
                host=host or None,
                timeout=_REQUEST_TIMEOUT_SECONDS,
            )
        self.client = client
        self._trace = None

    def start_trace(self, pr_details: PRDetails) -> None:
        try:
            self._trace = self.client.trace(
                name=TRACE_NAME,
                user_id=pr_details.owner,
                metadata={"repo": pr_details.repo, "pull_number": pr_details.pull_number},
                tags=["github-action"],
            )
        except Exception as e:
            logger.error("Langfuse error while starting trace: %s", e)
            self._trace = None

    def start_generation(self, prompt: str, model: str, model_parameters: dict) -> Generation:
        parent = self._trace if self._trace is not None else self.client
        try:
            generation = parent.generation(
                name=GENERATION_NAME,
                model=model,
                model_parameters=model_parameters,
                input=prompt,
            )
        except Exception as e:
            logger.error("Langfuse error while starting generation: %s", e)
            return _NoOpGeneration()
        return _LangfuseGeneration(generation)

    def shutdown(self) -> None:
        try:
            self.client.shutdown()
        except Exception as e:
            logger.error("Langfuse error during shutdown: %s", e)


def build_tracer(config: dict) -> BaseTracer:
    """Return a LangfuseTracer when both Langfuse keys are set, else a NoOpTracer."""
    if not tracing_enabled(config):
        return NoOpTracer()
    try:
        return LangfuseTracer(
            secret_key=config["langfuse_secret_key"],
            public_key=config["langfuse_public_key"],
            host=config.get("langfuse_host"),
        )
    except Exception as e:
        logger.error("Could not initialise Langfuse; tracing disabled: %s", e)
        return NoOpTracer()
