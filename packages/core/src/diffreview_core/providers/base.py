"""Base reviewer implementing the Template Method pattern.

All providers share the same review algorithm:
    review() → open trace generation
             → _call_api()   ← only this differs per provider
             → _parse()
             → close trace generation

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

Every failure here is soft: review() returns None and the hunk simply gets no
comments. Nothing is retried.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from diffreview_core.errors import MalformedReviewError
from diffreview_core.models import AIReview

if TYPE_CHECKING:
    from diffreview_core.tracing import BaseTracer

logger = logging.getLogger(__name__)


class BaseReviewer(ABC):
    TEMPERATURE: float = 0.2
    MAX_TOKENS: int = 700
    TOP_P: float = 1
    FREQUENCY_PENALTY: float = 0
    PRESENCE_PENALTY: float = 0

    def __init__(self, model: str):
        self.model = model

    @property
    def model_parameters(self) -> dict:
        return {
            "temperature": self.TEMPERATURE,
            "max_tokens": self.MAX_TOKENS,
            "top_p": self.TOP_P,
            "frequency_penalty": self.FREQUENCY_PENALTY,
            "presence_penalty": self.PRESENCE_PENALTY,
        }

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    async def review(self, prompt: str, tracer: BaseTracer | None = None) -> list[AIReview] | None:
        """Send one prompt and return the validated reviews, or None on any failure."""
        generation = tracer.start_generation(prompt, self.model, self.model_parameters) if tracer else None
        raw_reviews: Any = None
        try:
            content = await self._call_api(prompt)
            raw_reviews = self._extract_reviews(content)
        except Exception as e:
            logger.error("Error fetching AI response: %s", e)
            raw_reviews = None
        finally:
            if generation is not None:
                generation.end(output=raw_reviews)

        if raw_reviews is None:
            return None
        return self._parse(raw_reviews)

    async def close(self) -> None:
        """Release the provider client. Providers without one have nothing to do."""

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    async def _call_api(self, prompt: str) -> str | None:
        """Make a single API call and return the raw text response.

        It should raise on transport or provider failure; review() logs it.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _extract_reviews(self, content: str | None) -> list | None:
        """Return the raw ``reviews`` list from the model's JSON text, or None."""
        text = (content or "").strip()
        if not text:
            logger.warning("AI response is empty.")
            return None

        logger.debug("AI response: %s", text)
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("%s: failed to parse response as JSON: %s", self.__class__.__name__, text[:200])
            return None

        reviews = parsed.get("reviews") if isinstance(parsed, dict) else None
        if not isinstance(reviews, list):
            logger.warning("%s: response has no \"reviews\" list: %s", self.__class__.__name__, text[:200])
            return None
        return reviews

    def _parse(self, raw_reviews: list) -> list[AIReview]:
        """Validate each raw item, dropping malformed ones without affecting the rest."""
        reviews = []
        for item in raw_reviews:
            try:
                reviews.append(AIReview.from_dict(item))
            except MalformedReviewError as e:
                logger.warning("%s: skipping malformed review item: %s", self.__class__.__name__, e)
        return reviews
