"""Exceptions raised by the review pipeline.

DiffReviewError and its subclasses are fatal: they abort the run and are
reported once by the CLI. MalformedReviewError never leaves the provider
layer: a bad review item is dropped, its siblings are kept.
"""

from __future__ import annotations


class DiffReviewError(Exception):
    """A fatal error that aborts the review run."""


class ConfigError(DiffReviewError):
    """A required input is missing or a setting is invalid."""


class EventError(DiffReviewError):
    """The trigger payload is missing, unreadable or incomplete."""


class MalformedReviewError(ValueError):
    """A single item in the model's ``reviews`` list has the wrong shape."""
