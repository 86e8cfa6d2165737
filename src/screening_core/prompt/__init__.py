"""Prompt rendering for the completion backends.

Provides ``PromptManager``, a Jinja2-based template engine that renders
report, analysis and fallback-report text from patient info and scores.
"""

from screening_core.prompt.manager import PromptManager

__all__ = ["PromptManager"]
