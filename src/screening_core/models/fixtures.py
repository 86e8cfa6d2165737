"""Static assessment content served to the client games.

These models mirror the YAML files in ``screening_core/data/``.
"""

from typing import Literal

from screening_core.models.base import CamelModel


class EmotionItem(CamelModel):
    """One emotion-recognition item: a face image and the answer options."""

    id: int
    image: str
    correct_emotion: str
    options: list[str]


class PatternItem(CamelModel):
    """One pattern-memory sequence (indices into the game's tile grid)."""

    id: int
    sequence: list[int]
    difficulty: Literal["easy", "medium", "hard"]
