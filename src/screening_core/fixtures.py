"""FixtureStore — loads the static assessment content from YAML.

The emotion-recognition items and pattern sequences served to the client
games live in ``screening_core/data/``.  The store is loaded once at startup
and is read-only afterwards.

Usage::

    store = FixtureStore()          # defaults to the packaged data/ dir
    store.load()

    item = store.get_emotion_item(1)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from screening_core.models.fixtures import EmotionItem, PatternItem

logger = logging.getLogger(__name__)


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class FixtureStore:
    """Loads all fixture YAML and provides typed lookup.

    Attributes populated after :meth:`load`:

        emotion_items — list[EmotionItem], in file order
        pattern_items — list[PatternItem], in file order
    """

    def __init__(self, data_dir: str | Path | None = None) -> None:
        if data_dir is None:
            data_dir = Path(__file__).parent / "data"
        self._base = Path(data_dir)

        self.emotion_items: list[EmotionItem] = []
        self.pattern_items: list[PatternItem] = []

    def load(self) -> None:
        """Parse the fixture files.  Raises ``FileNotFoundError`` if one is missing."""
        self.emotion_items = [
            EmotionItem.model_validate(raw)
            for raw in load_yaml(self._base / "emotion_items.yaml") or []
        ]
        self.pattern_items = [
            PatternItem.model_validate(raw)
            for raw in load_yaml(self._base / "pattern_items.yaml") or []
        ]
        logger.info(
            "FixtureStore loaded: %d emotion items, %d patterns",
            len(self.emotion_items),
            len(self.pattern_items),
        )

    def get_emotion_item(self, item_id: int) -> EmotionItem:
        """Look up an emotion item by id.  Raises ``KeyError`` if unknown."""
        for item in self.emotion_items:
            if item.id == item_id:
                return item
        raise KeyError(f"Unknown emotion item: {item_id}")

    def get_pattern(self, pattern_id: int) -> PatternItem:
        """Look up a pattern by id.  Raises ``KeyError`` if unknown."""
        for pattern in self.pattern_items:
            if pattern.id == pattern_id:
                return pattern
        raise KeyError(f"Unknown pattern: {pattern_id}")
