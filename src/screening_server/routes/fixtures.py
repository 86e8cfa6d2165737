"""Static assessment content — emotion items and pattern sequences.

These are read-only endpoints backed by the YAML files loaded into the
``FixtureStore`` at startup.  They don't require authentication since the
content is not patient data.
"""

from fastapi import APIRouter, Depends

from screening_core.fixtures import FixtureStore

from screening_server.dependencies import get_store

router = APIRouter(prefix="/tests", tags=["fixtures"])


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/emotion-data")
def list_emotion_items(
    store: FixtureStore = Depends(get_store),
) -> dict:
    """Return all emotion-recognition items."""
    return {"items": [item.model_dump(by_alias=True) for item in store.emotion_items]}


@router.get("/emotion-data/{item_id}")
def get_emotion_item(
    item_id: int,
    store: FixtureStore = Depends(get_store),
) -> dict:
    """Return one emotion item; unknown ids become 404 via the KeyError handler."""
    return store.get_emotion_item(item_id).model_dump(by_alias=True)


@router.get("/pattern-data")
def list_patterns(
    store: FixtureStore = Depends(get_store),
) -> dict:
    """Return all pattern-memory sequences."""
    return {"patterns": [p.model_dump(by_alias=True) for p in store.pattern_items]}


@router.get("/pattern-data/{pattern_id}")
def get_pattern(
    pattern_id: int,
    store: FixtureStore = Depends(get_store),
) -> dict:
    """Return one pattern; unknown ids become 404 via the KeyError handler."""
    return store.get_pattern(pattern_id).model_dump(by_alias=True)
