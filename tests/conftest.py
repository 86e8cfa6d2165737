import pytest

from screening_core.config import LLMSettings
from screening_core.models.patient import PatientInfo, TestResultSet
from screening_core.prompt import PromptManager


def _trials(correct: int, total: int) -> list[dict]:
    return [{"isCorrect": i < correct} for i in range(total)]


@pytest.fixture
def raw_results():
    """Camel-case payload: 3/4 emotion, reactions 250/300/600 ms, 4/5 pattern."""
    return {
        "emotionTest": _trials(3, 4),
        "reactionTest": [
            {"valid": True, "reactionTime": 250},
            {"valid": True, "reactionTime": 300},
            {"valid": True, "reactionTime": 600},
        ],
        "patternTest": _trials(4, 5),
    }


@pytest.fixture
def raw_patient():
    return {"id": "p1", "name": "Alex", "age": 8, "gender": "male"}


@pytest.fixture
def results(raw_results):
    return TestResultSet.model_validate(raw_results)


@pytest.fixture
def patient(raw_patient):
    return PatientInfo.model_validate(raw_patient)


@pytest.fixture
def prompts():
    """Fresh PromptManager for each test."""
    return PromptManager()


@pytest.fixture
def llm_settings():
    """Settings without a credential: the gateway uses the fallback only."""
    return LLMSettings()
