# tests/conftest.py
import pytest

from core.config import get_settings
from readiness.question_bank import get_question_bank, load_question_bank

_SETTINGS_ENV = (
    "READINESS_QUESTION_BANK",
    "READINESS_PERMISSION",
    "READINESS_LOG_LEVEL",
    "RAG_GREEN_THRESHOLD",
    "RAG_AMBER_THRESHOLD",
    "CONFIDENCE_HIGH_THRESHOLD",
    "CONFIDENCE_MEDIUM_THRESHOLD",
    "READINESS_SUBMISSION_READY_THRESHOLD",
    "READINESS_MINOR_GAPS_THRESHOLD",
    "READINESS_MAJOR_GAPS_THRESHOLD",
    "ALLOW_SCORE_OVERRIDE_ABOVE_MAX",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    # A developer .env or exported variables must not leak into tests.
    monkeypatch.chdir(tmp_path)
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_question_bank.cache_clear()
    yield
    get_settings.cache_clear()
    get_question_bank.cache_clear()


@pytest.fixture
def question_set():
    return load_question_bank()
