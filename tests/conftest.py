import pytest
from datetime import date

from src.core.config import ReportSettings, get_settings
from src.report.models import AnswerRecord, Assessment, QuestionMeta

CATEGORIES = ["Strategy", "Data", "Technology"]

# 12 вопросов, категории по кругу: Strategy, Data, Technology, Strategy, ...
ANSWER_VALUES = [2, 1, 0, -1, -2, None, 2, 1, 0, -1, -2, None]

NARRATIVE = (
    "## Strategy\n"
    "Intro paragraph.\n"
    "- Align AI with business goals\n"
    "- Appoint an owner\n"
    "\n"
    "## Data\n"
    "1. Build a data catalog\n"
    "\n"
    "## Technology\n"
    "Invest in MLOps."
)


@pytest.fixture
def settings():
    """Настройки без .env, только значения по умолчанию."""
    return ReportSettings(_env_file=None)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def questions():
    return [
        QuestionMeta(question_id=i, category=CATEGORIES[(i - 1) % 3], text=f"Question text {i}")
        for i in range(1, 13)
    ]


@pytest.fixture
def assessment():
    return Assessment(
        answers=[AnswerRecord(question_id=i, raw_value=v) for i, v in enumerate(ANSWER_VALUES, 1)],
        survey_title="AI Readiness Survey",
        completed_on=date(2025, 3, 14),
    )


@pytest.fixture
def narrative():
    return NARRATIVE
