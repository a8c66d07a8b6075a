"""
Агрегация баллов по категориям.

Единственный источник правды для баллов отчёта:
- ответ v ∈ -2..2 нормализуется в v' = (v + 2) * 2.5, т.е. на шкалу 0-10
- балл категории = среднее v' её отвеченных вопросов, округлённое до 0.1
- шкала 0-100 — только для отображения (×10), отдельно не считается
"""
import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from src.report.models import (
    MAX_SCORE,
    UNCATEGORIZED,
    AnswerRecord,
    Assessment,
    CategoryScore,
    QuestionMetaInput,
    index_questions,
)

logger = logging.getLogger(__name__)


# Подписи ответов для страницы с ответами
ANSWER_LABELS = {
    2: "Strongly Agree",
    1: "Agree",
    0: "Neutral",
    -1: "Disagree",
    -2: "Strongly Disagree",
}
NOT_ANSWERED_LABEL = "Not answered"

# Пороги уровня готовности (шкала 0-100)
READINESS_LEVELS = [
    (80, "advanced"),
    (60, "intermediate"),
    (40, "developing"),
]
DEFAULT_READINESS_LEVEL = "beginning"


def normalize_answer(raw_value: int) -> float:
    """-2..2 -> 0..10: -2 → 0, 0 → 5, 2 → 10."""
    return (raw_value + 2) * 2.5


def round_score(value: float) -> float:
    """Округление до одного знака, половинки — вверх (8.75 → 8.8)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _mean_score(values: list[float]) -> float:
    score = round_score(math.fsum(values) / len(values))
    return min(max(score, 0.0), MAX_SCORE)


def calculate_category_scores(
    answers: Iterable[AnswerRecord],
    question_meta: Optional[QuestionMetaInput] = None,
) -> list[CategoryScore]:
    """
    Рассчитать баллы по категориям.

    Порядок категорий — порядок первого появления при проходе по ответам
    (включая пропущенные), затем остальные категории из метаданных.
    Вопросы без метаданных попадают в "Uncategorized".

    Args:
        answers: Ответы респондента
        question_meta: Метаданные вопросов (id -> категория)

    Returns:
        Список CategoryScore; категории без ответов — score 0, no_data=True
    """
    questions = index_questions(question_meta)
    answers = list(answers)

    # Собираем нормализованные ответы по категориям
    grouped: dict[str, list[float]] = {}
    unmapped = 0

    for answer in answers:
        meta = questions.get(answer.question_id)
        if meta is None:
            category = UNCATEGORIZED
            unmapped += 1
        else:
            category = meta.category

        bucket = grouped.setdefault(category, [])
        if answer.answered:
            bucket.append(normalize_answer(answer.raw_value))

    for meta in questions.values():
        grouped.setdefault(meta.category, [])

    if unmapped:
        logger.debug(f"[SCORES] {unmapped} answers without question metadata -> {UNCATEGORIZED}")

    if not any(answer.answered for answer in answers):
        logger.info(f"[SCORES] No answered questions, {len(grouped)} categories without data")

    scores = []
    for category, values in grouped.items():
        if values:
            scores.append(CategoryScore(category=category, score=_mean_score(values)))
        else:
            scores.append(CategoryScore(category=category, score=0.0, no_data=True))

    return scores


def compute_category_scores(
    assessment: Assessment,
    question_meta: Optional[QuestionMetaInput] = None,
) -> list[CategoryScore]:
    """Баллы по категориям для оценки (используется и вне отчёта, напр. в бенчмарке)."""
    return calculate_category_scores(assessment.answers, question_meta)


def compute_overall_score(answers: Iterable[AnswerRecord]) -> float:
    """Общий балл 0-10: среднее по всем отвеченным вопросам."""
    values = [normalize_answer(a.raw_value) for a in answers if a.answered]
    if not values:
        return 0.0
    return _mean_score(values)


def to_display_score(score: float) -> int:
    """0-10 -> 0-100 для отображения."""
    return int(round(score * 10))


def readiness_level(score: float) -> str:
    """
    Уровень готовности по общему баллу.

    Args:
        score: Общий балл на шкале 0-10
    """
    display = to_display_score(score)
    for threshold, level in READINESS_LEVELS:
        if display >= threshold:
            return level
    return DEFAULT_READINESS_LEVEL


def answer_label(raw_value: Optional[int]) -> str:
    """Текстовая подпись ответа."""
    if raw_value is None:
        return NOT_ANSWERED_LABEL
    return ANSWER_LABELS.get(raw_value, NOT_ANSWERED_LABEL)
