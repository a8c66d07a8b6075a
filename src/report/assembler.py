"""
Сборка отчёта по оценке.

Порядок страниц фиксирован: обложка, график, рекомендации, ответы.
Сборка чистая: нет I/O и чтения часов, одинаковый вход — одинаковый Document.
"""
import logging
from typing import Mapping, Optional, Sequence, Union

from src.core.config import ReportSettings, get_settings
from src.core.exceptions import DegenerateChartError
from src.report.chart import ChartConfig, ChartGeometryBuilder
from src.report.models import (
    AnswerRecord,
    Assessment,
    CategoryScore,
    ChartContent,
    CoverContent,
    Document,
    Page,
    QuestionMeta,
    QuestionMetaInput,
    ResponseEntry,
    index_questions,
)
from src.report.pagination import PaginationConfig, ReportPaginator
from src.report.recommendations import NarrativeInput, build_sections, resolve_narrative
from src.report.scoring import (
    answer_label,
    calculate_category_scores,
    compute_overall_score,
    readiness_level,
    to_display_score,
)

logger = logging.getLogger(__name__)

DEFAULT_REPORT_TITLE = "AI Readiness Assessment Results"

RADAR_CAPTIONS = (
    "This radar chart shows your organization's score across different "
    "dimensions of AI readiness.",
    "Higher scores (closer to the edges) indicate greater maturity in that category.",
)
BAR_CAPTIONS = (
    "This chart shows your organization's score across different "
    "dimensions of AI readiness.",
    "Longer bars indicate greater maturity in that category.",
)


def question_label(question_id: str, meta: Optional[QuestionMeta]) -> str:
    """Формулировка вопроса; без метаданных — "Question {id}"."""
    if meta is not None and meta.text:
        return meta.text
    return f"Question {question_id}"


def build_response_entries(
    answers: Sequence[AnswerRecord],
    questions: Mapping[str, QuestionMeta],
) -> list[ResponseEntry]:
    """Ответы в печатном виде, нумерация сквозная с 1."""
    return [
        ResponseEntry(
            number=number,
            question_id=answer.question_id,
            question_text=question_label(answer.question_id, questions.get(answer.question_id)),
            raw_value=answer.raw_value,
            answer_label=answer_label(answer.raw_value),
        )
        for number, answer in enumerate(answers, 1)
    ]


class ReportAssembler:
    """Собирает Document из оценки, текста рекомендаций и метаданных вопросов."""

    def __init__(
        self,
        chart_config: ChartConfig,
        pagination_config: PaginationConfig,
        title: str = DEFAULT_REPORT_TITLE,
    ):
        self.chart_builder = ChartGeometryBuilder(chart_config)
        self.paginator = ReportPaginator(pagination_config)
        self.title = title

    @classmethod
    def from_settings(cls, settings: Optional[ReportSettings] = None) -> "ReportAssembler":
        """
        Создать сборщик из настроек.

        Raises:
            ReportConfigError: Если настройки невалидны
        """
        settings = settings or get_settings()
        return cls(
            chart_config=settings.chart_config(),
            pagination_config=settings.pagination_config(),
            title=settings.report_title,
        )

    def _chart_content(
        self,
        scores: list[CategoryScore],
        overall_score: float,
        level: str,
    ) -> ChartContent:
        try:
            radar = self.chart_builder.build(scores)
        except DegenerateChartError as e:
            logger.warning(f"⚠️ {e}; falling back to bar chart")
            return ChartContent(
                scores=tuple(scores),
                overall_score=overall_score,
                readiness_level=level,
                bars=self.chart_builder.build_bars(scores),
                captions=BAR_CAPTIONS,
            )

        return ChartContent(
            scores=tuple(scores),
            overall_score=overall_score,
            readiness_level=level,
            radar=radar,
            captions=RADAR_CAPTIONS,
        )

    def compile(
        self,
        assessment: Assessment,
        narrative: NarrativeInput,
        question_meta: Optional[QuestionMetaInput] = None,
    ) -> Document:
        """
        Собрать отчёт.

        Args:
            assessment: Завершённая оценка
            narrative: Текст рекомендаций (строка, {"content": ...} или None)
            question_meta: Метаданные вопросов

        Returns:
            Document со сквозной нумерацией страниц
        """
        questions = index_questions(question_meta)

        # 1. Баллы
        scores = calculate_category_scores(assessment.answers, questions)
        overall_score = compute_overall_score(assessment.answers)
        level = readiness_level(overall_score)

        # 2. Контент
        chart = self._chart_content(scores, overall_score, level)
        sections = build_sections(resolve_narrative(narrative), level)
        responses = build_response_entries(assessment.answers, questions)

        cover = CoverContent(
            title=self.title,
            survey_title=assessment.survey_title,
            overall_score=overall_score,
            display_score=to_display_score(overall_score),
            readiness_level=level,
            completed_on=assessment.completed_on,
        )

        # 3. Страницы
        fixed = [("cover", cover), ("chart", chart)]
        plan = self.paginator.plan(len(sections), len(responses), leading_pages=len(fixed))

        pages = [
            Page(type=page_type, content=content, page_number=number, total_pages=plan.total_pages)
            for number, (page_type, content) in enumerate(fixed, 1)
        ]
        pages += self.paginator.paginate_recommendations(sections, plan)
        pages += self.paginator.paginate_responses(responses, plan)

        logger.info(
            f"📄 Report compiled: {plan.total_pages} pages "
            f"({plan.recommendation_pages} recommendations, {plan.response_pages} responses), "
            f"score {overall_score}/10, level {level}"
        )

        return Document(pages=tuple(pages), total_pages=plan.total_pages)


def compile_report(
    assessment: Union[Assessment, Mapping],
    narrative_text: NarrativeInput,
    question_meta: Optional[QuestionMetaInput] = None,
    *,
    settings: Optional[ReportSettings] = None,
) -> Document:
    """
    Полный конвейер: баллы → график → рекомендации → пагинация → Document.

    Args:
        assessment: Assessment или словарь в формате хранилища
        narrative_text: Текст рекомендаций (строка, {"content": ...} или None)
        question_meta: Метаданные вопросов (id -> категория/формулировка)
        settings: Настройки (по умолчанию — get_settings())
    """
    if isinstance(assessment, Mapping):
        assessment = Assessment.from_dict(assessment)

    assembler = ReportAssembler.from_settings(settings)
    return assembler.compile(assessment, narrative_text, question_meta)
