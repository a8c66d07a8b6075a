"""Компилятор отчётов по оценке: баллы, radar chart, рекомендации, пагинация."""
from src.report.models import (
    AnswerRecord,
    Assessment,
    CategoryScore,
    ContentItem,
    Document,
    Page,
    QuestionMeta,
    Section,
)
from src.report.scoring import (
    calculate_category_scores,
    compute_category_scores,
    compute_overall_score,
    readiness_level,
)
from src.report.chart import ChartConfig, ChartGeometryBuilder
from src.report.recommendations import Narrative, parse_recommendations, resolve_narrative
from src.report.pagination import PaginationConfig, ReportPaginator
from src.report.assembler import ReportAssembler, compile_report

__all__ = [
    # Модели
    "AnswerRecord",
    "Assessment",
    "CategoryScore",
    "ContentItem",
    "Document",
    "Page",
    "QuestionMeta",
    "Section",
    # Баллы
    "calculate_category_scores",
    "compute_category_scores",
    "compute_overall_score",
    "readiness_level",
    # График
    "ChartConfig",
    "ChartGeometryBuilder",
    # Рекомендации
    "Narrative",
    "parse_recommendations",
    "resolve_narrative",
    # Пагинация
    "PaginationConfig",
    "ReportPaginator",
    # Сборка
    "ReportAssembler",
    "compile_report",
]
