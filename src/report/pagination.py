"""
Пагинация отчёта.

Атомарные единицы (разделы рекомендаций, ответы) раскладываются по
страницам последовательными группами, без разрывов внутри единицы.
Номера страниц сквозные по всему документу:

    total = leading + ceil(sections / C_rec) + ceil(responses / C_resp) + trailing

Пустой список единиц даёт ноль страниц, а не пустую страницу.
"""
import logging
import math
from dataclasses import dataclass
from typing import Sequence, TypeVar

from src.core.exceptions import ReportConfigError
from src.report.models import Page, PageType

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Обложка + страница с графиком
LEADING_FIXED_PAGES = 2


def _require_int(name: str, value, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ReportConfigError(f"{name} must be an integer >= {minimum}, got {value!r}")


@dataclass(frozen=True)
class PaginationConfig:
    """
    Ёмкость страниц и число фиксированных страниц в конце.

    trailing_pages — номера, зарезервированные под страницы, которые
    рендерер добавляет в конец сам (например, контакты); в Document.pages
    они не попадают, но учитываются в total_pages.
    """

    responses_per_page: int
    recommendations_per_page: int = 2
    trailing_pages: int = 0

    def __post_init__(self):
        _require_int("responses_per_page", self.responses_per_page, 1)
        _require_int("recommendations_per_page", self.recommendations_per_page, 1)
        _require_int("trailing_pages", self.trailing_pages, 0)


@dataclass(frozen=True)
class PagePlan:
    """Раскладка номеров страниц по типам контента."""

    recommendation_pages: int
    response_pages: int
    recommendations_offset: int
    responses_offset: int
    total_pages: int


def count_pages(units: int, capacity: int) -> int:
    """ceil(units / capacity); 0 единиц — 0 страниц."""
    if units <= 0:
        return 0
    return math.ceil(units / capacity)


def chunk(units: Sequence[T], capacity: int) -> list[tuple[T, ...]]:
    """Последовательные группы размером <= capacity."""
    return [tuple(units[i:i + capacity]) for i in range(0, len(units), capacity)]


class ReportPaginator:
    """Раскладывает атомарные единицы по страницам со сквозной нумерацией."""

    def __init__(self, config: PaginationConfig):
        self.config = config

    def plan(
        self,
        recommendation_units: int,
        response_units: int,
        leading_pages: int = LEADING_FIXED_PAGES,
    ) -> PagePlan:
        """Посчитать число страниц и смещения до раскладки контента."""
        config = self.config
        recommendation_pages = count_pages(recommendation_units, config.recommendations_per_page)
        response_pages = count_pages(response_units, config.responses_per_page)

        recommendations_offset = leading_pages
        responses_offset = recommendations_offset + recommendation_pages
        total_pages = responses_offset + response_pages + config.trailing_pages

        return PagePlan(
            recommendation_pages=recommendation_pages,
            response_pages=response_pages,
            recommendations_offset=recommendations_offset,
            responses_offset=responses_offset,
            total_pages=total_pages,
        )

    def paginate(
        self,
        units: Sequence,
        page_type: PageType,
        capacity: int,
        offset: int,
        total_pages: int,
    ) -> list[Page]:
        """
        Разложить единицы одного типа по страницам.

        Args:
            units: Атомарные единицы в порядке вывода
            page_type: Тип страниц
            capacity: Единиц на страницу
            offset: Сколько страниц документа идёт перед этими
            total_pages: Всего страниц в документе

        Returns:
            Страницы; со второй — continued=True
        """
        _require_int("capacity", capacity, 1)

        pages = [
            Page(
                type=page_type,
                content=group,
                page_number=offset + index + 1,
                total_pages=total_pages,
                continued=index > 0,
            )
            for index, group in enumerate(chunk(units, capacity))
        ]

        logger.debug(
            f"[PAGINATE] {len(units)} {page_type} units -> {len(pages)} pages "
            f"(capacity {capacity}, offset {offset})"
        )
        return pages

    def paginate_recommendations(self, sections: Sequence, plan: PagePlan) -> list[Page]:
        return self.paginate(
            sections,
            "recommendations",
            self.config.recommendations_per_page,
            plan.recommendations_offset,
            plan.total_pages,
        )

    def paginate_responses(self, entries: Sequence, plan: PagePlan) -> list[Page]:
        return self.paginate(
            entries,
            "responses",
            self.config.responses_per_page,
            plan.responses_offset,
            plan.total_pages,
        )
