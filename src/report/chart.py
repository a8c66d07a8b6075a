"""
Геометрия radar chart для страницы с баллами.

Рендерер получает готовые координаты: вершины полигона, лучи осей,
точки подписей, кольца сетки и деления шкалы. Система координат —
как у PDF/SVG рендерера: ось Y направлена вниз, первая категория сверху,
дальше по часовой стрелке.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from src.core.exceptions import DegenerateChartError, ReportConfigError
from src.report.models import (
    BarSegment,
    CategoryScore,
    ChartGeometry,
    ChartPoint,
    LabelAnchor,
    Point,
    ScaleTick,
)

logger = logging.getLogger(__name__)

MIN_RADAR_CATEGORIES = 3

# При |sin(angle)| меньше порога подпись по центру (сверху/снизу)
LABEL_CENTER_BAND = 0.1

# Подписи делений шкалы под горизонтальным лучом
TICK_LABEL_OFFSET = 10.0

# Деления шкалы по умолчанию, доли от full_mark
DEFAULT_TICK_FRACTIONS = (0.0, 0.3, 0.6, 1.0)


@dataclass(frozen=True)
class ChartConfig:
    """Параметры radar chart."""

    radius: float
    center_x: float
    center_y: float
    full_mark: float = 10.0
    label_offset: float = 15.0
    ring_fractions: tuple[float, ...] = (0.33, 0.66, 1.0)
    tick_values: Optional[tuple[float, ...]] = None

    def __post_init__(self):
        if not math.isfinite(self.radius) or self.radius <= 0:
            raise ReportConfigError(f"Chart radius must be positive, got {self.radius}")
        if not (math.isfinite(self.center_x) and math.isfinite(self.center_y)):
            raise ReportConfigError(
                f"Chart center must be finite, got ({self.center_x}, {self.center_y})"
            )
        if not math.isfinite(self.full_mark) or self.full_mark <= 0:
            raise ReportConfigError(f"Chart full mark must be positive, got {self.full_mark}")
        if self.tick_values is None:
            object.__setattr__(
                self,
                "tick_values",
                tuple(self.full_mark * fraction for fraction in DEFAULT_TICK_FRACTIONS),
            )
        if self.label_offset < 0:
            raise ReportConfigError(f"Label offset must be >= 0, got {self.label_offset}")
        for fraction in self.ring_fractions:
            if not 0 < fraction <= 1:
                raise ReportConfigError(f"Ring fraction must be in (0, 1], got {fraction}")
        for value in self.tick_values:
            if not 0 <= value <= self.full_mark:
                raise ReportConfigError(
                    f"Tick value must be in [0, {self.full_mark}], got {value}"
                )


class ChartGeometryBuilder:
    """Строит геометрию radar chart по баллам категорий."""

    def __init__(self, config: ChartConfig):
        self.config = config

    def normalize(self, score: float) -> float:
        """Доля от полного радиуса, 0..1."""
        return min(max(score / self.config.full_mark, 0.0), 1.0)

    def _polar(self, radius: float, angle: float) -> Point:
        # angle = 0 вверх, рост по часовой стрелке
        return Point(
            x=self.config.center_x + radius * math.sin(angle),
            y=self.config.center_y - radius * math.cos(angle),
        )

    def _label(self, angle: float) -> LabelAnchor:
        anchor = self._polar(self.config.radius + self.config.label_offset, angle)
        sin_a = math.sin(angle)

        if abs(sin_a) < LABEL_CENTER_BAND:
            align = "center"
        elif sin_a > 0:  # справа
            align = "left"
        else:  # слева
            align = "right"

        valign = "top" if math.cos(angle) < 0 else "bottom"
        return LabelAnchor(x=anchor.x, y=anchor.y, align=align, valign=valign)

    def build(self, scores: Sequence[CategoryScore]) -> ChartGeometry:
        """
        Построить геометрию radar chart.

        Args:
            scores: Баллы категорий в порядке отображения

        Returns:
            ChartGeometry; вершины, оси и подписи идут в порядке категорий

        Raises:
            DegenerateChartError: Если категорий меньше трёх
        """
        n = len(scores)
        if n < MIN_RADAR_CATEGORIES:
            raise DegenerateChartError(n)

        radius = self.config.radius
        angle_step = 2 * math.pi / n

        points = []
        for i, item in enumerate(scores):
            angle = i * angle_step
            points.append(ChartPoint(
                category=item.category,
                score=item.score,
                angle=angle,
                vertex=self._polar(radius * self.normalize(item.score), angle),
                axis_end=self._polar(radius, angle),
                label=self._label(angle),
            ))

        rings = tuple(radius * fraction for fraction in self.config.ring_fractions)
        ticks = tuple(
            ScaleTick(
                value=value,
                x=self.config.center_x + radius * value / self.config.full_mark,
                y=self.config.center_y + TICK_LABEL_OFFSET,
            )
            for value in self.config.tick_values
        )

        logger.debug(f"[CHART] Radar geometry for {n} categories, R={radius}")

        return ChartGeometry(
            center=Point(self.config.center_x, self.config.center_y),
            radius=radius,
            full_mark=self.config.full_mark,
            points=tuple(points),
            rings=rings,
            ticks=ticks,
        )

    def build_bars(self, scores: Sequence[CategoryScore]) -> tuple[BarSegment, ...]:
        """Запасной bar chart для любого числа категорий."""
        return tuple(
            BarSegment(
                category=item.category,
                score=item.score,
                fraction=self.normalize(item.score),
                no_data=item.no_data,
            )
            for item in scores
        )
