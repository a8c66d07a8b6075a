from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.report.chart import ChartConfig
    from src.report.pagination import PaginationConfig


class ReportSettings(BaseSettings):
    """Конфигурация компилятора отчётов."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REPORT_",
        extra="ignore",
    )

    # Radar chart (координаты в пунктах PDF, холст 550x300)
    chart_radius: float = Field(default=120.0, description="Radar chart radius")
    chart_center_x: float = Field(default=275.0, description="Radar chart center X")
    chart_center_y: float = Field(default=150.0, description="Radar chart center Y")
    chart_full_mark: float = Field(
        default=10.0,
        description="Score that maps to the outer ring"
    )
    chart_label_offset: float = Field(
        default=15.0,
        description="Distance between the outer ring and category labels"
    )

    # Пагинация
    recommendations_per_page: int = Field(
        default=2,
        description="Recommendation sections per page"
    )
    responses_per_page: int = Field(
        default=10,
        description="Response records per page"
    )
    trailing_pages: int = Field(
        default=0,
        description="Fixed pages appended after the responses"
    )

    # Отчёт
    report_title: str = Field(
        default="AI Readiness Assessment Results",
        description="Title printed on the cover page"
    )

    # App
    log_level: str = Field(default="INFO", description="Logging level")

    def chart_config(self) -> "ChartConfig":
        """Собрать конфиг для ChartGeometryBuilder."""
        from src.report.chart import ChartConfig

        return ChartConfig(
            radius=self.chart_radius,
            center_x=self.chart_center_x,
            center_y=self.chart_center_y,
            full_mark=self.chart_full_mark,
            label_offset=self.chart_label_offset,
        )

    def pagination_config(self) -> "PaginationConfig":
        """Собрать конфиг для ReportPaginator."""
        from src.report.pagination import PaginationConfig

        return PaginationConfig(
            responses_per_page=self.responses_per_page,
            recommendations_per_page=self.recommendations_per_page,
            trailing_pages=self.trailing_pages,
        )


@lru_cache
def get_settings() -> ReportSettings:
    """Singleton для настроек."""
    return ReportSettings()


