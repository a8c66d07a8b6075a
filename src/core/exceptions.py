"""
Исключения компилятора отчётов.

Фатальна только ошибка конфигурации: она возникает при создании
ChartConfig / PaginationConfig, до начала вычислений. Остальные
проблемы входных данных обрабатываются с деградацией и логированием.
"""


class ReportError(Exception):
    """Базовое исключение компилятора отчётов."""


class ReportConfigError(ReportError, ValueError):
    """Невалидная конфигурация (например, ёмкость страницы <= 0)."""


class DegenerateChartError(ReportError):
    """Для radar chart нужно минимум 3 категории."""

    def __init__(self, categories_count: int):
        self.categories_count = categories_count
        super().__init__(
            f"Radar chart needs at least 3 categories, got {categories_count}"
        )
