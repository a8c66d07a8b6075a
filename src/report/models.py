"""
Модели отчёта по оценке.

Все модели неизменяемые (frozen dataclasses, последовательности — кортежи):
Document собирается один раз на запрос и сразу уходит во внешний рендерер.
"""
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Iterable, Literal, Mapping, Optional, Union

# Допустимые ответы шкалы Лайкерта
ANSWER_VALUES = (-2, -1, 0, 1, 2)

# Максимальный балл категории
MAX_SCORE = 10.0

UNCATEGORIZED = "Uncategorized"

PageType = Literal["cover", "chart", "recommendations", "responses"]
ItemKind = Literal["paragraph", "bullet"]

PAGE_HEADINGS = {
    "cover": "Assessment Report",
    "chart": "Assessment Results",
    "recommendations": "Recommendations",
    "responses": "Your Responses",
}


# ========================================
# ВХОДНЫЕ ДАННЫЕ
# ========================================

@dataclass(frozen=True)
class AnswerRecord:
    """Ответ респондента на один вопрос (None — вопрос пропущен)."""

    question_id: str
    raw_value: Optional[int] = None

    def __post_init__(self):
        # id вопросов сравниваются как строки: в хранилище они бывают и числами
        object.__setattr__(self, "question_id", str(self.question_id))

        value = self.raw_value
        if value is None:
            return
        if isinstance(value, bool) or value not in ANSWER_VALUES:
            raise ValueError(
                f"Answer for question {self.question_id} must be one of "
                f"{ANSWER_VALUES} or None, got {value!r}"
            )
        object.__setattr__(self, "raw_value", int(value))

    @property
    def answered(self) -> bool:
        return self.raw_value is not None

    @classmethod
    def from_dict(cls, data: Mapping) -> "AnswerRecord":
        """Из формата хранилища: {"q": 3, "a": -1}."""
        question_id = data["q"] if "q" in data else data["question_id"]
        raw_value = data["a"] if "a" in data else data.get("raw_value")
        return cls(question_id=question_id, raw_value=raw_value)


@dataclass(frozen=True)
class QuestionMeta:
    """Метаданные вопроса: категория и формулировка."""

    question_id: str
    category: str
    text: str = ""

    def __post_init__(self):
        object.__setattr__(self, "question_id", str(self.question_id))

    @classmethod
    def from_dict(cls, data: Mapping) -> "QuestionMeta":
        """Из формата вопросов опроса: {"id": 3, "question": "...", "category": "..."}."""
        question_id = data["id"] if "id" in data else data["question_id"]
        text = data.get("question", data.get("text", "")) or ""
        return cls(
            question_id=question_id,
            category=data.get("category") or UNCATEGORIZED,
            text=text,
        )


QuestionMetaInput = Union[Mapping, Iterable[QuestionMeta]]


def index_questions(question_meta: Optional[QuestionMetaInput]) -> dict[str, QuestionMeta]:
    """
    Привести метаданные вопросов к словарю questionId -> QuestionMeta.

    Принимает:
    - словарь id -> QuestionMeta
    - словарь id -> {"category": ..., "text": ...}
    - словарь id -> категория (строка)
    - список QuestionMeta
    """
    if not question_meta:
        return {}

    index: dict[str, QuestionMeta] = {}

    if isinstance(question_meta, Mapping):
        for question_id, meta in question_meta.items():
            if isinstance(meta, str):
                meta = QuestionMeta(question_id=question_id, category=meta or UNCATEGORIZED)
            elif not isinstance(meta, QuestionMeta):
                meta = QuestionMeta(
                    question_id=question_id,
                    category=meta.get("category") or UNCATEGORIZED,
                    text=meta.get("text", meta.get("question", "")) or "",
                )
            index[str(question_id)] = meta
        return index

    for meta in question_meta:
        index[meta.question_id] = meta
    return index


@dataclass(frozen=True)
class Assessment:
    """Завершённая оценка: ответы + данные для обложки."""

    answers: tuple[AnswerRecord, ...] = ()
    survey_title: Optional[str] = None
    completed_on: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "answers", tuple(self.answers))

    @classmethod
    def from_dict(cls, data: Mapping) -> "Assessment":
        """Из формата хранилища (answers + survey.title + completedAt)."""
        survey = data.get("survey") or {}
        completed = data.get("completed_on") or data.get("completedAt")
        if isinstance(completed, str):
            completed = date.fromisoformat(completed[:10])
        return cls(
            answers=tuple(AnswerRecord.from_dict(a) for a in data.get("answers", [])),
            survey_title=data.get("survey_title") or survey.get("title"),
            completed_on=completed,
        )


# ========================================
# БАЛЛЫ И ГЕОМЕТРИЯ
# ========================================

@dataclass(frozen=True)
class CategoryScore:
    """Средний нормализованный балл категории (0-10)."""

    category: str
    score: float
    no_data: bool = False

    def __post_init__(self):
        if not 0 <= self.score <= MAX_SCORE:
            raise ValueError(f"Score for {self.category!r} out of range: {self.score}")

    @property
    def display_score(self) -> int:
        """Балл для отображения на шкале 0-100."""
        return int(round(self.score * 10))


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class LabelAnchor:
    """Точка привязки подписи категории."""

    x: float
    y: float
    align: Literal["left", "right", "center"]
    valign: Literal["top", "bottom"]


@dataclass(frozen=True)
class ChartPoint:
    """Вершина полигона, конец оси и подпись для одной категории."""

    category: str
    score: float
    angle: float
    vertex: Point
    axis_end: Point
    label: LabelAnchor


@dataclass(frozen=True)
class ScaleTick:
    value: float
    x: float
    y: float


@dataclass(frozen=True)
class ChartGeometry:
    """Геометрия radar chart в координатах рендерера (ось Y вниз)."""

    center: Point
    radius: float
    full_mark: float
    points: tuple[ChartPoint, ...]
    rings: tuple[float, ...] = ()
    ticks: tuple[ScaleTick, ...] = ()

    @property
    def polygon(self) -> tuple[Point, ...]:
        return tuple(p.vertex for p in self.points)

    @property
    def axis_lines(self) -> tuple[tuple[Point, Point], ...]:
        return tuple((self.center, p.axis_end) for p in self.points)

    @property
    def label_anchors(self) -> tuple[LabelAnchor, ...]:
        return tuple(p.label for p in self.points)


@dataclass(frozen=True)
class BarSegment:
    """Полоса запасного bar chart (когда категорий меньше трёх)."""

    category: str
    score: float
    fraction: float
    no_data: bool = False


# ========================================
# КОНТЕНТ СТРАНИЦ
# ========================================

@dataclass(frozen=True)
class ContentItem:
    kind: ItemKind
    text: str


@dataclass(frozen=True)
class Section:
    """Раздел рекомендаций: заголовок-категория и элементы в исходном порядке."""

    category: str
    items: tuple[ContentItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class ResponseEntry:
    """Печатная форма одного ответа."""

    number: int
    question_id: str
    question_text: str
    raw_value: Optional[int]
    answer_label: str


@dataclass(frozen=True)
class CoverContent:
    title: str
    survey_title: Optional[str]
    overall_score: float
    display_score: int
    readiness_level: str
    completed_on: Optional[date] = None


@dataclass(frozen=True)
class ChartContent:
    """Страница с обзором баллов: radar chart или bar chart."""

    scores: tuple[CategoryScore, ...]
    overall_score: float
    readiness_level: str
    radar: Optional[ChartGeometry] = None
    bars: tuple[BarSegment, ...] = ()
    captions: tuple[str, ...] = ()


PageContent = Union[
    CoverContent,
    ChartContent,
    tuple[Section, ...],
    tuple[ResponseEntry, ...],
]


@dataclass(frozen=True)
class Page:
    type: PageType
    content: PageContent
    page_number: int
    total_pages: int
    continued: bool = False

    @property
    def heading(self) -> str:
        """Заголовок в шапке страницы (у продолжений — с пометкой)."""
        heading = PAGE_HEADINGS[self.type]
        if self.continued:
            return f"{heading} (continued)"
        return heading

    @property
    def footer(self) -> str:
        return f"Page {self.page_number} of {self.total_pages}"

    def to_dict(self) -> dict:
        """Преобразовать в словарь для рендерера."""
        return {
            "type": self.type,
            "heading": self.heading,
            "page_number": self.page_number,
            "total_pages": self.total_pages,
            "continued": self.continued,
            "content": _content_to_dict(self.content),
        }


@dataclass(frozen=True)
class Document:
    """Готовая раскладка отчёта с глобальной нумерацией страниц."""

    pages: tuple[Page, ...] = field(default_factory=tuple)
    total_pages: int = 0

    def __post_init__(self):
        object.__setattr__(self, "pages", tuple(self.pages))

    def pages_of_type(self, page_type: PageType) -> tuple[Page, ...]:
        return tuple(p for p in self.pages if p.type == page_type)

    def to_dict(self) -> dict:
        return {
            "total_pages": self.total_pages,
            "pages": [page.to_dict() for page in self.pages],
        }


def _content_to_dict(content: PageContent):
    if isinstance(content, tuple):
        return [_jsonable(asdict(unit)) for unit in content]
    data = _jsonable(asdict(content))
    if isinstance(content, ChartContent):
        for score, item in zip(content.scores, data["scores"]):
            item["display_score"] = score.display_score
    return data


def _jsonable(value):
    """Даты -> ISO-строки, кортежи -> списки."""
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, date):
        return value.isoformat()
    return value
