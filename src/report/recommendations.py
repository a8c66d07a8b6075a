"""
Разбор текста рекомендаций в структурированные разделы.

Формат входа (так пишет генератор рекомендаций):
- "## Категория" — заголовок раздела
- абзацы, разделённые пустой строкой
- списки: "-", "*", "•", "1." или "1)" (но не "9.1" — это число)

Выход — список Section в исходном порядке; каждый Section — атомарная
единица пагинации.
"""
import logging
import re
from dataclasses import dataclass
from typing import Literal, Mapping, Optional, Union

from src.report.models import ContentItem, Section

logger = logging.getLogger(__name__)

DEFAULT_SECTION_TITLE = "Recommendations"

# Заголовок раздела только в начале строки, допустим отступ
HEADER_PATTERN = re.compile(r"^[ \t]*##[ \t]+", re.MULTILINE)

UNORDERED_MARKER = re.compile(r"^[*\-•]\s+")
# "1." / "1)" без цифры следом, иначе это десятичное число
ORDERED_MARKER = re.compile(r"^\d+[.)](?!\d)\s*")

EMPHASIS_PATTERN = re.compile(r"[*_]")
EMOJI_PATTERN = re.compile(
    "["
    "\U0001F000-\U0001FAFF"  # emoticons, pictographs, transport, flags
    "\U00002600-\U000027BF"  # misc symbols, dingbats
    "\U0000E000-\U0000F8FF"  # private use
    "\U0000FE0F"  # variation selector
    "\U0000200D"  # zero width joiner
    "]+",
    flags=re.UNICODE,
)
WHITESPACE_RUN = re.compile(r"\s{2,}")


# Рекомендации по уровню готовности, если текста рекомендаций нет
STATIC_RECOMMENDATIONS = {
    "beginning": [
        "Focus on AI awareness and education for key stakeholders",
        "Start building basic data infrastructure and governance",
        "Identify small pilot projects with clear business value",
        "Develop an initial AI strategy aligned with business goals",
        "Consider partnerships with AI solution providers to accelerate adoption",
    ],
    "developing": [
        "Expand data infrastructure and integration capabilities",
        "Develop more robust AI governance frameworks and policies",
        "Invest in building internal AI/ML skills and capabilities",
        "Scale successful pilot projects to production environments",
        "Establish clear metrics to measure AI initiative success",
    ],
    "intermediate": [
        "Formalize AI center of excellence or specialized teams",
        "Implement advanced data architecture and MLOps practices",
        "Develop comprehensive AI risk management and ethics frameworks",
        "Foster deeper integration of AI across multiple business units",
        "Create systems for continuous AI model monitoring and improvement",
    ],
    "advanced": [
        "Lead industry innovation through novel AI applications",
        "Establish mature AI governance and ethical frameworks",
        "Develop advanced AI talent acquisition and retention strategies",
        "Create scalable MLOps infrastructure for enterprise-wide deployment",
        "Integrate AI into core business strategy and decision processes",
    ],
}


# ========================================
# ТЕКСТ РЕКОМЕНДАЦИЙ НА ГРАНИЦЕ СИСТЕМЫ
# ========================================

@dataclass(frozen=True)
class Narrative:
    """Текст рекомендаций: либо есть ("text"), либо нет ("absent")."""

    kind: Literal["text", "absent"]
    text: str = ""

    @property
    def present(self) -> bool:
        return self.kind == "text"


ABSENT_NARRATIVE = Narrative(kind="absent")

NarrativeInput = Union[str, Mapping, Narrative, None]


def resolve_narrative(value: NarrativeInput) -> Narrative:
    """
    Привести сохранённое значение рекомендаций к Narrative.

    В хранилище встречаются строка и объект {"content": "..."}.
    Пустой текст считается отсутствующим.

    Raises:
        TypeError: Если значение другого типа
    """
    if value is None:
        return ABSENT_NARRATIVE
    if isinstance(value, Narrative):
        return value
    if isinstance(value, Mapping):
        return resolve_narrative(value.get("content"))
    if isinstance(value, str):
        if not value.strip():
            return ABSENT_NARRATIVE
        return Narrative(kind="text", text=value)
    raise TypeError(f"Unsupported narrative value: {type(value).__name__}")


# ========================================
# РАЗБОР ТЕКСТА
# ========================================

def clean_text(text: str) -> str:
    """Убрать markdown-выделение и эмодзи."""
    text = EMPHASIS_PATTERN.sub("", text)
    text = EMOJI_PATTERN.sub("", text)
    return WHITESPACE_RUN.sub(" ", text).strip()


def is_list_item(line: str) -> bool:
    """Строка (уже без отступов) — элемент списка?"""
    return bool(UNORDERED_MARKER.match(line) or ORDERED_MARKER.match(line))


def strip_list_marker(line: str) -> str:
    if UNORDERED_MARKER.match(line):
        return UNORDERED_MARKER.sub("", line, count=1)
    return ORDERED_MARKER.sub("", line, count=1)


def _parse_items(lines: list[str]) -> list[ContentItem]:
    """Последовательный проход с буфером абзаца."""
    items: list[ContentItem] = []
    buffer: list[str] = []

    def flush_paragraph():
        if buffer:
            text = clean_text(" ".join(buffer))
            if text:
                items.append(ContentItem(kind="paragraph", text=text))
            buffer.clear()

    for raw in lines:
        line = raw.strip()

        if not line:
            flush_paragraph()
            continue

        if is_list_item(line):
            flush_paragraph()
            text = clean_text(strip_list_marker(line))
            if text:
                items.append(ContentItem(kind="bullet", text=text))
        else:
            buffer.append(line)

    flush_paragraph()
    return items


def parse_recommendations(text: str) -> list[Section]:
    """
    Разобрать текст рекомендаций на разделы.

    Args:
        text: Текст с заголовками "## ..."

    Returns:
        Разделы в исходном порядке. Без заголовков весь текст — один раздел
        "Recommendations"; текст до первого заголовка — тоже такой раздел.
    """
    if not text or not text.strip():
        return []

    preamble, *blobs = HEADER_PATTERN.split(text)
    sections: list[Section] = []

    if not blobs:
        logger.info("[RECOMMENDATIONS] No '##' headers found, using a single section")

    preamble_items = _parse_items(preamble.splitlines())
    if preamble_items:
        sections.append(Section(category=DEFAULT_SECTION_TITLE, items=tuple(preamble_items)))

    for blob in blobs:
        lines = blob.splitlines()
        title = clean_text(lines[0]) if lines else ""
        sections.append(Section(
            category=title or DEFAULT_SECTION_TITLE,
            items=tuple(_parse_items(lines[1:])),
        ))

    logger.debug(f"[RECOMMENDATIONS] Parsed {len(sections)} sections")
    return sections


def static_recommendations(level: str) -> list[Section]:
    """Раздел со стандартными рекомендациями для уровня готовности."""
    recommendations = STATIC_RECOMMENDATIONS.get(level, STATIC_RECOMMENDATIONS["beginning"])
    return [Section(
        category=DEFAULT_SECTION_TITLE,
        items=tuple(ContentItem(kind="bullet", text=text) for text in recommendations),
    )]


def build_sections(narrative: Narrative, level: Optional[str] = None) -> list[Section]:
    """Разделы рекомендаций: из текста, а если его нет — стандартные."""
    if narrative.present:
        sections = parse_recommendations(narrative.text)
        if sections:
            return sections
    logger.info(f"[RECOMMENDATIONS] Narrative absent, using static set for '{level}'")
    return static_recommendations(level or "beginning")
