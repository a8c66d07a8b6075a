import pytest

from src.report.models import ContentItem, Section
from src.report.recommendations import (
    ABSENT_NARRATIVE,
    Narrative,
    build_sections,
    clean_text,
    is_list_item,
    parse_recommendations,
    resolve_narrative,
    strip_list_marker,
)


def bullet(text):
    return ContentItem(kind="bullet", text=text)


def paragraph(text):
    return ContentItem(kind="paragraph", text=text)


class TestParseRecommendations:

    def test_headers_bullets_and_paragraphs(self):
        sections = parse_recommendations("## A\n- x\n- y\n\n## B\ntext")

        assert sections == [
            Section(category="A", items=(bullet("x"), bullet("y"))),
            Section(category="B", items=(paragraph("text"),)),
        ]

    def test_no_headers_is_single_section(self):
        sections = parse_recommendations("Plain advice\n- first step")

        assert sections == [
            Section(category="Recommendations", items=(paragraph("Plain advice"), bullet("first step"))),
        ]

    def test_text_before_first_header(self):
        sections = parse_recommendations("Overview line\n\n## Data\n- Build a catalog")

        assert [s.category for s in sections] == ["Recommendations", "Data"]
        assert sections[0].items == (paragraph("Overview line"),)

    def test_paragraph_lines_are_joined(self):
        sections = parse_recommendations("## A\nline one\nline two\n\nline three")

        assert sections[0].items == (paragraph("line one line two"), paragraph("line three"))

    def test_list_line_flushes_paragraph(self):
        sections = parse_recommendations("## A\nBefore the list\n- item\nafter")

        assert sections[0].items == (
            paragraph("Before the list"),
            bullet("item"),
            paragraph("after"),
        )

    def test_ordered_markers_and_decimals(self):
        text = "## Plan\n1. First\n2) Second\n9.1 percent growth is expected\n3.Third"

        assert parse_recommendations(text)[0].items == (
            bullet("First"),
            bullet("Second"),
            paragraph("9.1 percent growth is expected"),
            bullet("Third"),
        )

    def test_emphasis_and_emoji_stripped(self):
        text = "## **Data** & Analytics 🚀\n**Bold** statement with _underscores_ ✅"
        section = parse_recommendations(text)[0]

        assert section.category == "Data & Analytics"
        assert section.items == (paragraph("Bold statement with underscores"),)

    def test_windows_line_endings(self):
        sections = parse_recommendations("## A\r\n- x\r\n\r\n## B\r\ntext\r\n")

        assert [s.category for s in sections] == ["A", "B"]
        assert sections[0].items == (bullet("x"),)

    def test_double_hash_inside_line_is_not_a_header(self):
        sections = parse_recommendations("## A\nUse ## sparingly")

        assert len(sections) == 1
        assert sections[0].items == (paragraph("Use ## sparingly"),)

    def test_indented_header(self):
        sections = parse_recommendations("## A\n- x\n\n  ## Data\n\t- build a catalog")

        assert sections == [
            Section(category="A", items=(bullet("x"),)),
            Section(category="Data", items=(bullet("build a catalog"),)),
        ]

    def test_header_without_body(self):
        assert parse_recommendations("## Empty") == [Section(category="Empty")]

    @pytest.mark.parametrize("text", ["", "   \n\n  "])
    def test_blank_text(self, text):
        assert parse_recommendations(text) == []


@pytest.mark.parametrize("line, expected", [
    ("- dash", True),
    ("* star", True),
    ("• dot", True),
    ("1. one", True),
    ("12) twelve", True),
    ("9.1 percent", False),
    ("3)4 ratio", False),
    ("**bold** text", False),
    ("-no space", False),
    ("plain", False),
])
def test_is_list_item(line, expected):
    assert is_list_item(line) is expected


def test_strip_list_marker():
    assert strip_list_marker("- dash") == "dash"
    assert strip_list_marker("• dot") == "dot"
    assert strip_list_marker("10) ten") == "ten"
    assert strip_list_marker("2.two") == "two"


def test_clean_text_collapses_gaps():
    assert clean_text("Use 🚀 the  *new* tools") == "Use the new tools"


class TestResolveNarrative:

    def test_string(self):
        assert resolve_narrative("## A\n- x") == Narrative(kind="text", text="## A\n- x")

    def test_content_object(self):
        assert resolve_narrative({"content": "text"}) == Narrative(kind="text", text="text")

    @pytest.mark.parametrize("value", [None, "", "  \n", {"content": None}, {}])
    def test_absent(self, value):
        assert resolve_narrative(value) == ABSENT_NARRATIVE

    def test_narrative_passes_through(self):
        narrative = Narrative(kind="text", text="x")
        assert resolve_narrative(narrative) is narrative

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            resolve_narrative(42)


class TestBuildSections:

    def test_from_text(self):
        sections = build_sections(resolve_narrative("## A\n- x"), "advanced")
        assert sections == [Section(category="A", items=(bullet("x"),))]

    def test_static_fallback_by_level(self):
        sections = build_sections(ABSENT_NARRATIVE, "advanced")

        assert len(sections) == 1
        assert sections[0].category == "Recommendations"
        assert len(sections[0].items) == 5
        assert sections[0].items[0] == bullet("Lead industry innovation through novel AI applications")

    def test_text_without_content_falls_back(self):
        sections = build_sections(resolve_narrative("***"), "beginning")

        assert sections[0].items[0] == bullet("Focus on AI awareness and education for key stakeholders")
