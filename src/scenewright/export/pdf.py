"""Paginated screenplay PDF export.

Rendering happens in two steps. ``LayoutEngine`` turns scenes into pages of
positioned text using a fixed monospaced column model; ``write_pdf`` draws a
finished layout onto a reportlab canvas.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from io import BytesIO
from typing import assert_never

from reportlab.pdfgen import canvas

from scenewright.config import ScenewrightSettings, get_logger
from scenewright.export.fdx import (
    DUAL_DIALOGUE_DIVIDER,
    DUAL_DIALOGUE_MARKER,
    scene_number_suffix,
)
from scenewright.export.fonts import (
    FALLBACK_FONTS,
    FONT_SIZE,
    FontLoader,
    FontSet,
    FontStyle,
)
from scenewright.models import Scene, Screenplay
from scenewright.parser import (
    Action,
    Character,
    Dialogue,
    DualDialogue,
    Paragraph,
    Parenthetical,
    SceneHeading,
    Transition,
    parse_fountain,
)
from scenewright.utils.screenplay import ScreenplayUtils

logger = get_logger(__name__)

# US letter, in points
PAGE_WIDTH = 612
PAGE_HEIGHT = 792
MARGIN_LEFT = 108
MARGIN_RIGHT = 72
MARGIN_TOP = 72
MARGIN_BOTTOM = 72
LEADING = 14

COLS_BODY = 65
COLS_DIALOGUE = 36
COLS_PARENTHETICAL = min(COLS_DIALOGUE, 24)
# A break point further back than this hard-breaks instead
WRAP_SLACK = 15

INDENT_SLUG = 0
INDENT_ACTION = 0
INDENT_CHARACTER = 22
INDENT_PARENTHETICAL = 20
INDENT_DIALOGUE = 16

PAGE_NUMBER_OFFSET = 6


def col_to_x(col: int) -> float:
    """X coordinate of a virtual body column."""
    col_width = (PAGE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT) / COLS_BODY
    return MARGIN_LEFT + col * col_width


def wrap_mono(text: str, cols: int = COLS_BODY) -> list[str]:
    """Wrap monospaced text to ``cols`` characters.

    Each source line breaks at the last space within the budget. When that
    space sits more than ``WRAP_SLACK`` characters short of the budget, the
    line is hard-broken at the budget instead. Leading whitespace of each
    continuation is dropped.
    """
    out: list[str] = []
    for raw in (text or "").split("\n"):
        line = raw
        while len(line) > cols:
            cut = line.rfind(" ", 0, cols + 1)
            if cut < cols - WRAP_SLACK or cut <= 0:
                cut = cols
            out.append(line[:cut])
            line = line[cut:].lstrip()
        out.append(line)
    return out


@dataclass(frozen=True)
class DrawOp:
    """A single positioned string."""

    text: str
    x: float
    y: float
    style: FontStyle = FontStyle.REGULAR


@dataclass
class PageLayout:
    """Draw operations for one page."""

    number: int
    ops: list[DrawOp] = field(default_factory=list)

    @property
    def texts(self) -> list[str]:
        return [op.text for op in self.ops]


@dataclass
class ScriptLayout:
    """All pages of a laid-out screenplay."""

    title: str
    pages: list[PageLayout] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def ops(self) -> list[DrawOp]:
        """Every draw operation, in drawing order."""
        return [op for page in self.pages for op in page.ops]


class LayoutEngine:
    """Lay out scenes on pages following screenplay column conventions."""

    def __init__(self, fonts: FontSet) -> None:
        """Initialize the engine.

        Args:
            fonts: Font set used to measure centered and right-aligned text
        """
        self.fonts = fonts
        self._layout = ScriptLayout(title="")
        self._page = PageLayout(number=0)
        self._y = 0.0

    def layout(
        self, screenplay: Screenplay, scenes: Sequence[Scene] | None = None
    ) -> ScriptLayout:
        """Lay out ``screenplay``.

        Args:
            screenplay: Screenplay providing the title
            scenes: Scenes to lay out, defaults to ``screenplay.scenes``

        Returns:
            Paginated layout
        """
        self._layout = ScriptLayout(title=screenplay.title or "")
        self._start_page()

        if screenplay.title:
            title = screenplay.title.upper()
            width = self.fonts.width(title, FontStyle.BOLD)
            self._page.ops.append(
                DrawOp(title, (PAGE_WIDTH - width) / 2, self._y, FontStyle.BOLD)
            )
            self._y -= LEADING * 2

        ordered = ScreenplayUtils.sorted_scenes(
            screenplay.scenes if scenes is None else scenes
        )
        for number, scene in enumerate(ordered, start=1):
            self._layout_scene(scene, number)
            self._y -= LEADING

        return self._layout

    def _start_page(self) -> None:
        self._page = PageLayout(number=len(self._layout.pages) + 1)
        self._layout.pages.append(self._page)
        self._y = PAGE_HEIGHT - MARGIN_TOP
        label = str(self._page.number)
        self._page.ops.append(
            DrawOp(
                label,
                PAGE_WIDTH - MARGIN_RIGHT - self.fonts.width(label),
                PAGE_HEIGHT - MARGIN_TOP + PAGE_NUMBER_OFFSET,
            )
        )

    def _draw_line(
        self, text: str, x: float, style: FontStyle = FontStyle.REGULAR
    ) -> None:
        if self._y <= MARGIN_BOTTOM + LEADING:
            self._start_page()
        self._page.ops.append(DrawOp(text, x, self._y, style))
        self._y -= LEADING

    def _draw_wrapped(self, text: str, cols: int, indent: int) -> None:
        for line in wrap_mono(text, cols):
            self._draw_line(line, col_to_x(indent))

    def _layout_scene(self, scene: Scene, number: int) -> None:
        paragraphs = parse_fountain(ScreenplayUtils.scene_source_text(scene))
        first_heading = next(
            (p for p in paragraphs if isinstance(p, SceneHeading)), None
        )
        slug = (
            first_heading.text
            if first_heading is not None
            else ScreenplayUtils.scene_slugline(scene)
        ).upper()
        self._draw_line(
            slug + scene_number_suffix(number), col_to_x(INDENT_SLUG), FontStyle.BOLD
        )
        self._y -= LEADING / 2

        for paragraph in paragraphs:
            if paragraph is first_heading:
                continue
            self._layout_paragraph(paragraph)

    def _layout_paragraph(self, paragraph: Paragraph) -> None:
        match paragraph:
            case SceneHeading(text=text):
                self._draw_line(text.upper(), col_to_x(INDENT_SLUG), FontStyle.BOLD)
            case Action(text=text):
                self._draw_wrapped(text, COLS_BODY, INDENT_ACTION)
            case Transition(text=text):
                line = text.upper()
                width = self.fonts.width(line, FontStyle.BOLD)
                self._draw_line(line, PAGE_WIDTH - MARGIN_RIGHT - width, FontStyle.BOLD)
            case Character(character=name):
                self._draw_line(name.upper(), col_to_x(INDENT_CHARACTER))
            case Parenthetical(text=text):
                self._draw_wrapped(text, COLS_PARENTHETICAL, INDENT_PARENTHETICAL)
            case Dialogue(dialogue=lines):
                self._draw_wrapped(lines, COLS_DIALOGUE, INDENT_DIALOGUE)
                self._y -= LEADING / 2
            case DualDialogue(left=left, right=right):
                # Sequential approximation of side-by-side speakers
                self._draw_line(
                    DUAL_DIALOGUE_MARKER, col_to_x(INDENT_ACTION), FontStyle.ITALIC
                )
                for side in left:
                    self._layout_paragraph(side)
                self._draw_line(
                    DUAL_DIALOGUE_DIVIDER, col_to_x(INDENT_ACTION), FontStyle.ITALIC
                )
                for side in right:
                    self._layout_paragraph(side)
            case _:
                assert_never(paragraph)


def layout_screenplay(
    screenplay: Screenplay,
    scenes: Sequence[Scene] | None = None,
    fonts: FontSet | None = None,
) -> ScriptLayout:
    """Lay out ``screenplay`` without producing PDF bytes."""
    return LayoutEngine(fonts or FALLBACK_FONTS).layout(screenplay, scenes)


def write_pdf(layout: ScriptLayout, fonts: FontSet) -> bytes:
    """Draw a finished layout onto a reportlab canvas.

    Args:
        layout: Pages produced by ``LayoutEngine``
        fonts: Registered fonts to draw with

    Returns:
        PDF document bytes
    """
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
    if layout.title:
        pdf.setTitle(layout.title)
    for page in layout.pages:
        for op in page.ops:
            pdf.setFont(fonts.name(op.style), FONT_SIZE)
            pdf.drawString(op.x, op.y, op.text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


async def render_pdf(
    screenplay: Screenplay,
    scenes: Sequence[Scene] | None = None,
    settings: ScenewrightSettings | None = None,
    fonts: FontSet | None = None,
) -> bytes:
    """Render ``screenplay`` to PDF bytes.

    Args:
        screenplay: Screenplay to export
        scenes: Scenes to export, defaults to ``screenplay.scenes``
        settings: Settings for font loading
        fonts: Pre-loaded fonts; skips font loading when given

    Returns:
        PDF document bytes
    """
    if fonts is None:
        fonts = await FontLoader(settings).load()
    layout = LayoutEngine(fonts).layout(screenplay, scenes)
    data = await asyncio.to_thread(write_pdf, layout, fonts)
    logger.info(
        "Rendered PDF",
        screenplay_id=screenplay.id,
        pages=layout.page_count,
        embedded_fonts=fonts.embedded,
        size=len(data),
    )
    return data
