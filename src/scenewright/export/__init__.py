"""Export formats: Fountain, Final Draft XML, PDF and markdown summaries."""

from scenewright.export.fdx import FdxRenderer, build_fdx
from scenewright.export.fonts import FALLBACK_FONTS, FontLoader, FontSet, FontStyle
from scenewright.export.fountain import compile_fountain
from scenewright.export.markdown import (
    build_beat_sheet,
    build_character_bios,
    export_filename,
)
from scenewright.export.pdf import (
    LayoutEngine,
    ScriptLayout,
    layout_screenplay,
    render_pdf,
    wrap_mono,
    write_pdf,
)

__all__ = [
    "FALLBACK_FONTS",
    "FdxRenderer",
    "FontLoader",
    "FontSet",
    "FontStyle",
    "LayoutEngine",
    "ScriptLayout",
    "build_beat_sheet",
    "build_character_bios",
    "build_fdx",
    "compile_fountain",
    "export_filename",
    "layout_screenplay",
    "render_pdf",
    "wrap_mono",
    "write_pdf",
]
