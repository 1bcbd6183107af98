"""Font loading for PDF export.

Courier Prime is fetched over HTTP and registered with reportlab. Any failure
degrades to the built-in Courier for every style; a PDF is always produced.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from io import BytesIO

import httpx
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from scenewright.config import ScenewrightSettings, get_logger

logger = get_logger(__name__)

FONT_SIZE = 12


class FontStyle(str, Enum):
    """Typeface styles used by the screenplay layout."""

    REGULAR = "regular"
    BOLD = "bold"
    ITALIC = "italic"


@dataclass(frozen=True)
class FontSet:
    """Registered reportlab font names for each style."""

    regular: str
    bold: str
    italic: str
    embedded: bool = False

    def name(self, style: FontStyle) -> str:
        """Font name registered for ``style``."""
        return {
            FontStyle.REGULAR: self.regular,
            FontStyle.BOLD: self.bold,
            FontStyle.ITALIC: self.italic,
        }[style]

    def width(self, text: str, style: FontStyle = FontStyle.REGULAR) -> float:
        """Width of ``text`` in points at the screenplay font size."""
        return pdfmetrics.stringWidth(text, self.name(style), FONT_SIZE)


# Standard PDF font, always available without embedding
FALLBACK_FONTS = FontSet(regular="Courier", bold="Courier", italic="Courier")

COURIER_PRIME_FILES = {
    FontStyle.REGULAR: ("CourierPrime", "CourierPrime-Regular.ttf"),
    FontStyle.BOLD: ("CourierPrime-Bold", "CourierPrime-Bold.ttf"),
    FontStyle.ITALIC: ("CourierPrime-Italic", "CourierPrime-Italic.ttf"),
}


class FontLoader:
    """Fetch and register the embedded screenplay font family."""

    def __init__(
        self,
        settings: ScenewrightSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            settings: Settings providing the font URL and timeout
            client: Optional HTTP client (the caller keeps ownership)
        """
        from scenewright.config import get_settings

        self.settings = settings or get_settings()
        self._client = client

    async def load(self) -> FontSet:
        """Load Courier Prime, or the Courier fallback on any failure.

        Returns:
            Font set ready for layout and drawing
        """
        if not self.settings.embed_fonts:
            logger.debug("Font embedding disabled, using built-in Courier")
            return FALLBACK_FONTS

        try:
            if self._client is not None:
                return await self._load_with(self._client)
            async with httpx.AsyncClient(
                timeout=self.settings.font_timeout, follow_redirects=True
            ) as client:
                return await self._load_with(client)
        except Exception as e:
            logger.warning(
                "Embedded fonts unavailable, falling back to Courier",
                font_base_url=self.settings.font_base_url,
                error=str(e),
            )
            return FALLBACK_FONTS

    async def _load_with(self, client: httpx.AsyncClient) -> FontSet:
        regular, bold = await asyncio.gather(
            self._fetch(client, FontStyle.REGULAR),
            self._fetch(client, FontStyle.BOLD),
        )
        try:
            italic: bytes | None = await self._fetch(client, FontStyle.ITALIC)
        except httpx.HTTPError as e:
            logger.info("Italic font unavailable, using regular", error=str(e))
            italic = None

        names = {
            style: self._register(style, data)
            for style, data in (
                (FontStyle.REGULAR, regular),
                (FontStyle.BOLD, bold),
                (FontStyle.ITALIC, italic),
            )
            if data is not None
        }
        fonts = FontSet(
            regular=names[FontStyle.REGULAR],
            bold=names[FontStyle.BOLD],
            italic=names.get(FontStyle.ITALIC, names[FontStyle.REGULAR]),
            embedded=True,
        )
        logger.debug("Embedded fonts registered", fonts=fonts)
        return fonts

    async def _fetch(self, client: httpx.AsyncClient, style: FontStyle) -> bytes:
        _, filename = COURIER_PRIME_FILES[style]
        url = f"{self.settings.font_base_url}/{filename}"
        response = await client.get(url)
        response.raise_for_status()
        return response.content

    @staticmethod
    def _register(style: FontStyle, data: bytes) -> str:
        name, _ = COURIER_PRIME_FILES[style]
        pdfmetrics.registerFont(TTFont(name, BytesIO(data)))
        return name
