"""
Contract PDF rendering with ReportLab.

Layout (A4 portrait, millimetre coordinates from the top-left):
  - header: logo, company block, uppercase document title on the right
  - contract number and date, the two parties
  - wrapped content and terms, value and dates
  - signature boxes
  - footer on every page: "<company> - <website>" and "Page i/n"

The logo is read once at import time from PUBLIC_DIR/LOGO_FILENAME,
falling back to ../PUBLIC_DIR/LOGO_FILENAME. A missing logo is not an
error; the header is drawn without it.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from io import BytesIO
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from ecodeli_admin.config import settings

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN_X = 20 * mm
MARGIN_Y = 10 * mm
FOOTER_Y = 10 * mm
BOTTOM_LIMIT = 25 * mm
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN_X

TEXT_COLOR = (40 / 255, 40 / 255, 40 / 255)
MUTED_COLOR = (100 / 255, 100 / 255, 100 / 255)


def _load_logo() -> bytes | None:
    candidates = [
        Path(settings.PUBLIC_DIR) / settings.LOGO_FILENAME,
        Path("..") / settings.PUBLIC_DIR / settings.LOGO_FILENAME,
    ]
    for path in candidates:
        if path.is_file():
            try:
                return path.read_bytes()
            except OSError:
                logger.warning("Could not read logo at %s", path)
    logger.info("No logo found, PDFs will be rendered without one")
    return None


LOGO_BYTES = _load_logo()


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_currency(amount: Decimal | float | None, currency: str = "EUR") -> str:
    if amount is None:
        return "-"
    return f"{Decimal(str(amount)):,.2f} {currency}"


def format_date(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%d %B %Y")


def party_display_name(user) -> str:
    """Company name for professionals, else the person's name."""
    if user.company_name:
        return user.company_name
    full = f"{user.first_name or ''} {user.last_name or ''}".strip()
    return full or user.name or user.email


# ---------------------------------------------------------------------------
# Canvas with "Page i/n" footers
# ---------------------------------------------------------------------------


class _NumberedCanvas(canvas.Canvas):
    """Defers page output until save() so the footer can print the page count."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_pages = []

    def showPage(self):
        self._saved_pages.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_pages)
        for state in self._saved_pages:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int) -> None:
        self.setFont("Helvetica", 8)
        self.setFillColorRGB(*MUTED_COLOR)
        self.drawString(MARGIN_X, FOOTER_Y, f"{settings.COMPANY_NAME} - {settings.COMPANY_WEBSITE}")
        self.drawRightString(
            PAGE_WIDTH - MARGIN_X, FOOTER_Y, f"Page {self._pageNumber}/{total}",
        )


class _Writer:
    """Top-down cursor over a canvas that breaks pages when it runs out of room."""

    def __init__(self, c: canvas.Canvas, title: str):
        self.c = c
        self.title = title
        self.y = 0.0
        self.new_page(first=True)

    def new_page(self, first: bool = False) -> None:
        if not first:
            self.c.showPage()
        self.y = _draw_header(self.c, self.title)

    def ensure(self, height: float) -> None:
        if self.y - height < BOTTOM_LIMIT:
            self.new_page()

    def line(self, text: str, font: str = "Helvetica", size: int = 10,
             indent: float = 0, gap: float = 5 * mm) -> None:
        self.ensure(gap)
        self.c.setFont(font, size)
        self.c.setFillColorRGB(*TEXT_COLOR)
        self.c.drawString(MARGIN_X + indent, self.y, text)
        self.y -= gap

    def paragraph(self, text: str, size: int = 10) -> None:
        width = CONTENT_WIDTH
        for raw in (text or "").splitlines() or [""]:
            for chunk in simpleSplit(raw, "Helvetica", size, width) or [""]:
                self.line(chunk, size=size, gap=size * 0.45 * mm + 1 * mm)

    def skip(self, height: float) -> None:
        self.y -= height


def _draw_header(c: canvas.Canvas, title: str) -> float:
    """Draw logo, company block and title; return the y where content starts."""
    top = PAGE_HEIGHT - MARGIN_Y

    if LOGO_BYTES:
        try:
            c.drawImage(
                ImageReader(BytesIO(LOGO_BYTES)), MARGIN_X, top - 15 * mm,
                width=35 * mm, height=15 * mm, preserveAspectRatio=True, mask="auto",
            )
        except OSError:
            logger.warning("Logo image could not be decoded")

    base_y = top - 20 * mm
    c.setFillColorRGB(*TEXT_COLOR)
    c.setFont("Helvetica-Bold", 20)
    c.drawString(MARGIN_X, base_y, settings.COMPANY_NAME)

    c.setFont("Helvetica", 8)
    c.setFillColorRGB(*MUTED_COLOR)
    details = [
        settings.COMPANY_ADDRESS, settings.COMPANY_CITY,
        settings.COMPANY_PHONE, settings.COMPANY_EMAIL,
    ]
    for i, text in enumerate(details):
        c.drawString(MARGIN_X, base_y - (6 + 3.5 * i) * mm, text)

    c.setFillColorRGB(*TEXT_COLOR)
    c.setFont("Helvetica-Bold", 22)
    c.drawRightString(PAGE_WIDTH - MARGIN_X, top - 12 * mm, title.upper())

    return base_y - 25 * mm


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


def render_contract_pdf(contract, party, generated_at: datetime | None = None) -> bytes:
    """
    Render *contract* between the company and *party* (a User) to PDF bytes.
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    buf = BytesIO()
    c = _NumberedCanvas(buf, pagesize=A4)
    c.setTitle(contract.title)
    c.setAuthor(settings.COMPANY_NAME)

    w = _Writer(c, "Service contract")

    w.line(f"Contract No.: {contract.number}", size=12, gap=6 * mm)
    w.line(f"Date: {format_date(generated_at)}", size=12, gap=12 * mm)

    w.line("BETWEEN THE FOLLOWING PARTIES:", font="Helvetica-Bold", size=14, gap=10 * mm)

    w.line("The provider:", font="Helvetica-Bold", size=12, gap=7 * mm)
    for text in (settings.COMPANY_NAME, settings.COMPANY_ADDRESS, settings.COMPANY_CITY,
                 settings.COMPANY_EMAIL):
        w.line(text, indent=10 * mm)
    w.skip(5 * mm)

    role = "merchant" if contract.merchant_id else "carrier"
    w.line(f"The {role}:", font="Helvetica-Bold", size=12, gap=7 * mm)
    w.line(party_display_name(party), indent=10 * mm)
    if party.company_name and (party.company_first_name or party.company_last_name):
        contact = f"{party.company_first_name or ''} {party.company_last_name or ''}".strip()
        w.line(f"Represented by {contact}", indent=10 * mm)
    if party.address:
        w.line(party.address, indent=10 * mm)
    w.line(party.email, indent=10 * mm)
    w.skip(8 * mm)

    w.line(contract.title, font="Helvetica-Bold", size=13, gap=8 * mm)

    w.line("Purpose of the contract", font="Helvetica-Bold", size=12, gap=7 * mm)
    w.paragraph(contract.content)
    w.skip(5 * mm)

    w.line("Terms and conditions", font="Helvetica-Bold", size=12, gap=7 * mm)
    w.paragraph(contract.terms)
    w.skip(5 * mm)

    w.line("Financial terms", font="Helvetica-Bold", size=12, gap=7 * mm)
    w.line(f"Contract value: {format_currency(contract.value, contract.currency)}")
    w.line(f"Start date: {format_date(contract.start_date)}")
    w.line(f"End date: {format_date(contract.end_date)}")
    w.skip(10 * mm)

    w.ensure(40 * mm)
    c.setFont("Helvetica", 10)
    c.setFillColorRGB(*TEXT_COLOR)
    c.drawString(MARGIN_X, w.y, f"For {settings.COMPANY_NAME}:")
    c.drawString(MARGIN_X + 90 * mm, w.y, f"For the {role}:")
    c.rect(MARGIN_X, w.y - 27 * mm, 60 * mm, 20 * mm)
    c.rect(MARGIN_X + 90 * mm, w.y - 27 * mm, 60 * mm, 20 * mm)

    c.showPage()
    c.save()
    return buf.getvalue()
