"""Delivery-note PDF handed to the customer after a buy-back."""

import io

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfgen import canvas

JAPANESE_FONT = "HeiseiKakuGo-W5"
STORE_NAME = "アメモバ"


def _register_font() -> str:
    if JAPANESE_FONT not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(UnicodeCIDFont(JAPANESE_FONT))
    return JAPANESE_FONT


def format_price(price: int) -> str:
    return f"¥{price:,}"


def render_delivery_note(customer: str, model: str, price: int) -> bytes:
    """Render a one-page A4 delivery note and return the PDF bytes."""
    font = _register_font()
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    c.setFont(font, 20)
    c.drawCentredString(width / 2, height - 42, f"{STORE_NAME} 買取納品書")

    c.setFont(font, 12)
    c.drawString(50, height - 82, f"お名前：{customer}")
    c.drawString(50, height - 102, f"機種：{model}")
    c.drawString(50, height - 122, f"査定額：{format_price(price)}")

    c.showPage()
    c.save()
    return buffer.getvalue()
