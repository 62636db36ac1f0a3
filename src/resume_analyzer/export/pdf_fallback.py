"""Fallback PDF renderer using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import html
import logging
import re
from io import BytesIO
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import XPos, YPos

logger = logging.getLogger(__name__)

# Unicode-capable font search paths (macOS, Linux, Windows)
_UNICODE_FONT_PATHS = [
    # macOS
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    # Linux (apt install fonts-dejavu-core)
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    # Linux (apt install fonts-noto-core)
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    # Windows
    "C:/Windows/Fonts/arial.ttf",
    "C:/Windows/Fonts/segoeui.ttf",
]


def _find_unicode_font() -> str | None:
    """Search for a Unicode-capable TTF font on the system."""
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists() and path.endswith(".ttf"):
            return path
    return None


def html_to_pdf_fpdf2(html_content: str) -> bytes:
    """Fallback PDF generation using fpdf2 when WeasyPrint is unavailable."""
    body_match = re.search(r"<body>(.*?)</body>", html_content, re.DOTALL)
    body = body_match.group(1) if body_match else html_content

    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.add_page()

    font_name = "Helvetica"
    unicode_font = _find_unicode_font()
    if unicode_font:
        try:
            pdf.add_font("ReportFont", "", unicode_font)
            font_name = "ReportFont"
        except Exception:
            logger.debug("Failed to load font %s", unicode_font)

    pdf.set_font(font_name, size=10)

    line_kwargs = {"new_x": XPos.LMARGIN, "new_y": YPos.NEXT}
    lines = _parse_html_to_lines(body)
    for line_type, text in lines:
        safe_text = _safe_text(text, pdf)
        try:
            if line_type == "h1":
                pdf.set_font_size(16)
                pdf.multi_cell(0, 10, safe_text, **line_kwargs)
                pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
                pdf.ln(3)
                pdf.set_font_size(10)
            elif line_type == "h2":
                pdf.ln(3)
                pdf.set_font_size(13)
                pdf.multi_cell(0, 8, safe_text, **line_kwargs)
                pdf.ln(2)
                pdf.set_font_size(10)
            elif line_type == "h3":
                pdf.ln(2)
                pdf.set_font_size(11)
                pdf.multi_cell(0, 7, safe_text, **line_kwargs)
                pdf.set_font_size(10)
            elif line_type == "bullet":
                pdf.multi_cell(0, 6, f"  - {safe_text}", **line_kwargs)
            elif line_type == "text" and safe_text.strip():
                pdf.multi_cell(0, 6, safe_text, **line_kwargs)
            elif line_type == "break":
                pdf.ln(3)
        except Exception:
            logger.debug("Failed to render line: %s %s", line_type, safe_text[:30])

    buf = BytesIO()
    pdf.output(buf)
    return buf.getvalue()


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    # Built-in fonts (Helvetica etc.) only cover latin-1
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")


def _parse_html_to_lines(body_html: str) -> list[tuple[str, str]]:
    """Parse simple HTML into (type, text) pairs."""
    lines: list[tuple[str, str]] = []
    parts = re.split(r"(</?(?:h[1-3]|p|li|ul|ol|br)\b[^>]*>)", body_html)
    current_tag = "text"
    for part in parts:
        part = part.strip()
        if not part:
            continue
        tag_match = re.match(r"<(/?)(h[1-3]|p|li|ul|ol|br)\b[^>]*>$", part)
        if tag_match:
            closing = tag_match.group(1) == "/"
            tag = tag_match.group(2)
            if closing:
                if tag in ("ul", "ol"):
                    lines.append(("break", ""))
                current_tag = "text"
            else:
                if tag in ("h1", "h2", "h3"):
                    current_tag = tag
                elif tag == "li":
                    current_tag = "bullet"
                elif tag == "br":
                    lines.append(("break", ""))
                elif tag == "p":
                    current_tag = "text"
        else:
            text = _strip_html(part)
            if text:
                lines.append((current_tag, text))
    return lines


def _strip_html(text: str) -> str:
    """Remove HTML tags and decode entities."""
    text = re.sub(r"<[^>]+>", "", text)
    return html.unescape(text).strip()
