"""Render an analysis report as a themed HTML page or PDF.

The model writes section headings as plain emoji lines ("🔍 Missing Skills
Detected") and bullets as "•". Before conversion those are turned into real
markdown headings and lists, and the report's own title line is lifted into
the page header together with the overall score.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import markdown
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from resume_analyzer.config import AVAILABLE_THEMES
from resume_analyzer.parsers.report_parser import summarize_report

logger = logging.getLogger(__name__)

CSS_THEMES_DIR = Path(__file__).parent / "css_themes"
BASE_TEMPLATE_DIR = Path(__file__).parent

DEFAULT_TITLE = "Resume Analysis Report"

REPORT_SECTIONS = (
    "Score Breakdown",
    "Missing Skills Detected",
    "Weak or Underperforming Sections",
    "Improvement Suggestions",
    "AI-Generated Optimized Professional Summary",
    "Bonus Enhancement Tips",
)

_TITLE_PATTERN = re.compile(r"analysis report", re.IGNORECASE)
_BULLET_PATTERN = re.compile(r"^\s*(?:[-*+]|•|\d+\.)\s+")
_MARKUP_CHARS = "#*_: \t"


def render_pdf(
    report_markdown: str,
    theme: str = "professional",
    title: str = DEFAULT_TITLE,
) -> bytes:
    """Convert report markdown to PDF bytes."""
    if theme not in AVAILABLE_THEMES:
        theme = "professional"
    html = _md_to_styled_html(report_markdown, theme, title)
    return _html_to_pdf(html)


def render_html_preview(
    report_markdown: str,
    theme: str = "professional",
    title: str = DEFAULT_TITLE,
) -> str:
    """Convert report markdown to a themed, printable HTML page."""
    if theme not in AVAILABLE_THEMES:
        theme = "professional"
    return _md_to_styled_html(report_markdown, theme, title)


def save_html(html_content: str, output_path: str | Path) -> Path:
    """Save HTML content to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html_content, encoding="utf-8")
    return path


def split_report_title(md_text: str) -> tuple[str | None, str]:
    """Separate the report's own title line from the rest of the report.

    Returns ``(None, md_text)`` when the first non-blank line is not a title.
    """
    lines = (md_text or "").splitlines()
    for i, line in enumerate(lines):
        if not line.strip():
            continue
        if _TITLE_PATTERN.search(line) and not _BULLET_PATTERN.match(line):
            title = line.strip().strip(_MARKUP_CHARS)
            return title, "\n".join(lines[i + 1:]).lstrip("\n")
        break
    return None, md_text or ""


def normalize_report(md_text: str) -> str:
    """Turn the report's plain section lines and bullets into markdown structure."""
    out: list[str] = []
    for line in md_text.splitlines():
        stripped = line.strip()
        section = _section_heading(stripped)
        if section is not None:
            out.extend(["", f"## {section}", ""])
            continue
        if _BULLET_PATTERN.match(line):
            if stripped.startswith("•"):
                line = "- " + stripped[1:].strip()
            if out and out[-1].strip() and not _BULLET_PATTERN.match(out[-1]):
                out.append("")
        out.append(line)
    return "\n".join(out).strip("\n") + "\n"


def _section_heading(line: str) -> str | None:
    if not line or line.startswith(("-", "*", "•")) or line.startswith("##"):
        return None
    bare = line.strip(_MARKUP_CHARS)
    for section in REPORT_SECTIONS:
        if section.lower() in bare.lower() and len(bare) <= len(section) + 4:
            return bare
    return None


def _md_to_styled_html(md_text: str, theme: str, title: str) -> str:
    report_title, body_md = split_report_title(md_text)
    summary = summarize_report(md_text)
    html_body = markdown.markdown(
        normalize_report(body_md),
        extensions=["tables", "fenced_code", "nl2br", "sane_lists"],
    )
    css_path = CSS_THEMES_DIR / f"{theme}.css"
    css = css_path.read_text(encoding="utf-8") if css_path.exists() else ""
    env = Environment(
        loader=FileSystemLoader(str(BASE_TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template("base.html")
    return template.render(
        title=title,
        heading=report_title or title,
        overall_score=summary.overall_score,
        css=Markup(css),
        body=Markup(html_body),
    )


def _html_to_pdf(html: str) -> bytes:
    """Convert HTML string to PDF bytes using WeasyPrint, with fpdf2 fallback."""
    try:
        from weasyprint import HTML
        return HTML(string=html).write_pdf()
    except (ImportError, OSError):
        logger.warning("WeasyPrint not available, using fpdf2 fallback")
        from resume_analyzer.export.pdf_fallback import html_to_pdf_fpdf2
        return html_to_pdf_fpdf2(html)
