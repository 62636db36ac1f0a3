"""Report export (HTML preview and PDF) for resume-analyzer."""
from resume_analyzer.export.pdf_renderer import (
    AVAILABLE_THEMES,
    render_html_preview,
    render_pdf,
)

__all__ = ["render_pdf", "render_html_preview", "AVAILABLE_THEMES"]
