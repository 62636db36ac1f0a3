"""Read the headline numbers out of an analysis report for display.

The report itself is shown verbatim; this only picks out the overall score
and the category breakdown so the UI can show them as metrics. Anything the
model formatted unexpectedly is simply left out.
"""

from __future__ import annotations

import re

from resume_analyzer.models.report import SCORE_CATEGORIES, ReportSummary, ScoreItem

_OVERALL_PATTERN = re.compile(r"Overall Resume Score\W*?(\d{1,3})\s*/\s*100", re.IGNORECASE)


def _category_pattern(category: str) -> re.Pattern[str]:
    return re.compile(
        rf"{re.escape(category)}\W*?(\d{{1,3}})\s*/\s*(\d{{1,3}})",
        re.IGNORECASE,
    )


def summarize_report(markdown_text: str) -> ReportSummary:
    """Extract the overall score and score breakdown from report markdown."""
    overall: int | None = None
    match = _OVERALL_PATTERN.search(markdown_text or "")
    if match:
        value = int(match.group(1))
        if 0 <= value <= 100:
            overall = value

    breakdown: list[ScoreItem] = []
    for category, max_score in SCORE_CATEGORIES.items():
        m = _category_pattern(category).search(markdown_text or "")
        if not m:
            continue
        score, stated_max = int(m.group(1)), int(m.group(2))
        if stated_max != max_score or score > max_score:
            continue
        breakdown.append(ScoreItem(category=category, score=score, max_score=max_score))

    return ReportSummary(overall_score=overall, breakdown=breakdown)
