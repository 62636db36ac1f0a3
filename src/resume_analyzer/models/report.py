"""Pydantic models for the display summary of an analysis report."""

from __future__ import annotations

from pydantic import BaseModel

# Breakdown categories and their maximum points, in report order
SCORE_CATEGORIES: dict[str, int] = {
    "Content Quality": 25,
    "Skills Relevance": 20,
    "Impact & Achievements": 20,
    "Formatting & Clarity": 15,
    "ATS Optimization": 20,
}


class ScoreItem(BaseModel):
    category: str
    score: int
    max_score: int


class ReportSummary(BaseModel):
    overall_score: int | None = None  # 0-100
    breakdown: list[ScoreItem] = []

    @property
    def breakdown_total(self) -> int:
        return sum(item.score for item in self.breakdown)
