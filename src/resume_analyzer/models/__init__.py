"""Data models for the resume analyzer."""

from resume_analyzer.models.report import SCORE_CATEGORIES, ReportSummary, ScoreItem

__all__ = [
    "ReportSummary",
    "SCORE_CATEGORIES",
    "ScoreItem",
]
