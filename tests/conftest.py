"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from resume_analyzer.clients.llm_client import LLMClient, LLMResponse
from resume_analyzer.pipeline.resume_analyst import ResumeAnalyst


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe, Software Engineer, 5 years Python
jane.doe@example.com | github.com/janedoe

Experience:
- Acme Corp (2021 - present) - Senior Software Engineer
  - Built Django REST services handling 2M requests/day
  - Led migration from cron jobs to Celery workers

- Initech (2019 - 2021) - Software Engineer
  - Maintained internal data pipelines in Python and SQL

Education:
- B.S. Computer Science, State University (2015 - 2019)

Skills:
- Python, Django, FastAPI, PostgreSQL, Redis, Docker
"""


@pytest.fixture
def sample_report() -> str:
    return """📄 RESUME ANALYSIS REPORT

🏆 Overall Resume Score: 82 / 100

📊 Score Breakdown:
- Content Quality: 21/25
- Skills Relevance: 17/20
- Impact & Achievements: 15/20
- Formatting & Clarity: 13/15
- ATS Optimization: 16/20

Strong technical core with clear ownership; impact metrics are thin in older roles.

🔍 Missing Skills Detected
• Kubernetes — Expected for backend roles running containerized services
• AWS — Cloud platform experience is listed in most senior postings

⚠ Weak or Underperforming Sections
**Initech**
- Problem: Responsibilities without outcomes
- Why it weakens profile: Recruiters cannot gauge scope
- Quick Fix Suggestion: Add data volumes and latency improvements

🚀 Improvement Suggestions
- Quantify the Celery migration (jobs/day, failure rate before and after)

✨ AI-Generated Optimized Professional Summary
Senior Python engineer with 5 years building high-traffic Django services.

🧠 Bonus Enhancement Tips
- AWS Certified Developer – Associate
"""


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="report", input_tokens=100, output_tokens=50)
    )
    return client


@pytest.fixture
def mock_analyst(sample_report) -> ResumeAnalyst:
    """Create a mock analyst that returns the sample report."""
    analyst = AsyncMock(spec=ResumeAnalyst)
    analyst.analyze = AsyncMock(return_value=sample_report)
    return analyst
