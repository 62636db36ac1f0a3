"""Analysis session: the input, UI state and result behind one page."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from resume_analyzer.pipeline.resume_analyst import ResumeAnalyst

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Please paste your resume content first."
EMPTY_RESULT_MESSAGE = "Failed to analyze resume. Please try again."
ANALYSIS_ERROR_MESSAGE = (
    "An error occurred during analysis. Please check your connection and try again."
)


class AnalysisState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


TRANSITIONS: dict[AnalysisState, set[AnalysisState]] = {
    AnalysisState.IDLE: {AnalysisState.LOADING, AnalysisState.ERROR, AnalysisState.IDLE},
    AnalysisState.LOADING: {AnalysisState.SUCCESS, AnalysisState.ERROR, AnalysisState.IDLE},
    AnalysisState.SUCCESS: {AnalysisState.LOADING, AnalysisState.ERROR, AnalysisState.IDLE},
    AnalysisState.ERROR: {AnalysisState.LOADING, AnalysisState.ERROR, AnalysisState.IDLE},
}


def validate_transition(current: AnalysisState, new: AnalysisState) -> bool:
    return new in TRANSITIONS.get(current, set())


class AnalysisSession:
    """Single-flight state machine around one resume analysis.

    ``submit`` is the only place a request is issued. While a request is in
    flight further submissions are ignored, and every ``reset`` starts a new
    generation so a response arriving afterwards is dropped instead of
    overwriting the cleared page.
    """

    def __init__(
        self,
        analyst: ResumeAnalyst,
        *,
        on_success: Callable[[str], None] | None = None,
    ):
        self.analyst = analyst
        self.on_success = on_success
        self.resume_text = ""
        self.state = AnalysisState.IDLE
        self.result: str | None = None
        self.error: str | None = None
        self._in_flight = False
        self._generation = 0

    @property
    def is_loading(self) -> bool:
        return self.state is AnalysisState.LOADING

    @property
    def can_submit(self) -> bool:
        return not self._in_flight and bool(self.resume_text.strip())

    def _transition(self, new: AnalysisState) -> None:
        if not validate_transition(self.state, new):
            raise RuntimeError(f"Invalid transition {self.state.value} -> {new.value}")
        logger.debug("Session state: %s -> %s", self.state.value, new.value)
        self.state = new

    def _fail(self, message: str) -> None:
        self._transition(AnalysisState.ERROR)
        self.result = None
        self.error = message

    async def submit(self, text: str | None = None) -> AnalysisState:
        """Analyze the current resume text and return the resulting state."""
        if self._in_flight:
            logger.debug("Submission ignored: analysis already in flight")
            return self.state
        if text is not None:
            self.resume_text = text
        if not self.resume_text.strip():
            self._fail(MISSING_INPUT_MESSAGE)
            return self.state

        self._generation += 1
        generation = self._generation
        self._in_flight = True
        self.result = None
        self.error = None
        self._transition(AnalysisState.LOADING)

        try:
            result = await self.analyst.analyze(self.resume_text)
        except Exception:
            logger.exception("Resume analysis failed")
            if generation == self._generation:
                self._fail(ANALYSIS_ERROR_MESSAGE)
            return self.state
        finally:
            if generation == self._generation:
                self._in_flight = False

        if generation != self._generation:
            logger.info("Discarding stale analysis result (generation %d)", generation)
            return self.state

        if not result or not result.strip():
            self._fail(EMPTY_RESULT_MESSAGE)
            return self.state

        self._transition(AnalysisState.SUCCESS)
        self.result = result
        if self.on_success:
            try:
                self.on_success(result)
            except Exception:
                logger.exception("on_success callback failed")
        return self.state

    def reset(self) -> None:
        """Return to Idle, clearing input, result and error together."""
        self._generation += 1
        self._in_flight = False
        self._transition(AnalysisState.IDLE)
        self.resume_text = ""
        self.result = None
        self.error = None
