"""Streamlit Web UI for resume-analyzer.

Paste a resume, get a scored analysis report back, export it.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so the client can read it
for key in ("ANTHROPIC_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from resume_analyzer.clients.llm_client import LLMClient
from resume_analyzer.config import AVAILABLE_THEMES, get_api_key, load_config
from resume_analyzer.export.pdf_renderer import render_html_preview, render_pdf
from resume_analyzer.parsers.report_parser import summarize_report
from resume_analyzer.parsers.resume_parser import SUPPORTED_SUFFIXES, parse_resume
from resume_analyzer.pipeline.resume_analyst import ResumeAnalyst
from resume_analyzer.session import AnalysisSession, AnalysisState

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Resume Analyzer",
    page_icon=":bar_chart:",
    layout="wide",
)

RESULT_ANCHOR = "analysis-report"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_config():
    return load_config()


def _get_session() -> AnalysisSession:
    """Return this browser session's AnalysisSession, creating it once."""
    if "analysis_session" not in st.session_state:
        config = _get_config()
        llm = LLMClient(api_key=get_api_key(), timeout=config.llm.timeout)
        analyst = ResumeAnalyst(
            llm,
            model=config.llm.model,
            temperature=config.llm.temperature,
            max_tokens=config.llm.max_tokens,
        )

        def _on_success(_report: str) -> None:
            st.session_state["scroll_to_result"] = True

        st.session_state["analysis_session"] = AnalysisSession(analyst, on_success=_on_success)
    return st.session_state["analysis_session"]


def _on_reset() -> None:
    _get_session().reset()
    st.session_state["resume_text"] = ""
    st.session_state.pop("scroll_to_result", None)


def _on_load_file() -> None:
    uploaded = st.session_state.get("resume_file")
    if uploaded is None:
        return
    suffix = Path(uploaded.name).suffix
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=suffix)
    tmp.write(uploaded.getvalue())
    tmp.close()
    tmp_path = Path(tmp.name)
    try:
        st.session_state["resume_text"] = parse_resume(tmp_path)
    except Exception:
        logger.exception("Resume file parsing failed")
        st.session_state["file_error"] = "Could not read that file. Paste the text instead."
    finally:
        tmp_path.unlink(missing_ok=True)


@st.cache_data(show_spinner=False)
def _report_pdf(report: str, theme: str) -> bytes | None:
    try:
        return render_pdf(report, theme=theme)
    except Exception:
        logger.exception("PDF export failed")
        return None


def _print_page() -> None:
    components.html("<script>window.parent.print();</script>", height=0)


def _scroll_to_result() -> None:
    components.html(
        f"""<script>
        const el = window.parent.document.getElementById("{RESULT_ANCHOR}");
        if (el) {{ el.scrollIntoView({{behavior: "smooth", block: "start"}}); }}
        </script>""",
        height=0,
    )


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

session = _get_session()

with st.sidebar:
    st.title("Resume Analyzer")
    st.caption("ATS-aware scoring and improvement suggestions")

    st.divider()

    theme = st.selectbox(
        "Export theme",
        AVAILABLE_THEMES,
        index=AVAILABLE_THEMES.index(_get_config().export.theme),
    )

    st.divider()

    st.file_uploader(
        "Load resume from file (optional)",
        type=[s.lstrip(".") for s in SUPPORTED_SUFFIXES],
        key="resume_file",
        help="PDF, DOCX, TXT or MD. The text is placed in the editor for review.",
    )
    st.button("Load into editor", on_click=_on_load_file, disabled=st.session_state.get("resume_file") is None)
    if "file_error" in st.session_state:
        st.error(st.session_state.pop("file_error"))


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

input_col, result_col = st.columns([5, 7], gap="large")

with input_col:
    st.header("Optimize your resume")
    st.markdown(
        "Paste your resume below. The AI strategist scores it against industry "
        "standards and ATS expectations."
    )

    if "resume_text" not in st.session_state:
        st.session_state["resume_text"] = session.resume_text

    head_cols = st.columns([3, 1])
    with head_cols[0]:
        st.markdown("**Resume content**")
    with head_cols[1]:
        st.button("Clear text", on_click=_on_reset, type="tertiary")

    resume_text = st.text_area(
        "Resume content",
        key="resume_text",
        height=400,
        placeholder="Paste your resume text here (e.g., Experience, Skills, Education)...",
        label_visibility="collapsed",
    )
    session.resume_text = resume_text

    submitted = st.button(
        "Analyzing with AI..." if session.is_loading else "Analyze resume",
        type="primary",
        disabled=not session.can_submit,
        use_container_width=True,
    )

    if submitted:
        with result_col:
            with st.spinner("Scanning for keywords, skills, and impact metrics..."):
                asyncio.run(session.submit(resume_text))

    if session.state is AnalysisState.ERROR and session.error:
        st.error(session.error)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

with result_col:
    st.markdown(f'<div id="{RESULT_ANCHOR}"></div>', unsafe_allow_html=True)

    if session.state is AnalysisState.SUCCESS and session.result:
        report = session.result
        summary = summarize_report(report)

        st.subheader("Analysis report")
        if summary.overall_score is not None:
            metric_cols = st.columns(len(summary.breakdown) + 1)
            metric_cols[0].metric("Overall", f"{summary.overall_score}/100")
            for col, item in zip(metric_cols[1:], summary.breakdown):
                col.metric(item.category, f"{item.score}/{item.max_score}")

        with st.container(border=True):
            st.markdown(report)

        dl_cols = st.columns(4)
        with dl_cols[0]:
            st.download_button(
                label="MD download",
                data=report.encode("utf-8"),
                file_name="resume_analysis.md",
                mime="text/markdown",
            )
        with dl_cols[1]:
            st.download_button(
                label="Printable HTML",
                data=render_html_preview(report, theme=theme).encode("utf-8"),
                file_name="resume_analysis.html",
                mime="text/html",
            )
        with dl_cols[2]:
            pdf_bytes = _report_pdf(report, theme)
            if pdf_bytes is not None:
                st.download_button(
                    label="PDF download",
                    data=pdf_bytes,
                    file_name="resume_analysis.pdf",
                    mime="application/pdf",
                )
            else:
                st.warning("PDF export failed")
        with dl_cols[3]:
            if st.button("Print"):
                _print_page()

        if st.session_state.pop("scroll_to_result", False):
            _scroll_to_result()
    else:
        with st.container(border=True):
            st.markdown("### Ready for analysis")
            st.caption("Your detailed report will appear here once you click the analyze button.")
