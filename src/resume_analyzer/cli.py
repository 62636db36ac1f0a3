"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
import sys
import webbrowser
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel

from resume_analyzer.clients.llm_client import LLMClient
from resume_analyzer.config import AVAILABLE_THEMES, get_api_key, load_config
from resume_analyzer.export.pdf_renderer import render_html_preview, render_pdf, save_html
from resume_analyzer.parsers.report_parser import summarize_report
from resume_analyzer.parsers.resume_parser import parse_resume
from resume_analyzer.pipeline.resume_analyst import ResumeAnalyst
from resume_analyzer.session import AnalysisSession, AnalysisState

app = typer.Typer(
    name="resume-analyzer",
    help="AI resume analysis: score, gaps and improvement suggestions.",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _check_theme(theme: str | None) -> str:
    config = load_config()
    theme = theme or config.export.theme
    if theme not in AVAILABLE_THEMES:
        console.print(f"[red]Unknown theme: {theme} (choose from {', '.join(AVAILABLE_THEMES)})[/red]")
        raise typer.Exit(1)
    return theme


@app.command()
def analyze(
    resume: Path = typer.Argument(help="Resume file (TXT/MD/PDF/DOCX), or '-' to read stdin"),
    output: Path = typer.Option(None, "--output", "-o", help="Save the report as markdown"),
    html: bool = typer.Option(False, "--html", help="Also write a printable HTML report"),
    pdf: bool = typer.Option(False, "--pdf", help="Also write a PDF report"),
    theme: str = typer.Option(None, "--theme", "-t", help="Export theme"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Analyze a resume and print the report."""
    _configure_logging(verbose)

    if str(resume) == "-":
        resume_text = sys.stdin.read()
    else:
        if not resume.exists():
            console.print(f"[red]Resume file not found: {resume}[/red]")
            raise typer.Exit(1)
        try:
            resume_text = parse_resume(resume)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    if (html or pdf) and output is None:
        output = Path("./output/resume_analysis.md")
    if html or pdf:
        theme = _check_theme(theme)

    config = load_config()
    llm = LLMClient(api_key=get_api_key(), timeout=config.llm.timeout)
    analyst = ResumeAnalyst(
        llm,
        model=config.llm.model,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
    )
    session = AnalysisSession(analyst)

    if verbose:
        console.print(f"[dim]Resume: {len(resume_text)} chars[/dim]")
        console.print(f"[dim]Model: {config.llm.model} (temperature {config.llm.temperature})[/dim]")

    with console.status("Analyzing with AI..."):
        state = asyncio.run(session.submit(resume_text))

    if state is not AnalysisState.SUCCESS:
        console.print(f"[red]{session.error}[/red]")
        raise typer.Exit(1)

    report = session.result
    console.print(Markdown(report))

    summary = summarize_report(report)
    if summary.overall_score is not None:
        lines = [f"[bold]Overall: {summary.overall_score} / 100[/bold]"]
        lines += [f"{item.category}: {item.score}/{item.max_score}" for item in summary.breakdown]
        console.print(Panel("\n".join(lines), title="Score"))

    if verbose:
        usage = llm.get_token_summary()
        console.print(
            f"[dim]Tokens: {usage['input']} in / {usage['output']} out, est. ${usage['cost']:.4f}[/dim]"
        )

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report, encoding="utf-8")
        console.print(f"[green]Report saved: {output}[/green]")

        if html:
            html_path = save_html(render_html_preview(report, theme=theme), output.with_suffix(".html"))
            console.print(f"[green]HTML saved: {html_path}[/green]")
        if pdf:
            pdf_path = output.with_suffix(".pdf")
            pdf_path.write_bytes(render_pdf(report, theme=theme))
            console.print(f"[green]PDF saved: {pdf_path}[/green]")


@app.command()
def export(
    report: Path = typer.Argument(help="Markdown report produced by 'analyze'"),
    pdf: bool = typer.Option(False, "--pdf", help="Write PDF instead of HTML"),
    theme: str = typer.Option(None, "--theme", "-t", help="Export theme"),
) -> None:
    """Export a saved report to HTML (default) or PDF."""
    if not report.exists():
        console.print(f"[red]File not found: {report}[/red]")
        raise typer.Exit(1)

    theme = _check_theme(theme)
    md_content = report.read_text(encoding="utf-8")
    if pdf:
        pdf_path = report.with_suffix(".pdf")
        pdf_path.write_bytes(render_pdf(md_content, theme=theme))
        console.print(f"[green]PDF saved: {pdf_path}[/green]")
    else:
        html_path = save_html(render_html_preview(md_content, theme=theme), report.with_suffix(".html"))
        console.print(f"[green]HTML saved: {html_path}[/green]")


@app.command()
def preview(
    file: Path = typer.Argument(help="Markdown report to preview"),
) -> None:
    """Render a report to HTML and open it in the browser for printing."""
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)

    md_content = file.read_text(encoding="utf-8")
    html_path = save_html(render_html_preview(md_content, theme=_check_theme(None)), file.with_suffix(".html"))

    console.print(f"[green]HTML saved: {html_path}[/green]")
    webbrowser.open(html_path.resolve().as_uri())


if __name__ == "__main__":
    app()
