"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from ats_resume.clients.llm_client import LLMClient
from ats_resume.config import load_config
from ats_resume.errors import ResumePipelineError
from ats_resume.export.rendering import content_disposition
from ats_resume.models.resume import TailorRequest
from ats_resume.pipeline.orchestrator import ResumePipeline
from ats_resume.profiles.store import ProfileStore
from ats_resume.templates.loader import TemplateStore

app = typer.Typer(
    name="ats-resume",
    help="Tailored, ATS-optimized resume PDFs from a profile and a job description",
    no_args_is_help=True,
)
console = Console()

# Exit codes per error category; anything unexpected exits with 1.
EXIT_CODES: dict[str, int] = {
    "missing_input": 2,
    "profile_not_found": 3,
    "template_not_found": 3,
    "generation_refused": 4,
    "generation_failed": 4,
    "parse_failed": 5,
    "schema_invalid": 5,
    "render_failed": 6,
    "internal": 1,
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def generate(
    profile: str = typer.Argument(help="Profile key (resumes/<key>.json)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    template: str = typer.Option(None, "--template", "-t", help="Template key (templates/<key>.html)"),
    job_title: str = typer.Option(None, "--job-title", help="Job title, used in the filename only"),
    company: str = typer.Option(None, "--company", help="Employer name, used in the filename only"),
    output: Path = typer.Option(None, "--output", "-o", help="Output directory"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    html: bool = typer.Option(False, "--html", help="Also save the rendered HTML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Generate a tailored resume PDF for a job description."""
    _setup_logging(verbose)
    if not jd.exists():
        console.print(f"[red]Job description file not found: {jd}[/red]")
        raise typer.Exit(EXIT_CODES["missing_input"])

    config = load_config(config_path)
    pipeline = ResumePipeline(
        LLMClient(timeout=config.llm.timeout),
        ProfileStore(config.paths.resolved_profiles_dir),
        TemplateStore(config.paths.resolved_templates_dir),
        config=config,
    )
    request = TailorRequest(
        profile=profile,
        job_description=jd.read_text(encoding="utf-8"),
        template=template,
        job_title=job_title,
        company_name=company,
    )

    try:
        with console.status("Generating resume..."):
            result = asyncio.run(pipeline.run(request))
    except ResumePipelineError as exc:
        logging.getLogger(__name__).debug("Pipeline failed", exc_info=True)
        console.print(f"[red]{exc.user_message}[/red] [dim]({exc.category})[/dim]")
        raise typer.Exit(EXIT_CODES.get(exc.category, 1))
    except Exception:
        console.print_exception()
        console.print("[red]PDF generation failed due to an internal error.[/red] [dim](internal)[/dim]")
        raise typer.Exit(EXIT_CODES["internal"])

    out_dir = output or config.paths.resolved_output_dir
    out_dir.mkdir(parents=True, exist_ok=True)
    pdf_path = out_dir / result.filename
    pdf_path.write_bytes(result.pdf)
    if html:
        pdf_path.with_suffix(".html").write_text(result.html, encoding="utf-8")

    console.print(
        Panel(
            f"Title: {result.title}\n"
            f"File: {pdf_path}\n"
            f"Content-Disposition: {content_disposition(result.filename)}\n"
            f"Tokens: {result.usage.get('input', 0)} in / {result.usage.get('output', 0)} out"
            f" ({len(result.usage.get('calls', []))} calls)",
            title="Resume generated",
        )
    )


@app.command()
def profiles(
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """List available candidate profiles."""
    config = load_config(config_path)
    names = ProfileStore(config.paths.resolved_profiles_dir).list_profiles()
    if not names:
        console.print("[yellow]No profiles found.[/yellow]")
        return
    for name in names:
        console.print(f"  [bold]{name}[/bold]")


@app.command()
def templates(
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """List available resume templates."""
    config = load_config(config_path)
    names = TemplateStore(config.paths.resolved_templates_dir).list_templates()
    if not names:
        console.print("[yellow]No templates found.[/yellow]")
        return
    default = config.paths.default_template
    for name in names:
        marker = " [dim](default)[/dim]" if name == default else ""
        console.print(f"  [bold]{name}[/bold]{marker}")


if __name__ == "__main__":
    app()
