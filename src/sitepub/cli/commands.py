"""CLI command implementations"""

import logging
from typing import Annotated, Optional

import typer
from jinja2 import TemplateError

from sitepub.config import Settings, load_config
from sitepub.core.pipeline import build_site, run_load
from sitepub.core.taxonomy import build_tag_index


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Markdown content root")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    templates: Annotated[Optional[str], typer.Option("--templates-dir", help="Site template overrides")] = None,
    config: Annotated[Optional[str], typer.Option("--config", help="Site configuration file (TOML)")] = None,
    drafts: Annotated[bool, typer.Option("--drafts", help="Render pages marked as draft")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Render content, tag pages and feed into the output directory."""
    _configure_logging(verbose)
    settings = _settings(overrides={
        "content_dir": content, "output_dir": out, "templates_dir": templates,
        "config_file": config, "include_drafts": drafts or None,
    })
    try:
        report = build_site(settings)
    except ValueError as e:
        _fail(str(e))
    except RuntimeError as e:
        _fail("Build failed", e)
    except TemplateError as e:
        _fail("Template error", e)
    except OSError as e:
        _fail("Build failed", e)

    for path in report.written:
        typer.echo(f"  {path}")
    typer.echo(
        f"Build complete - "
        f"{report.pages} page(s), "
        f"{report.sections} section(s), "
        f"{report.tags} tag(s) -> {settings.output_dir}/"
    )


def tags_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Markdown content root")] = None,
    config: Annotated[Optional[str], typer.Option("--config", help="Site configuration file (TOML)")] = None,
    ):
    """List every tag with the number of pages carrying it."""
    settings = _settings(overrides={"content_dir": content, "config_file": config})
    try:
        site, loaded = run_load(settings)
    except (ValueError, RuntimeError) as e:
        _fail(str(e))
    index = build_tag_index(list(loaded.pages), site)
    if not index:
        typer.echo("No tags found.")
        raise typer.Exit(1)
    for tag, pages in index.items():
        typer.echo(f"{tag}\t{len(pages)}")


def check_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Markdown content root")] = None,
    config: Annotated[Optional[str], typer.Option("--config", help="Site configuration file (TOML)")] = None,
    ):
    """Parse the site configuration and every document without writing output."""
    settings = _settings(overrides={"content_dir": content, "config_file": config})
    try:
        _, loaded = run_load(settings)
    except (ValueError, RuntimeError) as e:
        _fail(str(e))
    typer.echo(f"OK - {len(loaded.pages)} page(s), {len(loaded.sections)} section(s)")
