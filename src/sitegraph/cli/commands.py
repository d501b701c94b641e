"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from sitegraph.config import Settings, load_config
from sitegraph.core.export import to_jsonable, write_content
from sitegraph.core.models import SiteContent
from sitegraph.core.pipeline import all_content
from sitegraph.core.schema import load_reference_index


RootOpt = Annotated[Optional[str], typer.Option("--root", help="Project root containing content/ and the models dir")]
DevOpt = Annotated[Optional[bool], typer.Option("--dev/--no-dev", help="Attach editor annotation marks")]


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


def _load(settings: Settings) -> SiteContent:
    """Run the content pipeline, turning load errors into a CLI failure."""
    try:
        return all_content(settings)
    except (RuntimeError, ValueError) as e:
        _fail("Content build failed", e)


def build_cmd(
    root: RootOpt = None,
    out: Annotated[Optional[str], typer.Option("--out", help="Output JSON file")] = None,
    dev: DevOpt = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log pipeline and annotation details")] = False,
    ):
    """Load and resolve all content, then write objects, pages and site props as JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    settings = _settings(overrides={
        "root_dir": root, "output_file": out, "dev_mode": dev,
        "log_annotations": True if verbose else None,
    })
    content = _load(settings)
    out_path = write_content(content, Path(settings.output_file))
    typer.echo(f"Loaded {len(content.objects)} object(s), {len(content.pages)} page(s)")
    if content.site is None:
        typer.echo(f"  no '{settings.config_model}' object found", err=True)
    typer.echo(f"Wrote {out_path}")


def paths_cmd(root: RootOpt = None):
    """List the URL path of every page."""
    content = _load(_settings(overrides={"root_dir": root}))
    if not content.pages:
        typer.echo("No pages found.")
        raise typer.Exit(1)
    for path in content.url_paths():
        typer.echo(path)


def page_cmd(
    url: Annotated[str, typer.Argument(help="URL path of the page, e.g. /blog")],
    root: RootOpt = None,
    dev: DevOpt = None,
    ):
    """Print the {page, site} props handed to the renderer for one URL."""
    content = _load(_settings(overrides={"root_dir": root, "dev_mode": dev}))
    try:
        props = content.page_props(url)
    except KeyError:
        _fail(f"No page for URL '{url}'")
    typer.echo(json.dumps(to_jsonable(props), indent=2, ensure_ascii=False))


def models_cmd(root: RootOpt = None):
    """List every reference field declared by the content models."""
    settings = _settings(overrides={"root_dir": root})
    try:
        index = load_reference_index(settings.root / settings.models_dir)
    except ValueError as e:
        _fail("Invalid content models", e)
    if not len(index):
        typer.echo("No reference fields declared.")
        return
    for model, field in index:
        typer.echo(f"{model}.{field}")
