"""CLI entrypoint: Typer app definition and command registration"""

import typer

from sitegraph.cli.commands import build_cmd, models_cmd, page_cmd, paths_cmd


app = typer.Typer(name="sitegraph", no_args_is_help=True, help="Static-site content loader and reference resolver")

app.command(name="build")(build_cmd)
app.command(name="paths")(paths_cmd)
app.command(name="page")(page_cmd)
app.command(name="models")(models_cmd)
