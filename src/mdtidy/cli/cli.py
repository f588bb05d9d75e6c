"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdtidy.cli.commands import check_cmd, format_cmd, init_cmd


app = typer.Typer(name="mdtidy", no_args_is_help=True, help="Deterministic markdown formatter")

app.command(name="format")(format_cmd)
app.command(name="check")(check_cmd)
app.command(name="init")(init_cmd)
