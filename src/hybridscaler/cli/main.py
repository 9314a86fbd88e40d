# src/hybridscaler/cli/main.py
"""
This module is the main entry point for the hybrid scaler CLI.

It aggregates all commands from the submodules (decide, inspect).
"""

import logging

import typer

from ..core.config import config
from . import decide, learning

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="hybridscaler",
    help="Decide horizontal and vertical scaling of Kubernetes workloads with Q-learning.",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Prints the version of the hybrid scaler.
    """
    if value:
        from .. import __version__

        typer.echo(f"hybridscaler version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of the hybrid scaler.
    """
    from .. import __version__

    typer.echo(f"hybridscaler version: {__version__}")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    Hybrid scaler CLI main entry point.
    """
    pass


# Register command sub-apps
app.add_typer(decide.app, name="decide")
app.add_typer(learning.app, name="inspect")


if __name__ == "__main__":
    app()
