# src/hybridscaler/cli/learning.py
"""
Implements the `inspect` command, which renders the learning state persisted
in a HybridScaler resource.
"""

import base64
import binascii
import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from ..core.exceptions import SerializationError
from ..reinforcement.codec import decode_learning_state
from ..reporters.console_reporter import ConsoleReporter
from .utils import load_scaler

logger = logging.getLogger(__name__)

app = typer.Typer(help="Show the Q-table of a HybridScaler resource.", add_completion=False)


@app.callback(invoke_without_command=True)
def inspect(
    ctx: typer.Context,
    scaler_file: Annotated[Path, typer.Argument(help="HybridScaler resource as JSON.", exists=True, dir_okay=False)],
):
    """
    Show the persisted Q-table and the last state-action pair.
    """
    if ctx.invoked_subcommand is not None:
        return

    scaler = load_scaler(scaler_file)
    blob = scaler.status.learning_state

    try:
        learning_state = decode_learning_state(base64.b64decode(blob, validate=True) if blob else None)
    except (binascii.Error, SerializationError) as e:
        logger.error(f"Cannot read the learning state of {scaler.key}: {e}")
        raise typer.Exit(code=1)

    ConsoleReporter().report_learning_state(learning_state)
