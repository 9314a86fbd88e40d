# src/hybridscaler/cli/decide.py
"""
Implements the `decide` command: one reconciliation step run against a
HybridScaler resource stored in a file.
"""

import logging
import random
import sys
import traceback
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.exceptions import HybridScalerError
from ..core.state_builder import decide as make_decision
from ..core.state_builder import prepare_state
from ..reporters.console_reporter import ConsoleReporter
from ..strategy.factory import get_scaling_strategy
from .utils import load_scaler, write_scaler

logger = logging.getLogger(__name__)

app = typer.Typer(help="Make one scaling decision for a HybridScaler resource.", add_completion=False)


@app.callback(invoke_without_command=True)
def decide(
    ctx: typer.Context,
    scaler_file: Annotated[Path, typer.Argument(help="HybridScaler resource as JSON.", exists=True, dir_okay=False)],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", help="Where to write the updated resource. Default: overwrite SCALER_FILE."),
    ] = None,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Seed the action selection for repeatable runs.")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Print the decision without writing anything.")] = False,
):
    """
    Make one scaling decision and persist the new learning state.
    """
    if ctx.invoked_subcommand is not None:
        return

    scaler = load_scaler(scaler_file)

    try:
        rng = random.Random(seed) if seed is not None else None
        strategy = get_scaling_strategy(scaler.spec.learning_type, scaler.spec.q_learning_params, rng=rng)
        state = prepare_state(scaler.spec, scaler.status)
        decision, status = make_decision(scaler, strategy, state)
    except HybridScalerError as e:
        logger.error(f"Cannot make a scaling decision for {scaler.key}: {e}")
        raise typer.Exit(code=1)
    except Exception as e:
        logger.error(f"Unexpected error while deciding for {scaler.key}: {e}")
        logger.error(traceback.format_exc())
        raise typer.Exit(code=1)

    ConsoleReporter().report(decision, state)

    if dry_run:
        return

    target = output or scaler_file
    try:
        write_scaler(scaler.model_copy(update={"status": status}), target)
    except OSError as e:
        logger.error(f"Failed to write updated HybridScaler to {target}: {e}")
        raise typer.Exit(code=1)
    print(f"Updated resource written to: {target}", file=sys.stderr)
