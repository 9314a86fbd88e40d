# src/hybridscaler/cli/utils.py
import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from ..models.scaler import HybridScaler

logger = logging.getLogger(__name__)


def load_scaler(path: Path) -> HybridScaler:
    """Reads a HybridScaler resource document (JSON) from ``path``."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            document = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read HybridScaler from {path}: {e}")
        raise typer.Exit(code=1)

    try:
        return HybridScaler.model_validate(document)
    except ValidationError as e:
        logger.error(f"Invalid HybridScaler in {path}: {e}")
        raise typer.Exit(code=1)


def write_scaler(scaler: HybridScaler, path: Path) -> None:
    """Writes ``scaler`` as JSON using the resource's camelCase field names."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(scaler.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(content + "\n")
