"""Thresholds command: show or write the detection thresholds."""

from pathlib import Path

import typer
import yaml
from loguru import logger

from ...config.thresholds import ThresholdConfig
from ...core.exceptions import ConfigError
from ..output import print_error, print_json, print_success, print_yaml


def thresholds(
    write: Path | None = typer.Option(
        None,
        "--write",
        "-w",
        help="Save the thresholds to this YAML file instead of printing them",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Start from this threshold file instead of the defaults",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print thresholds as JSON"
    ),
) -> None:
    """⚙️  Show the detection thresholds, or save them as a starting config."""
    try:
        current = ThresholdConfig.load(config) if config else ThresholdConfig()
    except ConfigError as e:
        logger.error(f"Invalid threshold configuration: {e}")
        print_error(str(e))
        raise typer.Exit(1)

    if write:
        try:
            current.save(write)
        except OSError as e:
            print_error(f"Cannot write {write}: {e}")
            raise typer.Exit(1)
        print_success(f"Thresholds written to {write}")
        return

    if json_output:
        print_json(current.to_dict())
    else:
        print_yaml(yaml.safe_dump(current.to_dict(), sort_keys=False))
