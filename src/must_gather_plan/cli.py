#!/usr/bin/env python
"""Command-line interface for must-gather-plan.

This module provides the CLI entry point which maps command-line options
onto the plan_mustgather tool arguments and prints the resulting plan.
"""

import json
import sys
from typing import Any

import click
from icecream import ic
from rich.markup import escape

from must_gather_plan import __version__, console
from must_gather_plan.exceptions import ClusterConnectionError, RenderError
from must_gather_plan.planner import MustGatherPlanner
from must_gather_plan.tool import tool_definition


def build_arguments(**options: Any) -> dict[str, Any]:
    """Convert CLI options into tool arguments.

    Unset options and false flags are left out so the planner applies
    its own defaults.

    Args:
        **options: Option values keyed by tool parameter name.

    Returns:
        The tool arguments.

    """
    arguments: dict[str, Any] = {}
    for name, value in options.items():
        if value is None or value is False or value == ():
            continue
        arguments[name] = list(value) if isinstance(value, tuple) else value
    return arguments


@click.command(help="Plan the collection of a must-gather bundle from an OpenShift cluster")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option("--select", required=False, is_flag=True, default=False, help="prompt for context select")
@click.option("--schema", required=False, is_flag=True, help="print the tool definition and exit")
@click.option("--node-name", required=False, help="node to run the must-gather pod on")
@click.option("--node-selector", required=False, help="node label selector, e.g. key=value,key2=value2")
@click.option("--host-network", required=False, is_flag=True, help="run the pod in the host network")
@click.option("--gather-command", required=False, help="gather command to run in each gather container")
@click.option("--all-component-images", required=False, is_flag=True, help="gather for all annotated components")
@click.option("--image", "-i", "images", required=False, multiple=True, help="gather image, may be repeated")
@click.option("--source-dir", required=False, help="directory the gather containers write to")
@click.option("--timeout", required=False, help="timeout of the gather process, e.g. 30s or 2h10m30s")
@click.option("--namespace", "-n", required=False, help="existing namespace to run the pod in")
@click.option("--keep-namespace", required=False, is_flag=True, help="omit the cleanup instructions")
@click.option("--since", required=False, help="only collect logs newer than a duration, e.g. 5s")
@click.option("--image-stream", required=False, hidden=True)
def cli(
    version: bool,
    debug: bool,
    select: bool,
    schema: bool,
    **options: Any,
) -> None:
    """Process CLI arguments and print the must-gather plan.

    Args:
        version: Print version and exit.
        debug: Enable debug output.
        select: Prompt for Kubernetes context selection.
        schema: Print the tool definition and exit.
        **options: Tool parameters.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        return

    if schema:
        click.echo(json.dumps(tool_definition(), indent=2))
        return

    arguments = build_arguments(**options)
    ic(arguments)

    try:
        result = MustGatherPlanner(select_context=select).plan(arguments)
    except ClusterConnectionError as e:
        console.error(f"Cluster connection failed: {escape(str(e))}")
        sys.exit(1)
    except RenderError as e:
        raise click.ClickException(str(e)) from None

    if result.is_error:
        console.error(escape(str(result.error)))
        sys.exit(1)

    click.echo(result.content)
    console.success("Must-gather plan generated")


if __name__ == "__main__":
    cli()
