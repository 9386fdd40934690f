import logging

import click

from nethermind.calltrace.cli.signatures import known_signatures, lookup, selector
from nethermind.calltrace.cli.utils import (
    group_options,
    json_output_option,
    log_level_option,
    output_file_option,
    tree_option,
)

# isort: skip_file
# pylint: disable=too-many-arguments,raise-missing-from,import-outside-toplevel

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("calltrace").getChild("cli")


@click.group()
def calltrace_cli():
    """Command Line Interface for resolving EVM call traces into function selectors"""


@calltrace_cli.command()
@click.argument("trace_file", type=click.File("r"), default="-")
@group_options(log_level_option, json_output_option, tree_option, output_file_option)
def resolve(trace_file, log_level: str, json_output: bool, show_tree: bool, output_file: str | None):
    """
    Resolve contract calls & function selectors from saved tracer output.  Reads from stdin if TRACE_FILE is
    not provided.
    """
    from nethermind.calltrace.call_tree import build_call_tree
    from nethermind.calltrace.cli.utils import (
        call_tree_renderable,
        cli_logger_config,
        contract_calls_table,
        function_signatures_table,
    )
    from nethermind.calltrace.exceptions import InvalidInput
    from nethermind.calltrace.resolver import resolve_trace

    console = cli_logger_config(root_logger, log_level)

    trace_text = trace_file.read()
    try:
        result = resolve_trace(trace_text)
    except InvalidInput as e:
        logger.error(e)
        raise SystemExit(1)

    if result.is_empty():
        logger.warning("No function signatures found in trace output")
        logger.debug(f"First 500 chars of output: {trace_text[:500]}")

    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(result.to_json(indent=2))
        logger.info(f"Saved {result.total_calls} contract calls to {output_file}")

    if json_output:
        click.echo(result.to_json(indent=2))
        return

    console.print(contract_calls_table(result))
    console.print(function_signatures_table(result))
    if show_tree:
        # Each tree level is indented 4 cells
        max_depth = max(1, (console.width - 60) // 4)
        console.print(call_tree_renderable(build_call_tree(result.contract_calls), max_depth=max_depth))


# Adding Signature Commands
calltrace_cli.add_command(selector)
calltrace_cli.add_command(lookup)
calltrace_cli.add_command(known_signatures, name="known-signatures")
