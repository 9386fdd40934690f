import os
from logging import Logger

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from nethermind.calltrace.call_tree import CallNode
from nethermind.calltrace.types import ResolutionResult, call_type_str

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def cli_logger_config(instrument_logger: Logger, log_level: str = "WARNING") -> Console:
    """
    Sends log records to stderr, and returns a stdout console for command output.  Keeps JSON output on
    stdout parseable regardless of the log level.
    """
    log_console = Console(stderr=True)
    instrument_logger.handlers.clear()

    instrument_logger.addHandler(RichHandler(show_path=False, console=log_console))
    instrument_logger.setLevel(log_level.upper())
    return Console()


def group_options(*options):
    """Decorator to group multiple click options together"""

    def wrapper(function):
        for option in reversed(options):
            function = option(function)
        return function

    return wrapper


# -------------------------------------------------------
#    CLI Configuration
# -------------------------------------------------------
log_level_option = click.option(
    "--log-level",
    "log_level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=os.environ.get("CALLTRACE_LOG_LEVEL", "WARNING"),
    show_default=True,
    help="Logging level.  If not provided, will use the CALLTRACE_LOG_LEVEL environment variable",
)

# -------------------------------------------------------
#    Output Parameters
# -------------------------------------------------------
json_output_option = click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Print the resolution result as JSON instead of tables",
)
tree_option = click.option(
    "--tree",
    "show_tree",
    is_flag=True,
    default=False,
    help="Print contract calls as a nested call tree",
)
output_file_option = click.option(
    "--output-file",
    "output_file",
    type=click.Path(writable=True, dir_okay=False),
    default=None,
    help="File to save the resolution result as JSON",
)


def contract_calls_table(result: ResolutionResult) -> Table:
    """Returns a rich table with every resolved contract call in trace order"""
    call_table = Table(title="[bold magenta]Contract Calls", min_width=80, show_lines=False)

    call_table.add_column("Depth", justify="right")
    call_table.add_column("Type")
    call_table.add_column("Address")
    call_table.add_column("Signature")
    call_table.add_column("Selector")
    call_table.add_column("Gas", justify="right")

    for call in result.contract_calls:
        call_table.add_row(
            str(call.depth),
            call_type_str(call.call_type),
            call.address,
            escape(call.full_signature),
            call.selector,
            call.gas,
        )

    return call_table


def function_signatures_table(result: ResolutionResult) -> Table:
    """Returns a rich table with the unique function selectors found in a trace"""
    sig_table = Table(
        title=f"[bold magenta]Function Signatures ({result.total_functions} unique, {result.total_calls} calls)",
        min_width=80,
    )
    sig_table.add_column("Selector")
    sig_table.add_column("Signature")

    for signature in result.function_signatures:
        sig_table.add_row(signature.selector, escape(signature.name))

    return sig_table


def call_tree_renderable(roots: list[CallNode], max_depth: int = 32) -> Tree:
    """
    Renders reconstructed call trees as a single rich Tree.  Calls nested deeper than max_depth are summarised
    on a single line, since each level of a rich Tree narrows the space left for labels.
    """
    tree = Tree("[bold magenta]Call Tree")
    stack: list[tuple[CallNode, Tree, int]] = [(root, tree, 1) for root in reversed(roots)]

    while stack:
        node, parent, level = stack.pop()
        record = node.record
        label = f"{record.address}::{escape(record.full_signature)}"
        branch = parent.add(f"[cyan]{call_type_str(record.call_type)}[/] {label}")

        if level >= max_depth and node.children:
            nested = sum(1 for _ in node.walk()) - 1
            branch.add(f"[dim]... {nested} nested calls")
            continue

        stack.extend((child, branch, level + 1) for child in reversed(node.children))

    return tree
