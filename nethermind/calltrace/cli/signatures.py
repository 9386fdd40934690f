import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nethermind.calltrace.known_signatures import KNOWN_SIGNATURES, get_known_signature
from nethermind.calltrace.signatures import compute_selector, signature_to_name

# isort: skip_file


@click.command()
@click.argument("signature")
def selector(signature: str):
    """Print the 4 byte selector of a canonical function signature, ie 'transfer(address,uint256)'"""
    click.echo(compute_selector(signature.replace(" ", "")))


@click.command()
@click.argument("selector_hex", metavar="SELECTOR")
def lookup(selector_hex: str):
    """Look up a selector in the table of well known ERC20, Ownable & Pausable functions"""
    signature = get_known_signature(selector_hex)
    if signature is None:
        click.echo(f"Unknown selector {selector_hex}", err=True)
        raise SystemExit(1)

    click.echo(signature)


@click.command()
def known_signatures():
    """List the well known function selectors"""
    table = Table(title="[bold magenta]Known Function Signatures", min_width=60)
    table.add_column("Selector")
    table.add_column("Function")
    table.add_column("Signature")

    for known_selector, signature in KNOWN_SIGNATURES.items():
        table.add_row(known_selector, signature_to_name(signature), escape(signature))

    Console().print(table)
