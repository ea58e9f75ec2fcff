"""Command line for checking and resolving Keeper notations."""

import argparse
import asyncio
import logging
import sys

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from keeper_notation.config import ConfigurationError
from keeper_notation.logging import configure_logging
from keeper_notation.notation import NotationError, NotationReference, parse
from keeper_notation.resolver import ResolutionError
from keeper_notation.vault import create_vault

log = logging.getLogger(__name__)

console = Console()
errors = Console(stderr=True)


def _report(kind: str, error: Exception) -> int:
    errors.print(f"[red]{kind}:[/red] {escape(str(error))}", soft_wrap=True)
    return 1


def render_reference(ref: NotationReference) -> Table:
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("component", style="bold")
    table.add_column("value")
    table.add_row("notation", escape(ref.raw_notation))
    table.add_row("record uid", escape(ref.record_uid))
    table.add_row("category", str(ref.field_category))
    table.add_row("key", escape(ref.field_key))
    table.add_row("single value", "yes" if ref.return_single else "no")
    table.add_row("index", str(ref.array_index))
    table.add_row("dictionary key", escape(ref.dict_key or "-"))
    return table


def run_parse(notation: str) -> int:
    try:
        ref = parse(notation)
    except NotationError as e:
        return _report("Invalid notation", e)
    console.print(render_reference(ref))
    return 0


async def run_get(notation: str) -> int:
    try:
        vault = create_vault()
        value = await vault.resolve(notation)
    except ConfigurationError as e:
        return _report("Configuration error", e)
    except NotationError as e:
        return _report("Invalid notation", e)
    except ResolutionError as e:
        log.debug("Resolution failed", exc_info=True)
        return _report("Could not resolve", e)
    # Plain write so the secret isn't reflowed or styled
    sys.stdout.write(value + "\n")
    return 0


def run(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Keeper secret notation tools")
    subparsers = parser.add_subparsers(dest="command")

    parse_parser = subparsers.add_parser("parse", help="Check a notation's syntax")
    parse_parser.add_argument("notation")

    get_parser = subparsers.add_parser("get", help="Resolve a notation to its value")
    get_parser.add_argument("notation")

    args = parser.parse_args(argv)

    configure_logging()

    if args.command == "parse":
        return run_parse(args.notation)
    if args.command == "get":
        return asyncio.run(run_get(args.notation))
    parser.print_help()
    return 0


def main() -> None:  # pragma: no cover
    sys.exit(run())


if __name__ == "__main__":
    main()
