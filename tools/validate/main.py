"""
CLI tool to validate barcode strings.

Usage:
    python -m tools.validate.main 1234567890128
    python -m tools.validate.main --adapter code39 --checksum 159AZH
    python -m tools.validate.main --adapter issn --format json 1144875X 1144874X
    python -m tools.validate.main --list
"""

import json
import sys

import click

from barcheck import Barcode, ConfigurationError
from barcheck.barcode import available_symbologies
from barcheck.config import configure_logging, get_logger

logger = get_logger(__name__)


def validate_codes(validator: Barcode, codes: tuple[str, ...]) -> list[dict[str, object]]:
    """
    Validate each code and collect the results.

    Returns a list of dicts with code, valid and the failure reasons.
    """
    results: list[dict[str, object]] = []
    for code in codes:
        valid = validator.is_valid(code)
        results.append({
            "code": code,
            "valid": valid,
            "reasons": {str(key.value): message for key, message in validator.get_failure_reasons().items()},
        })
    return results


def format_text(results: list[dict[str, object]]) -> str:
    """Format results as one tab-separated line per code."""
    lines = []
    for row in results:
        if row["valid"]:
            lines.append(f"{row['code']}\tvalid")
        else:
            reasons = "; ".join(row["reasons"].values())
            lines.append(f"{row['code']}\tinvalid\t{reasons}")
    return "\n".join(lines)


@click.command()
@click.argument("codes", nargs=-1)
@click.option(
    "--adapter", "-a",
    default=None,
    help="Symbology name or adapter import path (default: BARCHECK_DEFAULT_ADAPTER)",
)
@click.option(
    "--checksum/--no-checksum",
    default=None,
    help="Force checksum verification on or off (default: symbology default)",
)
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text)",
)
@click.option(
    "--list", "list_symbologies",
    is_flag=True,
    help="List built-in symbologies and exit",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    codes: tuple[str, ...],
    adapter: str | None,
    checksum: bool | None,
    output_format: str,
    list_symbologies: bool,
    verbose: bool,
) -> None:
    """Validate barcode strings against a symbology."""
    configure_logging(level="DEBUG" if verbose else None)

    if list_symbologies:
        click.echo("\n".join(available_symbologies()))
        return

    if not codes:
        click.echo("No codes given", err=True)
        sys.exit(2)

    try:
        validator = Barcode({"adapter": adapter, "useChecksum": checksum})
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    results = validate_codes(validator, codes)
    invalid = sum(1 for row in results if not row["valid"])
    logger.debug("Validated codes", total=len(results), invalid=invalid)

    if output_format == "json":
        click.echo(json.dumps(results, indent=2))
    else:
        click.echo(format_text(results))

    if invalid:
        sys.exit(1)


if __name__ == "__main__":
    main()
