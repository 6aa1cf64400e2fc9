"""Tax Compare CLI - Command-line interface for cross-country tax comparison."""

import json
from typing import Optional, Tuple

import click
from rich.console import Console

from taxcompare import __version__
from taxcompare.sdk import (
    TaxCompareError,
    calculate_tax,
    compare_jurisdictions,
    convert,
    format_currency_with_symbol,
    get_default_country,
    get_default_currency,
    get_output_format,
    list_jurisdictions,
    normalize_currency,
    parse_salary,
    resolve,
)

from .renderers import render_brackets, render_comparison, render_countries, render_tax_result
from .settings_commands import settings as settings_group


FORMAT_CHOICE = click.Choice(["text", "json"])


@click.group()
@click.version_option(version=__version__, prog_name="tax-compare")
def cli():
    """Tax Compare - what a salary is worth after tax, country by country.

    Calculates income tax, social contributions and employer cost for
    eleven national tax regimes, and converts between their currencies.

    Defaults are loaded from settings.json (in order):

    \b
    1. TAX_COMPARE_CONFIG_PATH environment variable
    2. ~/.config/tax-compare/settings.json (XDG default)

    Run 'tax-compare settings show' to see the current defaults.
    """
    pass


# Add subcommand groups
cli.add_command(settings_group)


def _parse_amount(text: str, param_name: str) -> float:
    try:
        return parse_salary(text)
    except ValueError:
        raise click.BadParameter(f"'{text}' is not a number.", param_hint=param_name)


def _resolve_format(output_format: Optional[str]) -> str:
    return output_format or get_output_format()


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def parse_country_salary(args: Tuple[str, ...]) -> Tuple[str, str]:
    """Split [COUNTRY] SALARY arguments, falling back to the default country."""
    if len(args) == 2:
        return args[0], args[1]
    if len(args) == 1:
        country = get_default_country()
        if not country:
            raise click.UsageError(
                "COUNTRY is required (or set one with 'tax-compare settings set default_country <code>')."
            )
        return country, args[0]
    raise click.UsageError("Expected [COUNTRY] SALARY.")


@cli.command("calc")
@click.argument("args", nargs=-1, required=True)
@click.option("--currency", "-c", help="Currency the salary is given in (default: the country's own).")
@click.option("--format", "output_format", type=FORMAT_CHOICE, default=None, help="Output format.")
def calc(args: Tuple[str, ...], currency: Optional[str], output_format: Optional[str]):
    """Calculate taxes on a gross annual salary in one country.

    COUNTRY is a two-letter code or English name; it may be omitted when
    default_country is set. SALARY accepts grouping spaces or commas.

    \b
    Examples:
      tax-compare calc no 1000000
      tax-compare calc Australia "120 000"
      tax-compare calc pt 50000 --currency AUD
      tax-compare calc jp 8000000 --format json
    """
    country, salary_text = parse_country_salary(args)
    salary = _parse_amount(salary_text, "SALARY")

    try:
        jurisdiction = resolve(country)
        data = calculate_tax(jurisdiction.code, salary, currency)
    except TaxCompareError as e:
        raise click.ClickException(str(e))

    if _resolve_format(output_format) == "json":
        _echo_json(data.model_dump(mode="json"))
        return

    render_tax_result(Console(), jurisdiction, data)


@cli.command("compare")
@click.argument("salary")
@click.option("--currency", "-c", help="Currency the salary is given in (default: settings, then AUD).")
@click.option("--country", "countries", multiple=True, help="Limit to these countries (repeatable).")
@click.option("--format", "output_format", type=FORMAT_CHOICE, default=None, help="Output format.")
def compare(salary: str, currency: Optional[str], countries: Tuple[str, ...], output_format: Optional[str]):
    """Compare one salary across countries, lowest effective rate first.

    \b
    Examples:
      tax-compare compare 100000
      tax-compare compare 90000 --currency EUR
      tax-compare compare 100000 --country no --country ee
    """
    amount = _parse_amount(salary, "SALARY")
    display_currency = currency or get_default_currency()

    try:
        summaries = compare_jurisdictions(amount, display_currency, countries or None)
        display_currency = normalize_currency(display_currency)
    except TaxCompareError as e:
        raise click.ClickException(str(e))

    if _resolve_format(output_format) == "json":
        _echo_json([s.model_dump(mode="json") for s in summaries])
        return

    render_comparison(Console(width=140), summaries, amount, display_currency)


@cli.command("convert")
@click.argument("amount")
@click.argument("from_currency")
@click.argument("to_currency")
@click.option("--format", "output_format", type=FORMAT_CHOICE, default=None, help="Output format.")
def convert_cmd(amount: str, from_currency: str, to_currency: str, output_format: Optional[str]):
    """Convert AMOUNT from one currency to another.

    \b
    Examples:
      tax-compare convert 100000 AUD NOK
      tax-compare convert "1 000 000" jpy eur
    """
    value = _parse_amount(amount, "AMOUNT")

    try:
        source = normalize_currency(from_currency)
        target = normalize_currency(to_currency)
        converted = convert(value, source, target)
    except TaxCompareError as e:
        raise click.ClickException(str(e))

    if _resolve_format(output_format) == "json":
        _echo_json({
            "amount": value,
            "from_currency": source,
            "to_currency": target,
            "converted": converted,
        })
        return

    click.echo(
        f"{format_currency_with_symbol(value, source)} {source} = "
        f"{format_currency_with_symbol(converted, target)} {target}"
    )


@cli.command("countries")
@click.option("--format", "output_format", type=FORMAT_CHOICE, default=None, help="Output format.")
def countries(output_format: Optional[str]):
    """List supported countries with their currency and employer rate."""
    jurisdictions = list_jurisdictions()

    if _resolve_format(output_format) == "json":
        _echo_json([
            {
                "code": j.code,
                "currency": j.currency,
                **j.display.model_dump(mode="json"),
            }
            for j in jurisdictions
        ])
        return

    render_countries(Console(), jurisdictions)


@cli.command("brackets")
@click.argument("country", required=False)
@click.option("--format", "output_format", type=FORMAT_CHOICE, default=None, help="Output format.")
def brackets(country: Optional[str], output_format: Optional[str]):
    """Show a country's income tax brackets.

    COUNTRY may be omitted when default_country is set.
    """
    country = country or get_default_country()
    if not country:
        raise click.UsageError("COUNTRY is required (or set default_country).")

    try:
        jurisdiction = resolve(country)
    except TaxCompareError as e:
        raise click.ClickException(str(e))

    if _resolve_format(output_format) == "json":
        _echo_json({
            "code": jurisdiction.code,
            "currency": jurisdiction.currency,
            "brackets": [b.model_dump(mode="json") for b in jurisdiction.brackets],
        })
        return

    render_brackets(Console(), jurisdiction)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
