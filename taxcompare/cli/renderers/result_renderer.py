"""Rich renderers for tax calculations and comparisons.

Transforms SDK results into formatted Rich tables.
"""

from typing import List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from taxcompare.sdk.formatting import format_currency_with_symbol, format_rate
from taxcompare.sdk.jurisdictions import Jurisdiction
from taxcompare.sdk.schemas import ConvertedTaxResult, JurisdictionSummary


def render_tax_result(console: Console, jurisdiction: Jurisdiction, data: ConvertedTaxResult) -> None:
    """Render a single-country calculation as Rich tables.

    Args:
        console: Rich Console instance
        jurisdiction: Jurisdiction the calculation was run for
        data: SDK output from calculate_tax()
    """
    display = jurisdiction.display

    if data.display_currency != data.local_currency:
        console.print(Panel(
            f"{_fmt(data.salary, data.display_currency)} = "
            f"{_fmt(data.local_salary, data.local_currency)} "
            f"(1 {data.display_currency} = {data.exchange_rate:.4f} {data.local_currency})",
            title="Conversion",
            border_style="dim",
        ))

    _render_taxes_table(console, f"{display.flag} {display.name} ({display.location})", data)
    _render_summary(console, jurisdiction, data)


def _render_taxes_table(console: Console, title: str, data: ConvertedTaxResult) -> None:
    """Render the itemized tax components with their bracket lines."""
    result = data.result
    currency = data.local_currency

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("", style="bold", min_width=30)
    table.add_column("Rate", justify="right", min_width=8)
    table.add_column("Amount", justify="right", min_width=14)

    table.add_row("Gross Salary", "", _fmt(result.gross_salary, currency))
    if result.deductions.standard:
        table.add_row("  Standard Deduction", "", _fmt(result.deductions.standard, currency), style="dim")
    if result.deductions.personal_allowance:
        table.add_row("  Personal Allowance", "", _fmt(result.deductions.personal_allowance, currency), style="dim")
    table.add_row("Taxable Income", "", _fmt(result.taxable_income, currency))
    table.add_row("", "", "")

    table.add_row("[bold]TAXES[/bold]", "", "")
    for tax in result.taxes:
        rate = format_rate(tax.rate * 100) if tax.rate is not None else ""
        table.add_row(f"  {tax.name}", rate, _fmt(tax.amount, currency))
        for line in tax.brackets or ():
            table.add_row(f"    [dim]{line.name}[/dim]", "", f"[dim]{_fmt(line.amount, currency)}[/dim]")

    table.add_row(
        "  [dim]Total Taxes[/dim]",
        "",
        f"[dim]{_fmt(result.total_taxes, currency)}[/dim]",
    )
    table.add_row("", "", "")
    table.add_row(
        "[bold green]NET PAY[/bold green]",
        "",
        f"[bold green]{_fmt(result.net_pay, currency)}[/bold green]",
    )

    console.print(table)


def _render_summary(console: Console, jurisdiction: Jurisdiction, data: ConvertedTaxResult) -> None:
    """Render rates, employer cost and periodic net pay."""
    result = data.result
    currency = data.local_currency
    display = jurisdiction.display

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("Effective Tax Rate", format_rate(result.effective_tax_rate))
    table.add_row("Marginal Tax Rate", format_rate(result.marginal_tax_rate))
    table.add_row("Days Working for Taxes", str(result.working_days_for_taxes))
    table.add_row("", "")
    table.add_row(f"Employer Cost ({display.employer_rate})", _fmt(result.employer_tax, currency))
    table.add_row("Total Employment Cost", _fmt(result.total_employment_cost, currency))
    table.add_row("", "")
    table.add_row("Net per Month", _fmt(result.breakdown.per_month, currency))
    table.add_row("Net per Fortnight", _fmt(result.breakdown.per_fortnight, currency))
    table.add_row("Net per Day", _fmt(result.breakdown.per_day, currency))
    table.add_row("Net per Hour", _fmt(result.breakdown.per_hour, currency))

    console.print(Panel(table, title="Summary", subtitle=display.employer_note, border_style="dim"))


def render_comparison(console: Console, summaries: List[JurisdictionSummary], salary: float, currency: str) -> None:
    """Render a ranking of jurisdictions, lowest effective rate first.

    Args:
        console: Rich Console instance
        summaries: SDK output from compare_jurisdictions()
        salary: Salary as entered
        currency: Display currency
    """
    table = Table(
        title=f"Tax Comparison: {_fmt(salary, currency)} gross",
        box=box.ROUNDED,
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Country", min_width=18)
    table.add_column("Effective", justify="right")
    table.add_column("Marginal", justify="right")
    table.add_column("Taxes", justify="right", min_width=12)
    table.add_column("Net Pay", justify="right", min_width=12, style="green")
    table.add_column("Employer Cost", justify="right", min_width=12)

    for rank, summary in enumerate(summaries, start=1):
        table.add_row(
            str(rank),
            f"{summary.flag} {summary.name}",
            format_rate(summary.effective_tax_rate),
            format_rate(summary.marginal_tax_rate),
            _fmt(summary.total_taxes, currency),
            _fmt(summary.net_pay, currency),
            _fmt(summary.total_employment_cost, currency),
        )

    console.print(table)


def render_countries(console: Console, jurisdictions: List[Jurisdiction]) -> None:
    """Render the list of supported jurisdictions."""
    table = Table(title="Supported Countries", box=box.ROUNDED)
    table.add_column("Code", style="bold")
    table.add_column("Country")
    table.add_column("Location", style="dim")
    table.add_column("Currency")
    table.add_column("Employer Rate", justify="right")

    for jurisdiction in jurisdictions:
        display = jurisdiction.display
        table.add_row(
            jurisdiction.code,
            f"{display.flag} {display.name}",
            display.location,
            jurisdiction.currency,
            display.employer_rate,
        )

    console.print(table)


def render_brackets(console: Console, jurisdiction: Jurisdiction) -> None:
    """Render a jurisdiction's income tax bracket table."""
    currency = jurisdiction.currency
    display = jurisdiction.display

    table = Table(title=f"{display.flag} {display.name} Tax Brackets", box=box.ROUNDED)
    table.add_column("From", justify="right", min_width=12)
    table.add_column("To", justify="right", min_width=12)
    table.add_column("Rate", justify="right")

    for bracket in jurisdiction.brackets:
        upper = _fmt(bracket.max, currency) if bracket.max is not None else "and above"
        table.add_row(_fmt(bracket.min, currency), upper, format_rate(bracket.rate * 100))

    console.print(table)


def _fmt(amount: float, currency: str) -> str:
    """Format currency amount."""
    return format_currency_with_symbol(amount, currency)
