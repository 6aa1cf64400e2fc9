"""Settings CLI commands for Tax Compare.

Manages settings.json - default currency, default country, output format.
"""

import click

from taxcompare.sdk import (
    KNOWN_SETTINGS,
    TaxCompareError,
    load_settings,
    set_setting,
    unset_setting,
    get_settings_path,
    get_default_currency,
    get_output_format,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - default_currency: currency for 'compare' and '--currency' (default AUD)
    - default_country: country used when COUNTRY is omitted
    - output_format: 'text' or 'json' (default text)
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective defaults:")
    click.echo(f"  default_currency: {get_default_currency()}")
    click.echo(f"  default_country: {current.get('default_country') or '(none)'}")
    click.echo(f"  output_format: {get_output_format()}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
@click.argument("value")
def settings_set(key, value):
    """Set a setting.

    Examples:
        tax-compare settings set default_currency eur
        tax-compare settings set default_country Norway
    """
    try:
        path = set_setting(key, value)
    except (ValueError, TaxCompareError) as e:
        raise click.ClickException(str(e))

    click.echo(f"Set {key}: {load_settings()[key]}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key")
def settings_unset(key):
    """Remove a setting, reverting to its default."""
    if unset_setting(key):
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
