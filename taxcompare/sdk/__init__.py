"""Tax Compare SDK - Core functionality for cross-country salary tax comparison."""

from .config import (
    # Settings
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_default_currency,
    get_default_country,
    get_output_format,
    KNOWN_SETTINGS,
)

from .errors import (
    TaxCompareError,
    UnsupportedJurisdictionError,
    InvalidCurrencyCodeError,
    RuleFileError,
)

from .currency import (
    convert,
    exchange_rate,
    get_exchange_rates,
    list_currencies,
    normalize_currency,
    get_currency_name,
    get_currency_symbol,
)

from .formatting import (
    format_currency,
    format_currency_with_symbol,
    format_rate,
    parse_salary,
)

from .jurisdictions import (
    Jurisdiction,
    resolve,
    list_jurisdictions,
    get_country_currency,
    calculate_tax,
    compare_jurisdictions,
)

from .schemas import ConvertedTaxResult, JurisdictionSummary

from .taxes import TaxResult, TaxComponent, TaxBracket

__all__ = [
    # Settings
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_default_currency",
    "get_default_country",
    "get_output_format",
    "KNOWN_SETTINGS",
    # Errors
    "TaxCompareError",
    "UnsupportedJurisdictionError",
    "InvalidCurrencyCodeError",
    "RuleFileError",
    # Currency
    "convert",
    "exchange_rate",
    "get_exchange_rates",
    "list_currencies",
    "normalize_currency",
    "get_currency_name",
    "get_currency_symbol",
    # Formatting
    "format_currency",
    "format_currency_with_symbol",
    "format_rate",
    "parse_salary",
    # Jurisdictions
    "Jurisdiction",
    "resolve",
    "list_jurisdictions",
    "get_country_currency",
    "calculate_tax",
    "compare_jurisdictions",
    # Results
    "ConvertedTaxResult",
    "JurisdictionSummary",
    "TaxResult",
    "TaxComponent",
    "TaxBracket",
]
