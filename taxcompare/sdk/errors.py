"""Error types raised by the tax engine.

The engine never catches its own errors. CLI and MCP wrappers decide how
to present them.
"""


class TaxCompareError(Exception):
    """Base class for tax engine errors."""
    pass


class UnsupportedJurisdictionError(TaxCompareError):
    """Raised when a country identifier matches no registered jurisdiction."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Country {identifier} not supported")


class InvalidCurrencyCodeError(TaxCompareError):
    """Raised when a currency code is absent from the exchange rate table."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown currency code: {code}")


class RuleFileError(TaxCompareError):
    """Raised when a tax rule file is missing or fails validation."""
    pass
