"""Tax Compare MCP Server - FastMCP implementation for tax comparison tools."""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from taxcompare.sdk import currency as sdk_currency
from taxcompare.sdk import jurisdictions as sdk_jurisdictions

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("tax-compare")


# --- Tools ---

@mcp.tool()
async def calculate_tax(
    country: str = Field(description="Country code or English name (e.g., 'no', 'Norway')"),
    salary: float = Field(description="Gross annual salary"),
    currency: str | None = Field(default=None, description="Currency the salary is in (default: the country's own)"),
) -> dict[str, Any]:
    """Calculate income tax, social contributions, net pay and employer cost for one country. Amounts in the result are in the country's local currency."""
    try:
        converted = sdk_jurisdictions.calculate_tax(country, salary, currency)
        return converted.model_dump(mode="json")

    except Exception as e:
        logger.error(f"Error calculating tax for {country}: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def compare_countries(
    salary: float = Field(description="Gross annual salary"),
    currency: str = Field(default="AUD", description="Currency the salary is in; summary amounts are returned in it too"),
    countries: list[str] | None = Field(default=None, description="Country codes or names to include (default: all)"),
) -> dict[str, Any]:
    """Compare one salary across countries. Returns summaries sorted by effective tax rate, lowest first."""
    try:
        summaries = sdk_jurisdictions.compare_jurisdictions(salary, currency, countries)

        # Nested local-currency results are omitted to keep the response small
        return {
            "currency": sdk_currency.normalize_currency(currency),
            "salary": salary,
            "countries": [s.model_dump(mode="json", exclude={"result"}) for s in summaries],
            "count": len(summaries),
        }

    except Exception as e:
        logger.error(f"Error comparing countries: {e}")
        return {"error": str(e), "countries": [], "count": 0}


@mcp.tool()
async def convert_currency(
    amount: float = Field(description="Amount to convert"),
    from_currency: str = Field(description="Source currency code (e.g., 'AUD')"),
    to_currency: str = Field(description="Target currency code (e.g., 'NOK')"),
) -> dict[str, Any]:
    """Convert an amount between supported currencies using the static rate table."""
    try:
        return {
            "amount": amount,
            "from_currency": sdk_currency.normalize_currency(from_currency),
            "to_currency": sdk_currency.normalize_currency(to_currency),
            "converted": sdk_currency.convert(amount, from_currency, to_currency),
            "rate": sdk_currency.exchange_rate(from_currency, to_currency),
        }

    except Exception as e:
        logger.error(f"Error converting {from_currency} -> {to_currency}: {e}")
        return {"error": str(e), "converted": None}


@mcp.tool()
async def list_countries() -> dict[str, Any]:
    """List supported countries with code, name, currency and employer contribution rate."""
    try:
        countries = [
            {
                "code": j.code,
                "name": j.name,
                "flag": j.display.flag,
                "location": j.display.location,
                "currency": j.currency,
                "employer_rate": j.display.employer_rate,
            }
            for j in sdk_jurisdictions.list_jurisdictions()
        ]
        return {"countries": countries, "count": len(countries)}

    except Exception as e:
        logger.error(f"Error listing countries: {e}")
        return {"error": str(e), "countries": [], "count": 0}


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
