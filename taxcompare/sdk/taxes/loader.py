"""Rule file loading.

Jurisdiction profiles and the exchange rate table live in
taxcompare/tax_rules/*.yaml. Each file is parsed and validated once per
process; callers share the resulting frozen models.
"""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..errors import RuleFileError
from .schemas import ExchangeRateTable, JurisdictionProfile

logger = logging.getLogger(__name__)

CURRENCIES_FILENAME = "currencies.yaml"


def _get_tax_rules_dir() -> Path:
    """Get the tax_rules directory path."""
    package_root = Path(__file__).parent.parent.parent  # taxes -> sdk -> taxcompare
    return package_root / "tax_rules"


def _read_rule_file(path: Path) -> dict:
    if not path.exists():
        raise RuleFileError(f"Rule file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise RuleFileError(f"Rule file {path.name} must contain a mapping")
    return data


def get_available_codes() -> list[str]:
    """List jurisdiction codes that have a rule file, sorted."""
    rules_dir = _get_tax_rules_dir()
    return sorted(p.stem for p in rules_dir.glob("*.yaml") if p.name != CURRENCIES_FILENAME)


@lru_cache(maxsize=None)
def load_profile(code: str) -> JurisdictionProfile:
    """Load and validate the rule file for a jurisdiction code.

    Args:
        code: Lowercase two-letter jurisdiction code (e.g., "no")

    Returns:
        Validated, frozen JurisdictionProfile

    Raises:
        RuleFileError: If the file is missing or fails schema validation
    """
    path = _get_tax_rules_dir() / f"{code}.yaml"
    data = _read_rule_file(path)

    try:
        profile = JurisdictionProfile.model_validate(data)
    except ValidationError as e:
        raise RuleFileError(f"Invalid rule file {path.name}:\n{e}") from e

    if profile.code != code:
        raise RuleFileError(f"Rule file {path.name} declares code '{profile.code}'")

    logger.debug(f"loaded rules for {code}: {len(profile.brackets)} brackets, {len(profile.levies)} levies")
    return profile


@lru_cache(maxsize=None)
def load_exchange_rates() -> ExchangeRateTable:
    """Load and validate the static exchange rate table."""
    path = _get_tax_rules_dir() / CURRENCIES_FILENAME
    data = _read_rule_file(path)

    try:
        table = ExchangeRateTable.model_validate(data)
    except ValidationError as e:
        raise RuleFileError(f"Invalid rule file {path.name}:\n{e}") from e

    logger.debug(f"loaded exchange rates: pivot {table.pivot}, {len(table.currencies)} currencies")
    return table
