"""Unit tests for jurisdiction calculations and the registry.

Property tests run every jurisdiction over a salary grid; scenario tests
pin down the quirks of individual countries.
"""

import pytest

from taxcompare.sdk import (
    UnsupportedJurisdictionError,
    InvalidCurrencyCodeError,
    calculate_tax,
    compare_jurisdictions,
    convert,
    get_country_currency,
    list_jurisdictions,
    resolve,
)
from taxcompare.sdk.taxes import CALCULATORS, calc_working_days_for_taxes


ALL_CODES = list(CALCULATORS)

# Marginal rate (percent) reported at zero income: the lowest defined rate
ZERO_INCOME_MARGINAL = {
    "no": 0,
    "au": 0,
    "fr": 0,
    "es": 19,
    "gr": 9,
    "at": 0,
    "ch": 2,
    "mx": 1.92,
    "pt": 13.25,
    "jp": 5,
    "ee": 0,
}

SALARY_GRID = [0, 1, 5000, 8400, 18200, 23365, 30000, 30001, 50000, 80000, 80001,
               120000, 250000, 250001, 500000, 1000000, 5000000, 20000000, 60000000]


def local_calculate(code, gross):
    return CALCULATORS[code](gross)


class TestProperties:
    """Invariants that hold for every jurisdiction."""

    @pytest.mark.parametrize("code", ALL_CODES)
    @pytest.mark.parametrize("gross", SALARY_GRID)
    def test_conservation(self, code, gross):
        result = local_calculate(code, gross)

        component_sum = 0.0
        for tax in result.taxes:
            component_sum += tax.amount

        assert result.total_taxes == component_sum
        assert result.net_pay + result.total_taxes == pytest.approx(result.gross_salary, abs=1e-6 * max(1, gross))

    @pytest.mark.parametrize("code", ALL_CODES)
    def test_monotonic_effective_rate(self, code):
        previous = -1.0
        for gross in SALARY_GRID:
            rate = local_calculate(code, gross).effective_tax_rate
            assert rate >= previous - 1e-9, f"{code}: effective rate fell at {gross}"
            previous = rate

    @pytest.mark.parametrize("code", ALL_CODES)
    def test_zero_income(self, code):
        result = local_calculate(code, 0)

        assert result.total_taxes == 0
        assert result.net_pay == 0
        assert result.effective_tax_rate == 0
        assert result.working_days_for_taxes == 0
        assert result.employer_tax == 0
        assert result.marginal_tax_rate == pytest.approx(ZERO_INCOME_MARGINAL[code])
        for tax in result.taxes:
            assert tax.amount == 0
            assert not tax.brackets

    @pytest.mark.parametrize("code", ALL_CODES)
    @pytest.mark.parametrize("gross", [-50000, float("nan")])
    def test_degenerate_gross_clamped(self, code, gross):
        result = local_calculate(code, gross)

        assert result.gross_salary == 0
        assert result.total_taxes == 0
        assert result.net_pay == 0

    @pytest.mark.parametrize("code", ALL_CODES)
    def test_employment_cost(self, code):
        result = local_calculate(code, 100000)

        rate = resolve(code).profile.employer.rate
        assert result.employer_tax == pytest.approx(100000 * rate)
        assert result.total_employment_cost == pytest.approx(100000 + result.employer_tax)

    @pytest.mark.parametrize("code", ALL_CODES)
    def test_periodic_breakdown(self, code):
        result = local_calculate(code, 100000)

        assert result.breakdown.per_month == pytest.approx(result.net_pay / 12)
        assert result.breakdown.per_fortnight == pytest.approx(result.net_pay / 26)
        assert result.breakdown.per_day == pytest.approx(result.net_pay / 250)
        assert result.breakdown.per_hour == pytest.approx(result.net_pay / 2000)


class TestWorkingDays:
    """Working days for taxes rounds halves up."""

    def test_rounds_to_nearest(self):
        assert calc_working_days_for_taxes(30) == 75
        assert calc_working_days_for_taxes(30.1) == 75

    def test_half_rounds_up(self):
        assert calc_working_days_for_taxes(0.2) == 1

    def test_zero(self):
        assert calc_working_days_for_taxes(0) == 0


class TestEstonia:
    """Flat 22% above the tax-free allowance."""

    def test_flat_rate_scenario(self):
        result = local_calculate("ee", 50000)

        assert result.taxable_income == 41600
        income_tax = result.component("Income Tax (Flat Rate)")
        assert income_tax.amount == pytest.approx(9152)
        assert income_tax.rate == 0.22

    def test_levies_on_gross(self):
        result = local_calculate("ee", 50000)

        assert result.component("Unemployment Insurance").amount == pytest.approx(800)
        assert result.component("Pension Contribution").amount == pytest.approx(1000)

    def test_allowance_capped_at_gross(self):
        result = local_calculate("ee", 5000)

        assert result.deductions.personal_allowance == 5000
        assert result.taxable_income == 0

    def test_employer_rate(self):
        result = local_calculate("ee", 10000)
        assert result.employer_tax == pytest.approx(3380)

    def test_marginal_is_flat_rate_above_allowance(self):
        assert local_calculate("ee", 8400).marginal_tax_rate == 0
        assert local_calculate("ee", 8401).marginal_tax_rate == pytest.approx(22)


class TestAustralia:
    """Brackets plus the Medicare levy."""

    def test_below_medicare_threshold(self):
        result = local_calculate("au", 20000)

        medicare = result.component("Medicare Levy")
        assert medicare is not None
        assert medicare.amount == 0

        income_tax = result.component("Income Tax")
        contributing = [line for line in income_tax.brackets if line.amount > 0]
        assert len(contributing) == 1
        assert contributing[0].name == "Bracket 2 (19.0%)"
        assert income_tax.amount == pytest.approx(342)

    def test_medicare_on_whole_income_above_threshold(self):
        result = local_calculate("au", 100000)
        assert result.component("Medicare Levy").amount == pytest.approx(2000)

    def test_medicare_threshold_is_strict(self):
        assert local_calculate("au", 23365).component("Medicare Levy").amount == 0
        assert local_calculate("au", 23366).component("Medicare Levy").amount == pytest.approx(467.32)

    def test_component_order(self):
        result = local_calculate("au", 100000)
        assert [t.name for t in result.taxes] == ["Income Tax", "Medicare Levy"]


class TestPortugalSurcharge:
    """Highest crossed tier applies to the whole taxable income."""

    def test_at_lower_threshold_no_surcharge(self):
        result = local_calculate("pt", 80000)
        assert result.component("Solidarity Surcharge") is None

    def test_one_above_lower_threshold(self):
        result = local_calculate("pt", 80001)

        surcharge = result.component("Solidarity Surcharge")
        assert surcharge.amount == pytest.approx(80001 * 0.025)
        assert surcharge.rate == 0.025

    def test_upper_tier_does_not_stack(self):
        result = local_calculate("pt", 250001)

        surcharge = result.component("Solidarity Surcharge")
        assert surcharge.amount == pytest.approx(250001 * 0.05)
        assert surcharge.rate == 0.05

    def test_at_upper_threshold_uses_lower_tier(self):
        surcharge = local_calculate("pt", 250000).component("Solidarity Surcharge")
        assert surcharge.rate == 0.025


class TestGreeceSolidarity:
    """Solidarity contribution above 30 000."""

    def test_at_threshold_not_listed(self):
        result = local_calculate("gr", 30000)
        assert result.component("Solidarity Contribution") is None
        assert [t.name for t in result.taxes] == ["Income Tax", "Social Security"]

    def test_above_threshold_whole_income(self):
        result = local_calculate("gr", 30001)
        assert result.component("Solidarity Contribution").amount == pytest.approx(30001 * 0.022)


class TestNorway:
    """Bracket tax on gross; general income tax on gross minus deductions."""

    def test_dual_base(self):
        result = local_calculate("no", 1000000)

        assert result.taxable_income == 1000000 - 95700 - 114540
        assert [t.name for t in result.taxes] == [
            "National Insurance",
            "Progressive Tax",
            "General Income Tax",
        ]
        assert result.component("National Insurance").amount == pytest.approx(20000)
        assert result.component("General Income Tax").amount == pytest.approx(789760 * 0.22)

        expected_bracket_tax = (
            (318300 - 226100) * 0.017
            + (725050 - 318300) * 0.04
            + (980100 - 725050) * 0.137
            + (1000000 - 980100) * 0.168
        )
        assert result.component("Progressive Tax").amount == pytest.approx(expected_bracket_tax)

    def test_marginal_on_gross(self):
        assert local_calculate("no", 1000000).marginal_tax_rate == pytest.approx(16.8)

    def test_deductions_reported(self):
        result = local_calculate("no", 0)
        assert result.deductions.standard == 95700
        assert result.deductions.personal_allowance == 114540


class TestJapan:
    """Residence tax has its own base."""

    def test_residence_tax_base(self):
        result = local_calculate("jp", 5000000)

        assert result.taxable_income == 4520000
        assert result.component("Residence Tax").amount == pytest.approx(457000)
        assert result.component("Social Insurance").amount == pytest.approx(675000)

    def test_marginal_on_taxable_income(self):
        # gross 2 400 000 -> taxable 1 920 000, still in the 5% bracket
        assert local_calculate("jp", 2400000).marginal_tax_rate == pytest.approx(5)
        assert local_calculate("jp", 2500000).marginal_tax_rate == pytest.approx(10)


class TestRegistry:
    """Identifier resolution."""

    @pytest.mark.parametrize("identifier", ["no", "NO", "Norway", " norway ", "NORWAY"])
    def test_resolves_code_and_name(self, identifier):
        assert resolve(identifier).code == "no"

    def test_multi_word_name(self):
        assert resolve("Switzerland").code == "ch"

    @pytest.mark.parametrize("identifier", ["xx", "", "usa", "Narnia"])
    def test_unsupported(self, identifier):
        with pytest.raises(UnsupportedJurisdictionError) as exc_info:
            resolve(identifier)
        assert exc_info.value.identifier == identifier

    def test_error_message(self):
        with pytest.raises(UnsupportedJurisdictionError, match="Country xx not supported"):
            resolve("xx")

    def test_list_order(self):
        assert [j.code for j in list_jurisdictions()] == ALL_CODES

    def test_country_currency(self):
        assert get_country_currency("no") == "NOK"
        assert get_country_currency("Japan") == "JPY"
        assert get_country_currency("ee") == "EUR"


class TestCalculateTax:
    """Top-level calculation with currency conversion."""

    def test_local_currency_default(self):
        data = calculate_tax("no", 1000000)

        assert data.display_currency == "NOK"
        assert data.local_salary == 1000000
        assert data.exchange_rate == 1
        assert data.result.gross_salary == 1000000

    def test_converts_salary_to_local(self):
        data = calculate_tax("Norway", 100000, "aud")

        assert data.country == "no"
        assert data.display_currency == "AUD"
        assert data.local_currency == "NOK"
        assert data.local_salary == pytest.approx(680000)
        assert data.result.gross_salary == data.local_salary

    def test_unsupported_country(self):
        with pytest.raises(UnsupportedJurisdictionError):
            calculate_tax("xx", 100000)

    def test_invalid_currency(self):
        with pytest.raises(InvalidCurrencyCodeError):
            calculate_tax("no", 100000, "ZZZ")


class TestCompareJurisdictions:
    """Cross-country ranking."""

    def test_all_countries_sorted(self):
        summaries = compare_jurisdictions(100000, "AUD")

        assert len(summaries) == len(ALL_CODES)
        rates = [s.effective_tax_rate for s in summaries]
        assert rates == sorted(rates)

    def test_amounts_in_display_currency(self):
        summaries = compare_jurisdictions(100000, "AUD", ["no"])

        summary = summaries[0]
        assert summary.display_currency == "AUD"
        assert summary.local_currency == "NOK"
        assert summary.net_pay == pytest.approx(convert(summary.result.net_pay, "NOK", "AUD"))
        assert summary.net_pay + summary.total_taxes == pytest.approx(100000)

    def test_duplicates_collapsed(self):
        summaries = compare_jurisdictions(100000, "EUR", ["no", "Norway", "ee"])
        assert sorted(s.code for s in summaries) == ["ee", "no"]

    def test_bad_identifier_fails(self):
        with pytest.raises(UnsupportedJurisdictionError):
            compare_jurisdictions(100000, "AUD", ["no", "xx"])
