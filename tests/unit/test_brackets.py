"""Unit tests for bracket tables and progressive tax evaluation."""

import pytest

from taxcompare.sdk.taxes import (
    TaxBracket,
    calculate_progressive_tax,
    get_available_codes,
    load_profile,
    validate_bracket_table,
)


ALL_CODES = ["no", "au", "fr", "es", "gr", "at", "ch", "mx", "pt", "jp", "ee"]


def brackets(*rows):
    """Build a bracket table from (min, max, rate) tuples."""
    return tuple(TaxBracket(min=lo, max=hi, rate=rate) for lo, hi, rate in rows)


AU_BRACKETS = brackets(
    (0, 18200, 0),
    (18200, 45000, 0.19),
    (45000, 120000, 0.325),
    (120000, 180000, 0.37),
    (180000, None, 0.45),
)


class TestRuleFileBrackets:
    """Every shipped bracket table is ordered, contiguous and open-ended."""

    def test_all_jurisdictions_have_rule_files(self):
        assert sorted(ALL_CODES) == get_available_codes()

    @pytest.mark.parametrize("code", ALL_CODES)
    def test_contiguous(self, code):
        table = load_profile(code).brackets
        for current, following in zip(table, table[1:]):
            assert current.max == following.min

    @pytest.mark.parametrize("code", ALL_CODES)
    def test_last_bracket_unbounded(self, code):
        table = load_profile(code).brackets
        assert table[-1].max is None
        assert all(b.max is not None for b in table[:-1])


class TestValidateBracketTable:
    """Configuration-time checks on bracket tables."""

    def test_valid_table(self):
        validate_bracket_table(AU_BRACKETS)

    def test_empty_table(self):
        with pytest.raises(ValueError, match="empty"):
            validate_bracket_table(())

    def test_gap(self):
        with pytest.raises(ValueError, match="starts at"):
            validate_bracket_table(brackets((0, 100, 0.1), (150, None, 0.2)))

    def test_unbounded_middle(self):
        with pytest.raises(ValueError, match="not the last"):
            validate_bracket_table(brackets((0, None, 0.1), (100, None, 0.2)))

    def test_bounded_last(self):
        with pytest.raises(ValueError, match="unbounded"):
            validate_bracket_table(brackets((0, 100, 0.1), (100, 200, 0.2)))

    def test_bracket_max_must_exceed_min(self):
        with pytest.raises(ValueError):
            TaxBracket(min=100, max=100, rate=0.1)


class TestCalculateProgressiveTax:
    """Bracket evaluation semantics."""

    def test_zero_income_no_lines(self):
        result = calculate_progressive_tax(0, AU_BRACKETS)
        assert result.total_tax == 0
        assert result.breakdown == ()

    def test_second_bracket_only_contributes(self):
        """20 000 sits in the 19% bracket; the 0% bracket adds nothing."""
        result = calculate_progressive_tax(20000, AU_BRACKETS)

        assert result.total_tax == pytest.approx(1800 * 0.19)
        contributing = [line for line in result.breakdown if line.amount > 0]
        assert [line.name for line in contributing] == ["Bracket 2 (19.0%)"]

    def test_income_at_lower_bound_pays_nothing_in_bracket(self):
        result = calculate_progressive_tax(45000, AU_BRACKETS)

        names = [line.name for line in result.breakdown]
        assert "Bracket 3 (32.5%)" not in names
        assert result.total_tax == pytest.approx(26800 * 0.19)

    def test_top_bracket(self):
        result = calculate_progressive_tax(200000, AU_BRACKETS)

        expected = 26800 * 0.19 + 75000 * 0.325 + 60000 * 0.37 + 20000 * 0.45
        assert result.total_tax == pytest.approx(expected)
        assert len(result.breakdown) == 5
        assert result.breakdown[-1].name == "Bracket 5 (45.0%)"

    def test_total_is_sum_of_lines(self):
        result = calculate_progressive_tax(150000, AU_BRACKETS)
        assert result.total_tax == pytest.approx(sum(line.amount for line in result.breakdown))

    def test_income_below_first_bracket(self):
        """Norway's bracket tax starts above zero."""
        table = load_profile("no").brackets
        result = calculate_progressive_tax(200000, table)
        assert result.total_tax == 0
        assert result.breakdown == ()

    def test_line_names_round_half_up(self):
        table = brackets((0, 100, 0.1325), (100, None, 0.2))
        result = calculate_progressive_tax(50, table)
        assert result.breakdown[0].name == "Bracket 1 (13.3%)"
