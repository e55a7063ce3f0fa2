"""
Estimation Rule Tests

Tests verify:
- Cost lookup for every damage type x severity, with "Other" fallback
- Unknown severity falls back to the low band member
- Aggregate risk level = max of constituent levels, LOW when empty
- Recommendations flattened in catalog order, duplicates kept
- Budget matching thresholds, unparseable and oversized budgets
- Contractor tier boundaries
"""

import pytest

from damage_aid.catalog import (
    COST_BANDS,
    HEALTH_RISKS,
    ContractorTier,
    DamageType,
    HealthRisk,
    RiskLevel,
    Severity,
)
from damage_aid.rules.estimator import (
    BUDGET_CLOSE_RATIO,
    BUDGET_WITHIN_RATIO,
    MAX_BUDGET_DIGITS,
    BudgetMatch,
    aggregate_risk_level,
    estimate_cost,
    health_risks_for,
    match_budget,
    parse_budget,
    recommendations_for,
    resolve_damage_type,
    resolve_risks,
    select_contractors,
    select_tier,
)


def make_risk(level: RiskLevel, *recommendations: str) -> HealthRisk:
    """Build a throwaway HealthRisk."""
    return HealthRisk(
        type=f"{level.value} risk",
        level=level,
        description="test risk",
        recommendations=list(recommendations),
    )


class TestCostEstimator:
    """Test cost band lookup."""

    @pytest.mark.parametrize("damage_type", list(COST_BANDS))
    def test_every_type_and_severity(self, damage_type):
        """Minor/Moderate/Severe map to low/medium/high."""
        band = COST_BANDS[damage_type]

        assert estimate_cost(damage_type, Severity.MINOR) == band.low
        assert estimate_cost(damage_type, Severity.MODERATE) == band.medium
        assert estimate_cost(damage_type, Severity.SEVERE) == band.high

    def test_accepts_plain_string_labels(self):
        """Raw strings resolve the same as enum members."""
        assert estimate_cost("Water Damage", "Severe") == 15000
        assert estimate_cost("Fire Damage", "Moderate") == 25000
        assert estimate_cost("Electrical Damage", "Minor") == 1500

    def test_unknown_damage_type_uses_other_band(self):
        """Labels outside the catalog degrade to the Other band."""
        other = COST_BANDS[DamageType.OTHER]

        assert estimate_cost("Meteor Strike", "Minor") == other.low
        assert estimate_cost("Meteor Strike", "Moderate") == other.medium
        assert estimate_cost("Meteor Strike", "Severe") == other.high

    def test_unknown_severity_falls_back_to_low(self):
        """Unrecognized severity selects the low member."""
        assert estimate_cost("Fire Damage", "Catastrophic") == 5000
        assert estimate_cost("Fire Damage", "") == 5000
        assert estimate_cost("Fire Damage", None) == 5000

    def test_flood_damage_alias(self):
        """'Flood Damage' is priced as Flooding."""
        assert resolve_damage_type("Flood Damage") == DamageType.FLOODING
        assert estimate_cost("Flood Damage", "Severe") == 85000

    def test_non_string_input_is_total(self):
        """Odd inputs never raise."""
        assert estimate_cost(None, None) == COST_BANDS[DamageType.OTHER].low
        assert resolve_damage_type(42) is None


class TestHealthRiskResolver:
    """Test risk lookup and aggregation."""

    def test_water_damage_risks(self):
        """Labels come back in catalog order with the max level."""
        labels, level = resolve_risks("Water Damage")

        assert labels == [
            "Hidden Mold Growth",
            "Compromised Water Quality",
            "Bacterial Contamination",
        ]
        assert level == RiskLevel.HIGH

    def test_roof_damage_is_medium(self):
        """Only a medium risk is catalogued for roofs."""
        labels, level = resolve_risks(DamageType.ROOF)

        assert labels == ["Water Intrusion"]
        assert level == RiskLevel.MEDIUM

    def test_type_without_risks_is_low(self):
        """Catalogued type with no risks -> empty list, LOW."""
        assert resolve_risks(DamageType.WIND) == ([], RiskLevel.LOW)

    def test_unknown_type_is_low(self):
        """Unknown type -> empty list, LOW."""
        assert resolve_risks("Alien Invasion") == ([], RiskLevel.LOW)
        assert health_risks_for("Alien Invasion") == []

    @pytest.mark.parametrize("damage_type", list(HEALTH_RISKS))
    def test_aggregate_equals_max_level(self, damage_type):
        """Aggregate equals the highest ordinal among the entries."""
        risks = HEALTH_RISKS[damage_type]
        expected = max((risk.level for risk in risks), key=lambda level: level.rank)

        _, level = resolve_risks(damage_type)

        assert level == expected

    def test_aggregate_empty_is_low(self):
        assert aggregate_risk_level([]) == RiskLevel.LOW

    def test_high_dominates_regardless_of_order(self):
        """A single HIGH pins the result whether it comes first or last."""
        low = make_risk(RiskLevel.LOW)
        medium = make_risk(RiskLevel.MEDIUM)
        high = make_risk(RiskLevel.HIGH)

        assert aggregate_risk_level([high, low, medium]) == RiskLevel.HIGH
        assert aggregate_risk_level([low, medium, high]) == RiskLevel.HIGH
        assert aggregate_risk_level([low, medium]) == RiskLevel.MEDIUM
        assert aggregate_risk_level([low, low]) == RiskLevel.LOW

    def test_returned_list_is_a_copy(self):
        """Mutating the result does not touch the catalog."""
        risks = health_risks_for(DamageType.FIRE)
        risks.clear()

        assert len(health_risks_for(DamageType.FIRE)) == 2


class TestRecommendations:
    """Test recommendation flattening."""

    @pytest.mark.parametrize("damage_type", list(HEALTH_RISKS))
    def test_length_is_sum_of_lists(self, damage_type):
        expected = sum(len(risk.recommendations) for risk in HEALTH_RISKS[damage_type])

        assert len(recommendations_for(damage_type)) == expected

    def test_catalog_order(self):
        """First risk's recommendations come first."""
        recommendations = recommendations_for("Water Damage")

        assert recommendations[:3] == [
            "Immediate water extraction",
            "Professional mold inspection with thermal imaging",
            "Use dehumidifiers",
        ]
        assert recommendations[-1] == "Professional testing"

    def test_duplicates_are_kept(self, monkeypatch):
        """The same advice from two risks appears twice."""
        monkeypatch.setitem(HEALTH_RISKS, DamageType.WIND, [
            make_risk(RiskLevel.MEDIUM, "Wear N95 masks", "Secure perimeter"),
            make_risk(RiskLevel.LOW, "Wear N95 masks"),
        ])

        assert recommendations_for(DamageType.WIND) == [
            "Wear N95 masks",
            "Secure perimeter",
            "Wear N95 masks",
        ]

    def test_unknown_type_is_empty(self):
        assert recommendations_for("Volcano") == []


class TestBudgetMatcher:
    """Test budget classification."""

    def test_named_ratios(self):
        assert BUDGET_WITHIN_RATIO == 0.8
        assert BUDGET_CLOSE_RATIO == 1.2

    def test_within_budget(self):
        assert match_budget(4000, "$5,000") == BudgetMatch.WITHIN_BUDGET

    def test_close_to_budget(self):
        assert match_budget(4800, "$5,000") == BudgetMatch.CLOSE_TO_BUDGET

    def test_over_budget(self):
        assert match_budget(7000, "$5,000") == BudgetMatch.OVER_BUDGET

    def test_unparseable_budget_is_unknown(self):
        assert match_budget(1000, "not a number") == BudgetMatch.UNKNOWN

    def test_missing_budget_is_unknown(self):
        assert match_budget(1000, None) == BudgetMatch.UNKNOWN
        assert match_budget(1000, "") == BudgetMatch.UNKNOWN

    def test_custom_ratios(self):
        """Ratios are tunable per call."""
        assert match_budget(4000, "$5,000", within_ratio=0.5) == BudgetMatch.CLOSE_TO_BUDGET
        assert match_budget(4000, "$5,000", within_ratio=0.5, close_ratio=0.6) == BudgetMatch.OVER_BUDGET

    def test_parse_strips_every_non_digit(self):
        """All digits are concatenated, including across a range."""
        assert parse_budget("$5,000") == 5000
        assert parse_budget("about 12000 dollars") == 12000
        assert parse_budget("$10,000 - $50,000") == 1000050000
        assert parse_budget("n/a") is None

    def test_exact_ratio_boundaries(self):
        """80% and 120% of the budget land inside their bands."""
        assert match_budget(4000, "$5,000") == BudgetMatch.WITHIN_BUDGET
        assert match_budget(6000, "$5,000") == BudgetMatch.CLOSE_TO_BUDGET
        assert match_budget(6001, "$5,000") == BudgetMatch.OVER_BUDGET

    def test_huge_budget_is_within(self):
        """A budget too large for a float still classifies."""
        assert match_budget(15000, "$" + "9" * 400) == BudgetMatch.WITHIN_BUDGET

    def test_digit_run_over_cap_is_unknown(self):
        """Digit runs longer than MAX_BUDGET_DIGITS are Unknown."""
        budget = "1" * 5000

        assert parse_budget(budget) is None
        assert match_budget(15000, budget) == BudgetMatch.UNKNOWN

    def test_digit_run_at_cap_parses(self):
        budget = "1" * MAX_BUDGET_DIGITS

        assert parse_budget(budget) == int(budget)
        assert match_budget(15000, budget) == BudgetMatch.WITHIN_BUDGET

    def test_string_values_match_labels(self):
        assert BudgetMatch.WITHIN_BUDGET.value == "Within Budget"
        assert BudgetMatch.UNKNOWN.value == "Unknown"


class TestContractorSelector:
    """Test contractor tier boundaries."""

    @pytest.mark.parametrize("cost,tier", [
        (0, ContractorTier.SMALL),
        (4999, ContractorTier.SMALL),
        (5000, ContractorTier.MEDIUM),
        (24999, ContractorTier.MEDIUM),
        (25000, ContractorTier.LARGE),
        (100000, ContractorTier.LARGE),
    ])
    def test_tier_boundaries(self, cost, tier):
        assert select_tier(cost) == tier

    def test_small_tier_contractors(self):
        names = [c.name for c in select_contractors(4999)]
        assert names == ["Quick Fix Repairs", "Local Handyman Co"]

    def test_medium_tier_contractors(self):
        assert [c.name for c in select_contractors(5000)] == [
            "Mid-Range Restoration",
            "Professional Repair Group",
        ]
        assert select_contractors(24999) == select_contractors(5000)

    def test_large_tier_contractors(self):
        names = [c.name for c in select_contractors(25000)]
        assert names == ["Premium Restoration Co", "Elite Construction Services"]

    def test_each_tier_has_two_entries(self):
        for cost in (1000, 10000, 50000):
            assert len(select_contractors(cost)) == 2
