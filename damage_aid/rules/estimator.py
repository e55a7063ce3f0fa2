"""
Damage Estimation Rules — Cost, Risk, Budget, Contractors

This is where RULES live. Every function here is a pure lookup over the
catalog tables.

Constraints:
- Total over the label space: unknown damage types and severities degrade
  to the "Other" band / empty risk list / lowest tier, never an error
- Named threshold constants (no magic numbers)
- Aggregate risk = max ordinal of constituent risks, LOW when none apply
"""

import re
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple, Union

from damage_aid.catalog import (
    COST_BANDS,
    CONTRACTOR_TIERS,
    DAMAGE_TYPE_ALIASES,
    DEFAULT_DAMAGE_TYPE,
    HEALTH_RISKS,
    TIER_LARGE_MIN_COST,
    TIER_MEDIUM_MIN_COST,
    Contractor,
    ContractorTier,
    CostBand,
    DamageType,
    HealthRisk,
    RiskLevel,
    Severity,
)


# ============================================================================
# THRESHOLD CONSTANTS
# ============================================================================

# Budget match multipliers (tunable heuristics, not guarantees)
BUDGET_WITHIN_RATIO = 0.8   # cost <= 80% of budget = within
BUDGET_CLOSE_RATIO = 1.2    # cost <= 120% of budget = close

# Severity -> CostBand member
SEVERITY_BAND_FIELD = {
    Severity.MINOR: "low",
    Severity.MODERATE: "medium",
    Severity.SEVERE: "high",
}
DEFAULT_BAND_FIELD = "low"

# Longest digit run read as a budget (Python's default int conversion limit)
MAX_BUDGET_DIGITS = 4300

_NON_DIGITS = re.compile(r"\D")


class BudgetMatch(str, Enum):
    """Heuristic comparison of estimated cost against the declared budget."""
    WITHIN_BUDGET = "Within Budget"
    CLOSE_TO_BUDGET = "Close to Budget"
    OVER_BUDGET = "Over Budget"
    UNKNOWN = "Unknown"


LabelLike = Union[DamageType, str, None]
SeverityLike = Union[Severity, str, None]


# ============================================================================
# Label Resolution
# ============================================================================

def resolve_damage_type(damage_type: LabelLike) -> Optional[DamageType]:
    """Map a label (or alias) to a catalog DamageType, None if unknown."""
    if isinstance(damage_type, DamageType):
        return damage_type
    if isinstance(damage_type, str) and damage_type in DAMAGE_TYPE_ALIASES:
        return DAMAGE_TYPE_ALIASES[damage_type]
    try:
        return DamageType(damage_type)
    except ValueError:
        return None


def resolve_severity(severity: SeverityLike) -> Optional[Severity]:
    """Map a label to a Severity, None if unrecognized."""
    try:
        return Severity(severity)
    except ValueError:
        return None


# ============================================================================
# Cost Estimator
# ============================================================================

def cost_band_for(damage_type: LabelLike) -> CostBand:
    """Return the cost band for a damage type, or the default band."""
    resolved = resolve_damage_type(damage_type)
    return COST_BANDS.get(resolved, COST_BANDS[DEFAULT_DAMAGE_TYPE])


def estimate_cost(damage_type: LabelLike, severity: SeverityLike) -> int:
    """
    Estimate repair cost for a damage type at a given severity.

    Minor -> low, Moderate -> medium, Severe -> high. An unrecognized
    severity falls back to the low member of the band.

    Args:
        damage_type: Catalog label; unknown labels use the "Other" band
        severity: Severity label

    Returns:
        Estimated cost in whole currency units
    """
    band = cost_band_for(damage_type)
    field = SEVERITY_BAND_FIELD.get(resolve_severity(severity), DEFAULT_BAND_FIELD)
    return getattr(band, field)


# ============================================================================
# Health Risk Resolver
# ============================================================================

def health_risks_for(damage_type: LabelLike) -> List[HealthRisk]:
    """Full risk records for a damage type, in catalog order."""
    resolved = resolve_damage_type(damage_type)
    return list(HEALTH_RISKS.get(resolved, []))


def aggregate_risk_level(risks: List[HealthRisk]) -> RiskLevel:
    """
    Fold risk levels to their maximum.

    LOW is the identity. Once HIGH is seen it dominates, but every entry
    is still visited.
    """
    highest = RiskLevel.LOW
    for risk in risks:
        if risk.level.rank > highest.rank:
            highest = risk.level
    return highest


def resolve_risks(damage_type: LabelLike) -> Tuple[List[str], RiskLevel]:
    """
    Resolve health risks for a damage type.

    Returns:
        (ordered risk-type labels, aggregate risk level)
    """
    risks = health_risks_for(damage_type)
    return [risk.type for risk in risks], aggregate_risk_level(risks)


# ============================================================================
# Recommendation Aggregator
# ============================================================================

def recommendations_for(damage_type: LabelLike) -> List[str]:
    """
    Flatten every risk's recommendations in catalog order.

    Duplicates across risks are kept.
    """
    return [
        recommendation
        for risk in health_risks_for(damage_type)
        for recommendation in risk.recommendations
    ]


# ============================================================================
# Budget Matcher
# ============================================================================

def parse_budget(budget: Optional[str]) -> Optional[int]:
    """
    Parse a free-form budget string into a ceiling.

    Every non-digit is stripped and the remaining digits read as one
    integer, so "$5,000" -> 5000. Returns None when no digits remain
    or more than MAX_BUDGET_DIGITS remain.
    """
    if not budget:
        return None
    digits = _NON_DIGITS.sub("", budget)
    if not digits or len(digits) > MAX_BUDGET_DIGITS:
        return None
    return int(digits)


def match_budget(
    estimated_cost: float,
    budget: Optional[str],
    within_ratio: float = BUDGET_WITHIN_RATIO,
    close_ratio: float = BUDGET_CLOSE_RATIO,
) -> BudgetMatch:
    """
    Classify an estimated cost against the user's declared budget.

    Args:
        estimated_cost: Estimated repair cost
        budget: Budget range string from the profile, or None
        within_ratio: Multiplier for the "within" ceiling
        close_ratio: Multiplier for the "close" ceiling

    Returns:
        BudgetMatch classification
    """
    ceiling = parse_budget(budget)
    if ceiling is None:
        return BudgetMatch.UNKNOWN

    # Decimal keeps arbitrarily large budgets comparable
    cost = Decimal(str(estimated_cost))
    budget_ceiling = Decimal(ceiling)
    if cost <= budget_ceiling * Decimal(str(within_ratio)):
        return BudgetMatch.WITHIN_BUDGET
    elif cost <= budget_ceiling * Decimal(str(close_ratio)):
        return BudgetMatch.CLOSE_TO_BUDGET
    else:
        return BudgetMatch.OVER_BUDGET


# ============================================================================
# Contractor Tier Selector
# ============================================================================

def select_tier(estimated_cost: float) -> ContractorTier:
    """Pick the contractor tier for a cost."""
    if estimated_cost < TIER_MEDIUM_MIN_COST:
        return ContractorTier.SMALL
    elif estimated_cost < TIER_LARGE_MIN_COST:
        return ContractorTier.MEDIUM
    else:
        return ContractorTier.LARGE


def select_contractors(estimated_cost: float) -> List[Contractor]:
    """Contractors for the tier matching the cost, in catalog order."""
    return list(CONTRACTOR_TIERS[select_tier(estimated_cost)])
