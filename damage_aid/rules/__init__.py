"""
Rules Module — Damage Estimation Engine

Public API:
- estimate_cost: Damage type + severity -> repair cost
- resolve_risks: Damage type -> (risk labels, aggregate level)
- recommendations_for: Damage type -> flattened recommendations
- match_budget: Cost + budget string -> BudgetMatch
- select_contractors: Cost -> contractor tier list
- DamageAssessor: Composes the rules into estimates and assessments
"""

from .estimator import (
    BUDGET_WITHIN_RATIO,
    BUDGET_CLOSE_RATIO,
    BudgetMatch,
    aggregate_risk_level,
    cost_band_for,
    estimate_cost,
    health_risks_for,
    match_budget,
    parse_budget,
    recommendations_for,
    resolve_damage_type,
    resolve_risks,
    resolve_severity,
    select_contractors,
    select_tier,
)
from .assessor import (
    Assessment,
    DamageAssessor,
    DamageEstimate,
    Profile,
)

__all__ = [
    "BUDGET_WITHIN_RATIO",
    "BUDGET_CLOSE_RATIO",
    "BudgetMatch",
    "aggregate_risk_level",
    "cost_band_for",
    "estimate_cost",
    "health_risks_for",
    "match_budget",
    "parse_budget",
    "recommendations_for",
    "resolve_damage_type",
    "resolve_risks",
    "resolve_severity",
    "select_contractors",
    "select_tier",
    "Assessment",
    "DamageAssessor",
    "DamageEstimate",
    "Profile",
]
