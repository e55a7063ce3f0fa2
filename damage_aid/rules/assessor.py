"""
Damage Assessment — Turn a Classification into Human Decisions

Composes the estimation rules into two outputs:
- DamageEstimate: what the results view shows for a damage type/severity
- Assessment: an immutable record of a manual damage submission

Pure deterministic logic apart from the assessment id and timestamp.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from damage_aid.catalog import CATALOG_VERSION, Contractor, HealthRisk, RiskLevel
from damage_aid.errors import AssessmentValidationError
from .estimator import (
    BUDGET_CLOSE_RATIO,
    BUDGET_WITHIN_RATIO,
    BudgetMatch,
    aggregate_risk_level,
    estimate_cost,
    health_risks_for,
    match_budget,
    recommendations_for,
    select_contractors,
)


logger = logging.getLogger(__name__)


def _label(value) -> str:
    """Plain string label for an enum member or raw string."""
    return value.value if isinstance(value, Enum) else str(value)


# ============================================================================
# Schemas
# ============================================================================

class Profile(BaseModel):
    """The person requesting the assessment."""
    name: str
    address: str
    budget: str = Field(..., description="Free-form budget range, e.g. '$10,000'")
    consent: bool = False


class DamageEstimate(BaseModel):
    """Everything derived from a damage type and severity."""
    damage_type: str
    severity: str
    estimated_cost: int = Field(..., ge=0)
    health_risks: List[HealthRisk] = Field(default_factory=list)
    risk_level: RiskLevel
    recommendations: List[str] = Field(default_factory=list)
    budget_match: BudgetMatch
    contractors: List[Contractor] = Field(default_factory=list)
    catalog_version: str = CATALOG_VERSION


class Assessment(BaseModel):
    """
    A submitted damage assessment.

    Created once on submission and never mutated afterwards.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    damage_type: str
    severity: str
    location: str
    description: str = ""
    photos: List[str] = Field(default_factory=list)
    estimated_cost: int = Field(..., ge=0)
    health_risks: List[str] = Field(default_factory=list)
    risk_level: RiskLevel
    catalog_version: str = CATALOG_VERSION

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


# ============================================================================
# Damage Assessor
# ============================================================================

class DamageAssessor:
    """
    Converts a damage classification into cost, risk and contractor advice.

    Same input = Same output.
    """

    def __init__(
        self,
        within_ratio: float = BUDGET_WITHIN_RATIO,
        close_ratio: float = BUDGET_CLOSE_RATIO,
    ):
        """
        Args:
            within_ratio: Budget multiplier for "Within Budget"
            close_ratio: Budget multiplier for "Close to Budget"
        """
        self.within_ratio = within_ratio
        self.close_ratio = close_ratio

    def estimate(
        self,
        damage_type: str,
        severity: str,
        profile: Optional[Profile] = None,
    ) -> DamageEstimate:
        """
        Build the full estimate shown on the results view.

        Args:
            damage_type: Damage type label (catalog or not)
            severity: Severity label
            profile: Optional profile; budget match is Unknown without one

        Returns:
            DamageEstimate
        """
        cost = estimate_cost(damage_type, severity)
        risks = health_risks_for(damage_type)
        budget = profile.budget if profile else None

        return DamageEstimate(
            damage_type=_label(damage_type),
            severity=_label(severity),
            estimated_cost=cost,
            health_risks=risks,
            risk_level=aggregate_risk_level(risks),
            recommendations=recommendations_for(damage_type),
            budget_match=match_budget(cost, budget, self.within_ratio, self.close_ratio),
            contractors=select_contractors(cost),
        )

    def assess(
        self,
        damage_type: str,
        severity: str,
        location: str,
        description: str = "",
        photos: Optional[List[str]] = None,
    ) -> Assessment:
        """
        Record a manual damage assessment.

        Raises:
            AssessmentValidationError: damage type, severity or location missing
        """
        if not damage_type or not severity or not location:
            logger.warning("Assessment rejected: missing required fields")
            raise AssessmentValidationError()

        risks = health_risks_for(damage_type)
        assessment = Assessment(
            damage_type=_label(damage_type),
            severity=_label(severity),
            location=location,
            description=description,
            photos=list(photos or []),
            estimated_cost=estimate_cost(damage_type, severity),
            health_risks=[risk.type for risk in risks],
            risk_level=aggregate_risk_level(risks),
        )

        logger.info(
            f"Assessment {assessment.id[:8]} recorded: "
            f"{assessment.damage_type}/{assessment.severity} "
            f"cost={assessment.estimated_cost} risk={assessment.risk_level.value} "
            f"({len(risks)} health risks)"
        )
        return assessment
